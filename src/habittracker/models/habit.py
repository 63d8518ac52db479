"""Habit tracking data structures."""

from __future__ import annotations

from datetime import date, datetime
from typing import ClassVar, Optional

from sqlalchemy import DateTime, UniqueConstraint
from sqlmodel import Field, SQLModel

HABIT_NAME_MAX_LENGTH = 80


class Habit(SQLModel, table=True):
    """A user-defined habit tracked once per calendar day."""

    __tablename__: ClassVar[str] = "habit"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(nullable=False, max_length=HABIT_NAME_MAX_LENGTH, index=True)
    created_at: datetime = Field(
        default_factory=datetime.now, sa_type=DateTime, nullable=False, index=True
    )
    archived: bool = Field(default=False, nullable=False, index=True)


class HabitCompletion(SQLModel, table=True):
    """Record that a habit was done on one calendar day.

    ``completed_at`` is a naive local timestamp stored without a zone.
    ``completed_on`` is its day and backs the one-completion-per-day
    constraint.
    """

    __tablename__: ClassVar[str] = "habit_completion"
    __table_args__ = (
        UniqueConstraint("habit_id", "completed_on", name="uq_habit_completion_day"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    habit_id: int = Field(foreign_key="habit.id", nullable=False, index=True)
    completed_at: datetime = Field(sa_type=DateTime, nullable=False, index=True)
    completed_on: date = Field(nullable=False, index=True)
