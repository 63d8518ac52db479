"""Error types raised by the habit tracking core.

Everything except :class:`PersistenceError` is recoverable and meant to be
shown to the user as a message.
"""

from __future__ import annotations


class HabitTrackerError(Exception):
    """Base class for all habit tracker errors."""


class ValidationError(HabitTrackerError, ValueError):
    """Input rejected before anything was written (e.g. a blank habit name)."""


class NotFoundError(HabitTrackerError, LookupError):
    """Referenced habit does not exist, or is archived where an active one is needed."""

    def __init__(self, habit_id: int | None, message: str | None = None) -> None:
        self.habit_id = habit_id
        super().__init__(message or f"Habit {habit_id} was not found")


class DuplicateError(HabitTrackerError):
    """A completion already exists for the habit on that calendar day."""

    def __init__(self, habit_id: int, day) -> None:
        self.habit_id = habit_id
        self.day = day
        super().__init__(f"Habit {habit_id} is already completed on {day.isoformat()}")


class PersistenceError(HabitTrackerError):
    """The storage engine failed; the original error is chained as ``__cause__``."""


__all__ = [
    "DuplicateError",
    "HabitTrackerError",
    "NotFoundError",
    "PersistenceError",
    "ValidationError",
]
