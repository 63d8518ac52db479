"""SQLModel implementation of the habit store."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from ...domain.repositories.habit import normalize_habit_name
from ...errors import DuplicateError, NotFoundError
from ...infra.database import SessionFactory
from ...logging_config import get_logger
from ...models.habit import Habit, HabitCompletion
from ...services.clock import DateLike, day_of, local_instant

logger = get_logger(__name__)


class SQLModelHabitStore:
    """SQLModel-based habit store implementation."""

    def __init__(self, session_factory: SessionFactory):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    def _require(self, session: Session, habit_id: int, *, active: bool = False) -> Habit:
        habit = session.get(Habit, habit_id)
        if habit is None:
            raise NotFoundError(habit_id)
        if active and habit.archived:
            raise NotFoundError(habit_id, f"Habit {habit_id} is archived")
        return habit

    def create_habit(self, name: str) -> Habit:
        """Create an active habit with a trimmed, non-empty name."""
        cleaned = normalize_habit_name(name)
        with self.session_factory() as session:
            habit = Habit(name=cleaned, created_at=datetime.now(), archived=False)
            session.add(habit)
            session.commit()
            session.refresh(habit)
            session.expunge(habit)
        logger.info("Habit created", extra={"habit_id": habit.id, "habit_name": habit.name})
        return habit

    def get_habit(self, habit_id: int) -> Optional[Habit]:
        """Retrieve a habit by ID, archived or not."""
        with self.session_factory() as session:
            obj = session.get(Habit, habit_id)
            if obj:
                session.expunge(obj)
            return obj

    def list_habits(self, include_archived: bool = False) -> list[Habit]:
        """List habits in creation order."""
        with self.session_factory() as session:
            statement = select(Habit).order_by(Habit.created_at, Habit.id)  # type: ignore[arg-type]

            if not include_archived:
                statement = statement.where(Habit.archived == False)  # noqa: E712

            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def list_active_habits(self) -> list[Habit]:
        """List non-archived habits in creation order."""
        return self.list_habits(include_archived=False)

    def rename_habit(self, habit_id: int, name: str) -> Habit:
        """Change a habit's display name."""
        cleaned = normalize_habit_name(name)
        with self.session_factory() as session:
            habit = self._require(session, habit_id)
            habit.name = cleaned
            session.add(habit)
            session.commit()
            session.refresh(habit)
            session.expunge(habit)
        logger.info("Habit renamed", extra={"habit_id": habit_id, "habit_name": cleaned})
        return habit

    def archive_habit(self, habit_id: int) -> None:
        """Hide a habit from active queries, keeping its completions."""
        with self.session_factory() as session:
            habit = self._require(session, habit_id)
            if habit.archived:
                return
            habit.archived = True
            session.add(habit)
            session.commit()
        logger.info("Habit archived", extra={"habit_id": habit_id})

    def restore_habit(self, habit_id: int) -> Habit:
        """Bring an archived habit back into active queries."""
        with self.session_factory() as session:
            habit = self._require(session, habit_id)
            habit.archived = False
            session.add(habit)
            session.commit()
            session.refresh(habit)
            session.expunge(habit)
        logger.info("Habit restored", extra={"habit_id": habit_id})
        return habit

    # Completion operations
    def add_completion(self, habit_id: int, when: DateLike) -> HabitCompletion:
        """Mark an active habit done on the calendar day of ``when``."""
        day = day_of(when)
        with self.session_factory() as session:
            self._require(session, habit_id, active=True)
            existing = session.exec(
                select(HabitCompletion)
                .where(HabitCompletion.habit_id == habit_id)
                .where(HabitCompletion.completed_on == day)
            ).first()
            if existing:
                logger.warning(
                    "Rejected duplicate completion",
                    extra={"habit_id": habit_id, "day": day.isoformat()},
                )
                raise DuplicateError(habit_id, day)

            completion = HabitCompletion(
                habit_id=habit_id,
                completed_at=local_instant(when),
                completed_on=day,
            )
            session.add(completion)
            try:
                session.commit()
            except IntegrityError as exc:
                session.rollback()
                raise DuplicateError(habit_id, day) from exc
            session.refresh(completion)
            session.expunge(completion)
        logger.info("Completion added", extra={"habit_id": habit_id, "day": day.isoformat()})
        return completion

    def remove_completion(self, habit_id: int, when: DateLike) -> None:
        """Remove every completion of the habit on that day, if any."""
        day = day_of(when)
        with self.session_factory() as session:
            matches = session.exec(
                select(HabitCompletion)
                .where(HabitCompletion.habit_id == habit_id)
                .where(HabitCompletion.completed_on == day)
            ).all()
            for completion in matches:
                session.delete(completion)
            session.commit()
            removed = len(matches)
        if removed:
            logger.info(
                "Completion removed",
                extra={"habit_id": habit_id, "day": day.isoformat(), "rows": removed},
            )

    def completions_in_range(self, start: DateLike, end: DateLike) -> list[HabitCompletion]:
        """Completions with ``start <= completed_at < end``, oldest first."""
        with self.session_factory() as session:
            statement = (
                select(HabitCompletion)
                .where(HabitCompletion.completed_at >= local_instant(start))
                .where(HabitCompletion.completed_at < local_instant(end))
                .order_by(HabitCompletion.completed_at, HabitCompletion.id)  # type: ignore[arg-type]
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def completions_for_habit(
        self, habit_id: int, start: DateLike, end: DateLike
    ) -> list[HabitCompletion]:
        """Completions for one habit within ``[start, end)``, oldest first."""
        with self.session_factory() as session:
            statement = (
                select(HabitCompletion)
                .where(HabitCompletion.habit_id == habit_id)
                .where(HabitCompletion.completed_at >= local_instant(start))
                .where(HabitCompletion.completed_at < local_instant(end))
                .order_by(HabitCompletion.completed_at, HabitCompletion.id)  # type: ignore[arg-type]
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows


__all__ = ["SQLModelHabitStore"]
