"""Dictionary-backed habit store for tests and throwaway sessions."""

from __future__ import annotations

from datetime import datetime
from itertools import count
from typing import Optional

from ...domain.repositories.habit import normalize_habit_name
from ...errors import DuplicateError, NotFoundError
from ...logging_config import get_logger
from ...models.habit import Habit, HabitCompletion
from ...services.clock import DateLike, day_of, local_instant

logger = get_logger(__name__)


def _copy_habit(habit: Habit) -> Habit:
    return Habit(id=habit.id, name=habit.name, created_at=habit.created_at, archived=habit.archived)


def _copy_completion(completion: HabitCompletion) -> HabitCompletion:
    return HabitCompletion(
        id=completion.id,
        habit_id=completion.habit_id,
        completed_at=completion.completed_at,
        completed_on=completion.completed_on,
    )


class InMemoryHabitStore:
    """Same contract as the SQLModel store, held in process memory.

    Records handed out are copies, so callers cannot mutate stored state.
    """

    def __init__(self) -> None:
        self._habits: dict[int, Habit] = {}
        self._completions: dict[int, HabitCompletion] = {}
        self._habit_ids = count(1)
        self._completion_ids = count(1)

    def _require(self, habit_id: int, *, active: bool = False) -> Habit:
        habit = self._habits.get(habit_id)
        if habit is None:
            raise NotFoundError(habit_id)
        if active and habit.archived:
            raise NotFoundError(habit_id, f"Habit {habit_id} is archived")
        return habit

    def create_habit(self, name: str) -> Habit:
        cleaned = normalize_habit_name(name)
        habit = Habit(
            id=next(self._habit_ids),
            name=cleaned,
            created_at=datetime.now(),
            archived=False,
        )
        self._habits[habit.id] = habit
        logger.info("Habit created", extra={"habit_id": habit.id, "habit_name": habit.name})
        return _copy_habit(habit)

    def get_habit(self, habit_id: int) -> Optional[Habit]:
        habit = self._habits.get(habit_id)
        return _copy_habit(habit) if habit else None

    def list_habits(self, include_archived: bool = False) -> list[Habit]:
        habits = sorted(self._habits.values(), key=lambda h: (h.created_at, h.id))
        return [_copy_habit(h) for h in habits if include_archived or not h.archived]

    def list_active_habits(self) -> list[Habit]:
        return self.list_habits(include_archived=False)

    def rename_habit(self, habit_id: int, name: str) -> Habit:
        cleaned = normalize_habit_name(name)
        habit = self._require(habit_id)
        habit.name = cleaned
        logger.info("Habit renamed", extra={"habit_id": habit_id, "habit_name": cleaned})
        return _copy_habit(habit)

    def archive_habit(self, habit_id: int) -> None:
        habit = self._require(habit_id)
        if not habit.archived:
            habit.archived = True
            logger.info("Habit archived", extra={"habit_id": habit_id})

    def restore_habit(self, habit_id: int) -> Habit:
        habit = self._require(habit_id)
        habit.archived = False
        logger.info("Habit restored", extra={"habit_id": habit_id})
        return _copy_habit(habit)

    def _matching(self, habit_id: int, when: DateLike) -> list[HabitCompletion]:
        day = day_of(when)
        return [
            c
            for c in self._completions.values()
            if c.habit_id == habit_id and c.completed_on == day
        ]

    def add_completion(self, habit_id: int, when: DateLike) -> HabitCompletion:
        self._require(habit_id, active=True)
        day = day_of(when)
        if self._matching(habit_id, day):
            logger.warning(
                "Rejected duplicate completion",
                extra={"habit_id": habit_id, "day": day.isoformat()},
            )
            raise DuplicateError(habit_id, day)
        completion = HabitCompletion(
            id=next(self._completion_ids),
            habit_id=habit_id,
            completed_at=local_instant(when),
            completed_on=day,
        )
        self._completions[completion.id] = completion
        logger.info("Completion added", extra={"habit_id": habit_id, "day": day.isoformat()})
        return _copy_completion(completion)

    def remove_completion(self, habit_id: int, when: DateLike) -> None:
        matches = self._matching(habit_id, when)
        for completion in matches:
            del self._completions[completion.id]
        if matches:
            logger.info(
                "Completion removed",
                extra={"habit_id": habit_id, "day": day_of(when).isoformat(), "rows": len(matches)},
            )

    def _in_range(self, start: DateLike, end: DateLike, habit_id: int | None = None):
        lower, upper = local_instant(start), local_instant(end)
        rows = [
            c
            for c in self._completions.values()
            if lower <= c.completed_at < upper and (habit_id is None or c.habit_id == habit_id)
        ]
        rows.sort(key=lambda c: (c.completed_at, c.id))
        return [_copy_completion(c) for c in rows]

    def completions_in_range(self, start: DateLike, end: DateLike) -> list[HabitCompletion]:
        return self._in_range(start, end)

    def completions_for_habit(
        self, habit_id: int, start: DateLike, end: DateLike
    ) -> list[HabitCompletion]:
        return self._in_range(start, end, habit_id)


__all__ = ["InMemoryHabitStore"]
