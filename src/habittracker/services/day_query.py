"""Which habits are done on a given day, and the toggle that changes it."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Optional, Sequence

from ..domain.repositories.habit import HabitStore
from ..logging_config import get_logger
from ..models.habit import Habit
from .clock import DateLike, day_of, is_today, start_of_day

logger = get_logger(__name__)


@dataclass(slots=True)
class ToggleResult:
    """Outcome of a toggle, consumed by the presentation layer."""

    habit_id: int
    day: date
    completed: bool
    celebrate: bool = False


class DayQueryEngine:
    """Date-indexed queries over a habit store.

    All queries are computed on demand from the store; nothing is cached
    between calls.
    """

    def __init__(self, store: HabitStore):
        self.store = store

    def completions_on_date(self, habits: Sequence[Habit], when: DateLike) -> set[int]:
        """Return the ids of ``habits`` with a completion on that day."""

        start = start_of_day(when)
        rows = self.store.completions_in_range(start, start + timedelta(days=1))
        wanted = {habit.id for habit in habits}
        return {row.habit_id for row in rows if row.habit_id in wanted}

    def is_habit_completed(self, habit: Habit, when: DateLike) -> bool:
        return habit.id in self.completions_on_date([habit], when)

    def incomplete_habits(self, habits: Sequence[Habit], when: DateLike) -> list[Habit]:
        done = self.completions_on_date(habits, when)
        return [habit for habit in habits if habit.id not in done]

    def completed_habits(self, habits: Sequence[Habit], when: DateLike) -> list[Habit]:
        done = self.completions_on_date(habits, when)
        return [habit for habit in habits if habit.id in done]

    def all_completed(self, habits: Sequence[Habit], when: DateLike) -> bool:
        """True only for a non-empty habit list that is fully done that day."""

        if not habits:
            return False
        done = self.completions_on_date(habits, when)
        return all(habit.id in done for habit in habits)

    def toggle_completion(
        self,
        habit: Habit,
        when: DateLike,
        *,
        habits: Optional[Sequence[Habit]] = None,
        today: date | None = None,
    ) -> ToggleResult:
        """Flip a habit's completion for one day.

        ``habits`` is the set the celebration check runs against and defaults
        to the active habits. ``celebrate`` is set only when this toggle made
        every habit complete for today.
        """

        day = day_of(when)
        if self.is_habit_completed(habit, day):
            self.store.remove_completion(habit.id, when)
            return ToggleResult(habit_id=habit.id, day=day, completed=False)

        tracked = list(habits) if habits is not None else self.store.list_active_habits()
        was_complete = self.all_completed(tracked, day)
        self.store.add_completion(habit.id, when)

        celebrate = False
        if is_today(day, today=today) and not was_complete:
            celebrate = self.all_completed(tracked, day)
        if celebrate:
            logger.info("All habits completed for today", extra={"habit_count": len(tracked)})
        return ToggleResult(habit_id=habit.id, day=day, completed=True, celebrate=celebrate)


__all__ = ["DayQueryEngine", "ToggleResult"]
