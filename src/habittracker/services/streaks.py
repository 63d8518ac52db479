"""Habit streak statistics derived from completion history."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterable

from ..domain.repositories.habit import HabitStore
from ..errors import NotFoundError


@dataclass(slots=True)
class HabitStreak:
    habit_id: int
    current: int
    longest: int
    total: int


def compute_streaks(days: Iterable[date], *, today: date | None = None) -> tuple[int, int]:
    """Return (current_streak, longest_streak) from a collection of completed days."""

    today = today or date.today()
    completed = set(days)

    # Current streak: walk backwards from today until a gap.
    current = 0
    cursor = today
    while cursor in completed:
        current += 1
        cursor -= timedelta(days=1)

    # Longest streak: sweep through sorted days, counting consecutive runs.
    longest = 0
    run = 0
    last_day: date | None = None
    for d in sorted(completed):
        if last_day is not None and d == last_day + timedelta(days=1):
            run += 1
        else:
            run = 1
        longest = max(longest, run)
        last_day = d

    return current, longest


def habit_streaks(store: HabitStore, habit_id: int, *, today: date | None = None) -> HabitStreak:
    """Streak summary for one habit, archived habits included."""

    habit = store.get_habit(habit_id)
    if habit is None:
        raise NotFoundError(habit_id)

    today = today or date.today()
    history = store.completions_for_habit(habit_id, date.min, today + timedelta(days=1))
    days = [row.completed_on for row in history]
    current, longest = compute_streaks(days, today=today)
    return HabitStreak(habit_id=habit_id, current=current, longest=longest, total=len(set(days)))


__all__ = ["HabitStreak", "compute_streaks", "habit_streaks"]
