"""Completion ratios for days and calendar month grids."""

from __future__ import annotations

import calendar
from collections import defaultdict
from dataclasses import dataclass
from datetime import date, timedelta
from enum import Enum
from typing import Sequence

from ..models.habit import Habit
from .clock import DateLike, day_of, month_start
from .day_query import DayQueryEngine

GRID_WEEKS = 6
GRID_DAYS = GRID_WEEKS * 7


class ProgressTier(str, Enum):
    """Colour bucket for a day's ratio; presentation only."""

    NONE = "none"
    LOW = "low"  # (0, 0.5)
    HIGH = "high"  # [0.5, 1)
    COMPLETE = "complete"


@dataclass(slots=True)
class DayCell:
    """One square of the month calendar."""

    day: date
    progress: float
    in_month: bool
    is_today: bool

    @property
    def tier(self) -> ProgressTier:
        return progress_tier(self.progress)


def progress_tier(ratio: float) -> ProgressTier:
    """Bucket a ratio into {0, (0,0.5), [0.5,1), 1}."""

    if ratio >= 1.0:
        return ProgressTier.COMPLETE
    if ratio >= 0.5:
        return ProgressTier.HIGH
    if ratio > 0.0:
        return ProgressTier.LOW
    return ProgressTier.NONE


def month_grid(month: DateLike, *, first_weekday: int = calendar.SUNDAY) -> list[date]:
    """Return the 42 days shown for ``month``.

    The grid opens on the last ``first_weekday`` on or before the 1st, using
    the ``calendar`` module's weekday numbering (MONDAY=0 ... SUNDAY=6).
    """

    first = month_start(month)
    offset = (first.weekday() - first_weekday) % 7
    start = first - timedelta(days=offset)
    return [start + timedelta(days=i) for i in range(GRID_DAYS)]


class ProgressAggregator:
    """Turns day queries into ratios for calendar rendering."""

    def __init__(self, engine: DayQueryEngine):
        self.engine = engine

    def day_progress(self, habits: Sequence[Habit], when: DateLike) -> float:
        """Fraction of ``habits`` completed that day; 0.0 when there are none."""

        if not habits:
            return 0.0
        done = self.engine.completions_on_date(habits, when)
        return len(done) / len(habits)

    def month_progress(
        self,
        habits: Sequence[Habit],
        month: DateLike,
        *,
        first_weekday: int = calendar.SUNDAY,
        today: date | None = None,
    ) -> list[DayCell]:
        """Ratios for every cell of the month grid.

        Each cell matches ``day_progress`` for its date; completions are read
        with a single range query covering the whole grid.
        """

        grid = month_grid(month, first_weekday=first_weekday)
        focus = month_start(month)
        reference = today or date.today()

        wanted = {habit.id for habit in habits}
        done_by_day: dict[date, set[int]] = defaultdict(set)
        if wanted:
            rows = self.engine.store.completions_in_range(grid[0], grid[-1] + timedelta(days=1))
            for row in rows:
                if row.habit_id in wanted:
                    done_by_day[day_of(row.completed_at)].add(row.habit_id)

        cells = []
        for day in grid:
            ratio = len(done_by_day[day]) / len(habits) if habits else 0.0
            cells.append(
                DayCell(
                    day=day,
                    progress=ratio,
                    in_month=(day.year, day.month) == (focus.year, focus.month),
                    is_today=day == reference,
                )
            )
        return cells


__all__ = [
    "DayCell",
    "GRID_DAYS",
    "ProgressAggregator",
    "ProgressTier",
    "month_grid",
    "progress_tier",
]
