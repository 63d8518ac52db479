"""Tests for day progress ratios and the month grid."""

from __future__ import annotations

import calendar
from datetime import date, timedelta

import pytest

from habittracker.services.progress import (
    GRID_DAYS,
    ProgressTier,
    month_grid,
    progress_tier,
)


class TestDayProgress:
    def test_no_habits_is_zero(self, aggregator, day):
        assert aggregator.day_progress([], day) == 0.0

    def test_two_habit_scenario(self, aggregator, engine, habit_factory, store):
        a = habit_factory("A")
        b = habit_factory("B")
        target = date(2024, 1, 10)

        store.add_completion(a.id, target)
        assert aggregator.day_progress([a, b], target) == 0.5

        store.add_completion(b.id, target)
        assert aggregator.day_progress([a, b], target) == 1.0
        assert engine.all_completed([a, b], target) is True

    def test_monotonic_as_completions_added(self, aggregator, habit_factory, store, day):
        habits = [habit_factory(f"H{i}") for i in range(4)]
        ratios = [aggregator.day_progress(habits, day)]
        for habit in habits:
            store.add_completion(habit.id, day)
            ratios.append(aggregator.day_progress(habits, day))

        assert ratios == sorted(ratios)
        assert ratios[0] == 0.0
        assert ratios[-1] == 1.0

    def test_ratio_stays_continuous(self, aggregator, habit_factory, store, day):
        habits = [habit_factory(f"H{i}") for i in range(3)]
        store.add_completion(habits[0].id, day)

        assert aggregator.day_progress(habits, day) == pytest.approx(1 / 3)

    def test_completions_of_other_habits_ignored(self, aggregator, habit_factory, store, day):
        tracked = habit_factory("Tracked")
        other = habit_factory("Other")
        store.add_completion(other.id, day)

        assert aggregator.day_progress([tracked], day) == 0.0


class TestMonthGrid:
    def test_grid_has_42_days(self):
        grid = month_grid(date(2024, 1, 15))
        assert len(grid) == GRID_DAYS == 42
        assert all(b - a == timedelta(days=1) for a, b in zip(grid, grid[1:]))

    def test_grid_starts_on_sunday_by_default(self):
        # 2024-01-01 is a Monday.
        grid = month_grid(date(2024, 1, 20))
        assert grid[0] == date(2023, 12, 31)
        assert grid[0].weekday() == calendar.SUNDAY

    def test_grid_with_monday_first(self):
        grid = month_grid(date(2024, 1, 20), first_weekday=calendar.MONDAY)
        assert grid[0] == date(2024, 1, 1)

    def test_month_starting_on_first_weekday(self):
        # 2023-10-01 is a Sunday.
        grid = month_grid(date(2023, 10, 5))
        assert grid[0] == date(2023, 10, 1)


class TestMonthProgress:
    def test_cells_match_day_progress(self, aggregator, habit_factory, store):
        a = habit_factory("A")
        b = habit_factory("B")
        store.add_completion(a.id, date(2024, 1, 10))
        store.add_completion(b.id, date(2024, 1, 10))
        store.add_completion(a.id, date(2024, 1, 11))
        store.add_completion(a.id, date(2024, 2, 2))

        cells = aggregator.month_progress([a, b], date(2024, 1, 1), today=date(2024, 1, 11))

        assert len(cells) == 42
        for cell in cells:
            assert cell.progress == aggregator.day_progress([a, b], cell.day)

        by_day = {cell.day: cell for cell in cells}
        assert by_day[date(2024, 1, 10)].tier is ProgressTier.COMPLETE
        assert by_day[date(2024, 1, 11)].tier is ProgressTier.HIGH
        assert by_day[date(2024, 1, 11)].is_today is True
        assert by_day[date(2024, 2, 2)].in_month is False
        assert by_day[date(2024, 1, 31)].in_month is True

    def test_no_habits_all_zero(self, aggregator):
        cells = aggregator.month_progress([], date(2024, 3, 1))
        assert {cell.progress for cell in cells} == {0.0}


@pytest.mark.parametrize(
    "ratio,tier",
    [
        (0.0, ProgressTier.NONE),
        (0.01, ProgressTier.LOW),
        (0.49, ProgressTier.LOW),
        (0.5, ProgressTier.HIGH),
        (0.99, ProgressTier.HIGH),
        (1.0, ProgressTier.COMPLETE),
    ],
)
def test_progress_tier_buckets(ratio, tier):
    assert progress_tier(ratio) is tier
