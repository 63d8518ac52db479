"""Tests for date-indexed habit queries and the toggle protocol."""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

import pytest

from habittracker.errors import NotFoundError


class TestCompletionQueries:
    """Which habits count as done on a given day."""

    def test_completions_on_date_filters_by_habit_list(self, engine, habit_factory, store, day):
        a = habit_factory("A")
        b = habit_factory("B")
        c = habit_factory("C")
        store.add_completion(a.id, day)
        store.add_completion(c.id, day)

        assert engine.completions_on_date([a, b], day) == {a.id}

    def test_completion_late_in_day_counts_for_that_day(self, engine, habit_factory, store, day):
        habit = habit_factory("Evening review")
        store.add_completion(habit.id, datetime.combine(day, datetime.max.time()))

        assert engine.is_habit_completed(habit, day)
        assert not engine.is_habit_completed(habit, day + timedelta(days=1))

    def test_datetime_query_uses_its_calendar_day(self, engine, habit_factory, store, day):
        habit = habit_factory("Read")
        store.add_completion(habit.id, day)

        assert engine.is_habit_completed(habit, datetime.combine(day, datetime.min.time()).replace(hour=23))

    def test_aware_completion_counts_for_its_local_day(self, engine, habit_factory, store, utc_plus_five):
        habit = habit_factory("Read")
        store.add_completion(habit.id, datetime(2024, 1, 10, 12, 0, tzinfo=timezone.utc))

        assert engine.is_habit_completed(habit, date(2024, 1, 10))
        assert not engine.is_habit_completed(habit, date(2024, 1, 11))

    def test_partition_preserves_order(self, engine, habit_factory, store, day):
        habits = [habit_factory(name) for name in ("A", "B", "C", "D")]
        store.add_completion(habits[1].id, day)
        store.add_completion(habits[3].id, day)

        assert engine.completed_habits(habits, day) == [habits[1], habits[3]]
        assert engine.incomplete_habits(habits, day) == [habits[0], habits[2]]

    def test_partition_is_exact(self, engine, habit_factory, store, day):
        habits = [habit_factory(f"Habit {i}") for i in range(5)]
        for habit in habits[::2]:
            store.add_completion(habit.id, day)

        done = engine.completed_habits(habits, day)
        todo = engine.incomplete_habits(habits, day)

        assert not {h.id for h in done} & {h.id for h in todo}
        assert sorted(h.id for h in done + todo) == sorted(h.id for h in habits)

    def test_all_completed_empty_list_is_false(self, engine, day):
        assert engine.all_completed([], day) is False

    def test_all_completed(self, engine, habit_factory, store, day):
        a = habit_factory("A")
        b = habit_factory("B")
        store.add_completion(a.id, day)
        assert engine.all_completed([a, b], day) is False

        store.add_completion(b.id, day)
        assert engine.all_completed([a, b], day) is True

    def test_archived_habit_history_still_queryable(self, engine, habit_factory, store, day):
        habit = habit_factory("Old habit")
        store.add_completion(habit.id, day)
        store.archive_habit(habit.id)

        archived = store.get_habit(habit.id)
        assert engine.is_habit_completed(archived, day)


class TestToggleCompletion:
    """The single mutation entry point for marking habits."""

    def test_toggle_adds_then_removes(self, engine, habit_factory, store, day):
        habit = habit_factory("Exercise")

        first = engine.toggle_completion(habit, day, today=day)
        assert first.completed is True
        assert engine.is_habit_completed(habit, day)

        second = engine.toggle_completion(habit, day, today=day)
        assert second.completed is False
        assert not engine.is_habit_completed(habit, day)
        assert store.completions_in_range(day, day + timedelta(days=1)) == []

    def test_toggle_never_duplicates(self, engine, habit_factory, store, day):
        habit = habit_factory("Exercise")
        for _ in range(5):
            engine.toggle_completion(habit, day)

        rows = store.completions_in_range(day, day + timedelta(days=1))
        assert len(rows) == 1

    def test_toggle_archived_habit_raises(self, engine, habit_factory, day):
        habit = habit_factory("Gone", archived=True)
        with pytest.raises(NotFoundError):
            engine.toggle_completion(habit, day)

    def test_celebrates_when_last_habit_done_today(self, engine, habit_factory, day):
        a = habit_factory("A")
        b = habit_factory("B")

        first = engine.toggle_completion(a, day, today=day)
        second = engine.toggle_completion(b, day, today=day)

        assert first.celebrate is False
        assert second.celebrate is True

    def test_celebration_fires_once(self, engine, habit_factory, day):
        a = habit_factory("A")
        b = habit_factory("B")
        engine.toggle_completion(a, day, today=day)
        results = [engine.toggle_completion(b, day, today=day)]
        # Un-marking never celebrates.
        results.append(engine.toggle_completion(a, day, today=day))

        assert [r.celebrate for r in results] == [True, False]

    def test_no_celebration_for_past_day(self, engine, habit_factory, day):
        a = habit_factory("A")
        b = habit_factory("B")
        today = day + timedelta(days=3)

        engine.toggle_completion(a, day, today=today)
        result = engine.toggle_completion(b, day, today=today)

        assert result.completed is True
        assert result.celebrate is False
        assert engine.all_completed([a, b], day)

    def test_single_habit_today_celebrates(self, engine, habit_factory):
        habit = habit_factory("Drink water")
        result = engine.toggle_completion(habit, date.today())
        assert result.celebrate is True

    def test_celebration_checks_given_habit_set(self, engine, habit_factory, day):
        a = habit_factory("A")
        habit_factory("B")

        result = engine.toggle_completion(a, day, habits=[a], today=day)

        assert result.celebrate is True
