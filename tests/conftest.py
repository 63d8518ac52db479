"""Pytest configuration and shared fixtures for HabitTracker tests.

Provides database fixtures, store instances and habit factories for testing
the store, day queries and services without touching the real app database.
"""

from __future__ import annotations

import tempfile
import time
from datetime import date
from pathlib import Path

import pytest
from sqlmodel import SQLModel, create_engine

# Import all models to ensure they're registered with SQLModel metadata
from habittracker.models import AppSetting, Habit, HabitCompletion  # noqa: F401
from habittracker.infra.database import create_session_factory
from habittracker.infra.repositories import (
    InMemoryHabitStore,
    InMemorySettingsRepository,
    SQLModelHabitStore,
    SQLModelSettingsRepository,
)
from habittracker.services.day_query import DayQueryEngine
from habittracker.services.progress import ProgressAggregator

# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture(scope="function")
def db_engine():
    """Create an isolated SQLite database file for each test.

    Yields:
        Engine: SQLModel engine connected to test database
    """
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = Path(f.name)

    engine = create_engine(f"sqlite:///{db_path}", echo=False)
    SQLModel.metadata.create_all(engine)

    yield engine

    engine.dispose()
    db_path.unlink(missing_ok=True)


@pytest.fixture(scope="function")
def session_factory(db_engine):
    """Session factory matching the one repositories receive at runtime."""
    return create_session_factory(db_engine)


# =============================================================================
# Stores
# =============================================================================


@pytest.fixture
def sql_store(session_factory) -> SQLModelHabitStore:
    return SQLModelHabitStore(session_factory)


@pytest.fixture(params=["sqlmodel", "memory"])
def store(request, session_factory):
    """Every store implementation; tests using this run once per backend."""
    if request.param == "sqlmodel":
        return SQLModelHabitStore(session_factory)
    return InMemoryHabitStore()


@pytest.fixture(params=["sqlmodel", "memory"])
def settings_repo(request, session_factory):
    if request.param == "sqlmodel":
        return SQLModelSettingsRepository(session_factory)
    return InMemorySettingsRepository()


@pytest.fixture
def engine(store) -> DayQueryEngine:
    return DayQueryEngine(store)


@pytest.fixture
def aggregator(engine) -> ProgressAggregator:
    return ProgressAggregator(engine)


# =============================================================================
# Test Data Factories
# =============================================================================


@pytest.fixture
def habit_factory(store):
    """Factory for creating habits through the store under test.

    Returns:
        Callable: Function that creates and persists Habit instances
    """

    def _create_habit(name: str = "Test Habit", archived: bool = False) -> Habit:
        habit = store.create_habit(name)
        if archived:
            store.archive_habit(habit.id)
            habit = store.get_habit(habit.id)
        return habit

    return _create_habit


@pytest.fixture
def day() -> date:
    """A fixed past day used by scenario tests."""
    return date(2024, 1, 10)


@pytest.fixture
def utc_plus_five(monkeypatch):
    """Pin the process's local zone to UTC+05:00 for the duration of a test."""
    if not hasattr(time, "tzset"):
        pytest.skip("time.tzset is not available on this platform")
    # POSIX TZ offsets count westward, so "UTC-5" is five hours east of UTC.
    monkeypatch.setenv("TZ", "UTC-5")
    time.tzset()
    yield
    monkeypatch.undo()
    time.tzset()
