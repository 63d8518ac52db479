"""Concrete repository implementations."""

from .habit import SQLModelHabitStore
from .memory import InMemoryHabitStore
from .settings import InMemorySettingsRepository, SQLModelSettingsRepository

__all__ = [
    "InMemoryHabitStore",
    "InMemorySettingsRepository",
    "SQLModelHabitStore",
    "SQLModelSettingsRepository",
]
