"""Repository protocol definitions for domain layer."""

from .habit import HabitStore, normalize_habit_name
from .settings import SettingsRepository

__all__ = [
    "HabitStore",
    "SettingsRepository",
    "normalize_habit_name",
]
