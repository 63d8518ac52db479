"""SQLModel table exports."""

from .habit import Habit, HabitCompletion
from .settings import AppSetting

__all__ = [
    "AppSetting",
    "Habit",
    "HabitCompletion",
]
