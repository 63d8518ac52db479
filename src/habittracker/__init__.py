"""HabitTracker: daily habits, per-day completions and progress views."""

from __future__ import annotations

from .config import BaseConfig, TestConfig
from .context import AppContext, create_app_context, create_memory_context

__all__ = [
    "AppContext",
    "BaseConfig",
    "TestConfig",
    "create_app_context",
    "create_memory_context",
]
