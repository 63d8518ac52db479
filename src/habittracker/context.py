"""Application context for dependency injection."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from .config import BaseConfig
from .domain.repositories import HabitStore, SettingsRepository
from .infra.database import SessionFactory, bootstrap_database
from .infra.repositories import (
    InMemoryHabitStore,
    InMemorySettingsRepository,
    SQLModelHabitStore,
    SQLModelSettingsRepository,
)
from .services.day_query import DayQueryEngine
from .services.navigation import DayNavigator
from .services.progress import ProgressAggregator


@dataclass
class AppContext:
    """Centralized application context with services and state."""

    # Configuration
    config: BaseConfig

    # Repositories
    habit_store: HabitStore
    settings_repo: SettingsRepository

    # Services
    day_query: DayQueryEngine
    progress: ProgressAggregator

    # Session factory (absent for in-memory contexts)
    session_factory: Optional[SessionFactory] = None

    # UI state
    navigator: DayNavigator = field(default_factory=DayNavigator)

    @property
    def first_weekday(self) -> int:
        return self.config.FIRST_WEEKDAY


def _build_context(
    config: BaseConfig,
    habit_store: HabitStore,
    settings_repo: SettingsRepository,
    session_factory: Optional[SessionFactory] = None,
) -> AppContext:
    day_query = DayQueryEngine(habit_store)
    return AppContext(
        config=config,
        habit_store=habit_store,
        settings_repo=settings_repo,
        day_query=day_query,
        progress=ProgressAggregator(day_query),
        session_factory=session_factory,
    )


def create_app_context(config: Optional[BaseConfig] = None) -> AppContext:
    """Create the engine, schema and store once and wire the services around them."""

    if config is None:
        config = BaseConfig()

    _engine, session_factory = bootstrap_database(config)
    return _build_context(
        config,
        SQLModelHabitStore(session_factory),
        SQLModelSettingsRepository(session_factory),
        session_factory,
    )


def create_memory_context(config: Optional[BaseConfig] = None) -> AppContext:
    """Context backed by the in-memory stores; nothing touches disk."""

    return _build_context(
        config or BaseConfig(),
        InMemoryHabitStore(),
        InMemorySettingsRepository(),
    )
