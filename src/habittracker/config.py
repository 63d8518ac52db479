"""Application configuration objects and helpers."""

from __future__ import annotations

import calendar
import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv
from sqlalchemy.pool import StaticPool

load_dotenv()

_WEEKDAYS = {
    "monday": calendar.MONDAY,
    "sunday": calendar.SUNDAY,
}


def _env_bool(name: str, default: bool = False) -> bool:
    """Interpret environment variable values as booleans."""

    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_weekday(name: str, default: int = calendar.SUNDAY) -> int:
    """Map a weekday name from the environment to a ``calendar`` constant."""

    value = os.getenv(name)
    if value is None:
        return default
    key = value.strip().lower()
    if key not in _WEEKDAYS:
        raise ValueError(f"{name} must be one of: {', '.join(sorted(_WEEKDAYS))}")
    return _WEEKDAYS[key]


class BaseConfig:
    """Base configuration shared across environments."""

    APP_NAME = "HabitTracker"
    DB_FILENAME = "habittracker.db"
    SQLITE_PRAGMAS = {"foreign_keys": "on"}

    def __init__(self) -> None:
        self.DATA_DIR = self._resolve_data_dir()
        self.DEV_MODE = _env_bool("HABITTRACKER_DEV_MODE", default=True)
        self.FIRST_WEEKDAY = _env_weekday("HABITTRACKER_FIRST_WEEKDAY")
        self.DATABASE_URL = os.getenv("HABITTRACKER_DATABASE_URL", self._build_sqlite_url())

    def _resolve_data_dir(self) -> Path:
        """Return the directory where the SQLite file and logs live."""

        data_root = os.getenv("HABITTRACKER_DATA_DIR", "instance")
        base_path = Path(data_root).expanduser()
        try:
            path = base_path.resolve()
            path.mkdir(parents=True, exist_ok=True)
            return path
        except PermissionError:
            # Protected install locations fall back to per-user storage.
            fallback_path = Path.home() / f".{self.APP_NAME.lower()}"
            fallback_path.mkdir(parents=True, exist_ok=True)
            return fallback_path.resolve()

    def _build_sqlite_url(self) -> str:
        """Construct the default SQLite URL inside the data directory."""

        db_path = self.DATA_DIR / self.DB_FILENAME
        return f"sqlite:///{db_path}"

    @property
    def is_sqlite(self) -> bool:
        return self.DATABASE_URL.startswith("sqlite")

    @property
    def is_memory_db(self) -> bool:
        return self.DATABASE_URL in {"sqlite://", "sqlite:///:memory:"}

    def sqlalchemy_engine_options(self) -> dict[str, Any]:
        """Expose engine kwargs for SQLModel to consume."""

        engine_options: dict[str, Any] = {}
        if self.is_sqlite:
            engine_options["connect_args"] = {"check_same_thread": False}
        if self.is_memory_db:
            # One shared connection so every session sees the same in-memory schema.
            engine_options["poolclass"] = StaticPool
        return engine_options


class TestConfig(BaseConfig):
    """Throwaway in-memory database for tests and dry runs."""

    __test__ = False

    def __init__(self) -> None:
        super().__init__()
        self.DATABASE_URL = "sqlite://"
