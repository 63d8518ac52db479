"""Settings repository protocol."""

from __future__ import annotations

from typing import Optional, Protocol

from ...models.settings import AppSetting


class SettingsRepository(Protocol):
    """Key/value store for application flags."""

    def get(self, key: str) -> Optional[AppSetting]:
        """Retrieve a setting by key."""
        ...

    def set(self, key: str, value: str, description: str | None = None) -> AppSetting:
        """Insert or overwrite a setting."""
        ...

    def delete(self, key: str) -> None:
        """Remove a setting if present."""
        ...
