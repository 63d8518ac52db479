"""Settings repository for app-level key/value pairs."""

from __future__ import annotations

from typing import Optional

from sqlmodel import select

from ...infra.database import SessionFactory
from ...models.settings import AppSetting


class SQLModelSettingsRepository:
    """SQLModel-based settings repository."""

    def __init__(self, session_factory: SessionFactory):
        self.session_factory = session_factory

    def get(self, key: str) -> Optional[AppSetting]:
        with self.session_factory() as session:
            setting = session.exec(select(AppSetting).where(AppSetting.key == key)).first()
            if setting:
                session.expunge(setting)
            return setting

    def set(self, key: str, value: str, description: str | None = None) -> AppSetting:
        with self.session_factory() as session:
            setting = session.exec(select(AppSetting).where(AppSetting.key == key)).first()
            if setting:
                setting.value = value
                setting.description = description
            else:
                setting = AppSetting(key=key, value=value, description=description)
            session.add(setting)
            session.commit()
            session.refresh(setting)
            session.expunge(setting)
            return setting

    def delete(self, key: str) -> None:
        with self.session_factory() as session:
            setting = session.exec(select(AppSetting).where(AppSetting.key == key)).first()
            if setting:
                session.delete(setting)
                session.commit()


class InMemorySettingsRepository:
    """Dictionary-backed settings repository paired with the in-memory habit store."""

    def __init__(self) -> None:
        self._settings: dict[str, AppSetting] = {}

    def get(self, key: str) -> Optional[AppSetting]:
        return self._settings.get(key)

    def set(self, key: str, value: str, description: str | None = None) -> AppSetting:
        setting = AppSetting(key=key, value=value, description=description)
        self._settings[key] = setting
        return setting

    def delete(self, key: str) -> None:
        self._settings.pop(key, None)


__all__ = ["InMemorySettingsRepository", "SQLModelSettingsRepository"]
