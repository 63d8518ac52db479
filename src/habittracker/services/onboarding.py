"""First-run habit selection and the flag that records it."""

from __future__ import annotations

from typing import Iterable

from ..domain.repositories.habit import HabitStore, normalize_habit_name
from ..domain.repositories.settings import SettingsRepository
from ..errors import ValidationError
from ..logging_config import get_logger
from ..models.habit import Habit

logger = get_logger(__name__)

ONBOARDING_KEY = "onboarding_completed"
MIN_SELECTED_HABITS = 2

EXAMPLE_HABITS: tuple[str, ...] = (
    # Health & wellness
    "Drink water",
    "Exercise",
    "Meditate",
    "Get 8 hours sleep",
    "Take vitamins",
    "Stretch",
    "Walk 10,000 steps",
    "Eat vegetables",
    # Personal growth
    "Read",
    "Journal",
    "Learn something new",
    "Practice gratitude",
    "Write goals",
    # Productivity
    "Plan tomorrow",
    "No phone first hour",
    "Clear inbox",
    "Time block schedule",
    # Mindfulness
    "Deep breathing",
    "Morning reflection",
    "Evening review",
    "Digital sunset",
    # Lifestyle
    "Make bed",
    "Tidy space",
    "Cook meal",
    "Connect with friend",
)


def is_onboarding_completed(settings: SettingsRepository) -> bool:
    setting = settings.get(ONBOARDING_KEY)
    return setting is not None and setting.value == "true"


def _mark_completed(settings: SettingsRepository) -> None:
    settings.set(ONBOARDING_KEY, "true", description="First-run habit selection finished")


def complete_onboarding(
    store: HabitStore, settings: SettingsRepository, selected: Iterable[str]
) -> list[Habit]:
    """Create the chosen habits and set the onboarding flag.

    Blank entries and repeats are dropped; at least two distinct names must
    remain. Habits are created in the order given.
    """

    names: list[str] = []
    seen: set[str] = set()
    for raw in selected:
        try:
            name = normalize_habit_name(raw)
        except ValidationError:
            continue
        if name.casefold() in seen:
            continue
        seen.add(name.casefold())
        names.append(name)

    if len(names) < MIN_SELECTED_HABITS:
        raise ValidationError(f"Select at least {MIN_SELECTED_HABITS} habits to get started")

    created = [store.create_habit(name) for name in names]
    _mark_completed(settings)
    logger.info("Onboarding completed", extra={"habit_count": len(created)})
    return created


def skip_onboarding(settings: SettingsRepository) -> None:
    """Set the flag without seeding any habits."""

    _mark_completed(settings)
    logger.info("Onboarding skipped")


def reset_onboarding(settings: SettingsRepository) -> None:
    settings.delete(ONBOARDING_KEY)


__all__ = [
    "EXAMPLE_HABITS",
    "MIN_SELECTED_HABITS",
    "ONBOARDING_KEY",
    "complete_onboarding",
    "is_onboarding_completed",
    "reset_onboarding",
    "skip_onboarding",
]
