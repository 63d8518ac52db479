"""Habit store protocol."""

from __future__ import annotations

from typing import Optional, Protocol

from ...errors import ValidationError
from ...models.habit import HABIT_NAME_MAX_LENGTH, Habit, HabitCompletion
from ...services.clock import DateLike


def normalize_habit_name(name: str | None) -> str:
    """Trim a habit name and reject it if nothing is left or it is too long."""

    cleaned = (name or "").strip()
    if not cleaned:
        raise ValidationError("Habit name cannot be empty")
    if len(cleaned) > HABIT_NAME_MAX_LENGTH:
        raise ValidationError(f"Habit name cannot exceed {HABIT_NAME_MAX_LENGTH} characters")
    return cleaned


class HabitStore(Protocol):
    """Sole gateway to persisted habits and their completions."""

    def create_habit(self, name: str) -> Habit:
        """Create an active habit with a trimmed, non-empty name."""
        ...

    def get_habit(self, habit_id: int) -> Optional[Habit]:
        """Retrieve a habit by ID, archived or not."""
        ...

    def list_habits(self, include_archived: bool = False) -> list[Habit]:
        """List habits in creation order."""
        ...

    def list_active_habits(self) -> list[Habit]:
        """List non-archived habits in creation order."""
        ...

    def rename_habit(self, habit_id: int, name: str) -> Habit:
        """Change a habit's display name."""
        ...

    def archive_habit(self, habit_id: int) -> None:
        """Hide a habit from active queries, keeping its completions."""
        ...

    def restore_habit(self, habit_id: int) -> Habit:
        """Bring an archived habit back into active queries."""
        ...

    # Completion operations
    def add_completion(self, habit_id: int, when: DateLike) -> HabitCompletion:
        """Mark an active habit done on the calendar day of ``when``."""
        ...

    def remove_completion(self, habit_id: int, when: DateLike) -> None:
        """Remove every completion of the habit on that day, if any."""
        ...

    def completions_in_range(self, start: DateLike, end: DateLike) -> list[HabitCompletion]:
        """Completions with ``start <= completed_at < end``, oldest first."""
        ...

    def completions_for_habit(
        self, habit_id: int, start: DateLike, end: DateLike
    ) -> list[HabitCompletion]:
        """Completions for one habit within ``[start, end)``, oldest first."""
        ...
