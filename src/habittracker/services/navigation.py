"""Selected-day navigation rules for the day and calendar views."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from .clock import DayOrder, add_days, add_months, compare_day_only, day_of, month_start


def can_advance(selected: date, *, today: date | None = None) -> bool:
    """True when the following day is not in the future."""

    reference = today or date.today()
    return compare_day_only(add_days(selected, 1), reference) != DayOrder.AFTER


def next_day(selected: date, *, today: date | None = None) -> date:
    """Step forward one day, or stay put when that would pass today."""

    if can_advance(selected, today=today):
        return add_days(selected, 1)
    return selected


def previous_day(selected: date) -> date:
    return add_days(selected, -1)


def previous_month(month: date) -> date:
    return add_months(month, -1)


def next_month(month: date) -> date:
    return add_months(month, 1)


@dataclass
class DayNavigator:
    """Session state for the day view and the calendar's focus month.

    Not persisted; a fresh navigator starts on today.
    """

    selected: date = field(default_factory=date.today)
    month: Optional[date] = None

    def __post_init__(self) -> None:
        self.selected = day_of(self.selected)
        self.month = month_start(self.month or self.selected)

    @property
    def can_advance(self) -> bool:
        return can_advance(self.selected)

    def forward(self, *, today: date | None = None) -> date:
        self.selected = next_day(self.selected, today=today)
        return self.selected

    def back(self) -> date:
        self.selected = previous_day(self.selected)
        return self.selected

    def jump_to_today(self, *, today: date | None = None) -> date:
        self.selected = today or date.today()
        return self.selected

    def next_month(self) -> date:
        self.month = next_month(self.month)
        return self.month

    def previous_month(self) -> date:
        self.month = previous_month(self.month)
        return self.month


__all__ = [
    "DayNavigator",
    "can_advance",
    "next_day",
    "next_month",
    "previous_day",
    "previous_month",
]
