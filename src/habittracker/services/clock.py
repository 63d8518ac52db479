"""Calendar arithmetic on local days.

Every helper accepts either a ``date`` or a naive ``datetime`` (interpreted as
local time). Nothing here touches the store.
"""

from __future__ import annotations

from calendar import monthrange
from datetime import date, datetime, time, timedelta
from enum import Enum
from typing import Union

DateLike = Union[date, datetime]


class DayOrder(str, Enum):
    """Result of comparing two instants at day granularity."""

    BEFORE = "before"
    SAME = "same"
    AFTER = "after"


def local_instant(value: DateLike) -> datetime:
    """Return a naive local datetime.

    Dates mean local midnight. Aware datetimes are converted to the local zone
    and then stripped of their tzinfo.
    """

    if not isinstance(value, datetime):
        return datetime.combine(value, time.min)
    if value.tzinfo is not None:
        return value.astimezone().replace(tzinfo=None)
    return value


def day_of(value: DateLike) -> date:
    """Return the local calendar day a value falls on."""

    if isinstance(value, datetime):
        return local_instant(value).date()
    return value


def start_of_day(value: DateLike) -> datetime:
    """Truncate to local midnight."""

    return datetime.combine(day_of(value), time.min)


def is_same_day(a: DateLike, b: DateLike) -> bool:
    return day_of(a) == day_of(b)


def is_today(value: DateLike, *, today: date | None = None) -> bool:
    reference = today or date.today()
    return day_of(value) == reference


def add_days(value: DateLike, n: int) -> DateLike:
    """Step ``n`` days, keeping the input's type and time of day."""

    return value + timedelta(days=n)


def add_months(value: DateLike, n: int) -> DateLike:
    """Step ``n`` calendar months, clamping to the target month's last day."""

    month_index = value.month - 1 + n
    year = value.year + month_index // 12
    month = month_index % 12 + 1
    day = min(value.day, monthrange(year, month)[1])
    return value.replace(year=year, month=month, day=day)


def month_start(value: DateLike) -> date:
    """Return the first day of the value's month."""

    return day_of(value).replace(day=1)


def compare_day_only(a: DateLike, b: DateLike) -> DayOrder:
    """Compare two instants ignoring time of day."""

    left, right = day_of(a), day_of(b)
    if left < right:
        return DayOrder.BEFORE
    if left > right:
        return DayOrder.AFTER
    return DayOrder.SAME


__all__ = [
    "DateLike",
    "DayOrder",
    "add_days",
    "add_months",
    "compare_day_only",
    "day_of",
    "is_same_day",
    "is_today",
    "local_instant",
    "month_start",
    "start_of_day",
]
