"""Date arithmetic shared by the period and payroll calculators."""

from __future__ import annotations

import calendar
import math
from dataclasses import dataclass
from datetime import date, datetime, time, timezone

SECONDS_PER_DAY = 86400


def ensure_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes (SQLite drops tzinfo on read)."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def start_of_day(value: date) -> datetime:
    """Midnight UTC at the start of ``value``."""
    return datetime.combine(value, time.min, tzinfo=timezone.utc)


def days_between(start: datetime, end: datetime) -> int:
    """Whole days between two instants, partial days rounded up.

    Order-insensitive. 2024-02-01 -> 2024-06-01 is 121.
    """
    seconds = abs((ensure_utc(end) - ensure_utc(start)).total_seconds())
    return math.ceil(seconds / SECONDS_PER_DAY)


def inclusive_calendar_days(start: date, end: date) -> int:
    """Calendar days from ``start`` to ``end``, both counted.

    Returns 0 when the range is empty.
    """
    if start > end:
        return 0
    return (end - start).days + 1


@dataclass(frozen=True)
class PayPeriod:
    """A calendar-month pay period, bounds inclusive."""

    year: int
    month: int

    def __post_init__(self) -> None:
        if not 1 <= self.month <= 12:
            raise ValueError(f"month must be 1-12, got {self.month}")

    @property
    def period_start(self) -> date:
        return date(self.year, self.month, 1)

    @property
    def period_end(self) -> date:
        return date(self.year, self.month, calendar.monthrange(self.year, self.month)[1])

    def overlaps(self, start: date, end: date) -> bool:
        """True when ``[start, end]`` intersects the period."""
        return start <= self.period_end and end >= self.period_start

    def contains(self, start: date, end: date) -> bool:
        """True when ``[start, end]`` lies fully inside the period."""
        return start >= self.period_start and end <= self.period_end
