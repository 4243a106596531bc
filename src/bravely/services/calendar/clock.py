"""
Clock and Calendar Adapter

Resolves "now", local day/week/month boundaries and day-of-week
labels for a user's timezone. All day-boundary logic in the engine
goes through this module so statistics and streaks agree on what
"today" means.

Boundaries are computed as local midnights converted to UTC, so a
23-hour or 25-hour DST day is still exactly one calendar day.
"""

import calendar
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from bravely.domain.enums.growth_period import GrowthPeriod
from bravely.domain.errors import ConfigurationError

DAY_LABELS: tuple[str, ...] = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")


class Clock(ABC):
    """Source of the current instant."""

    @abstractmethod
    def now(self) -> datetime:
        """Current time as an aware UTC datetime."""


class SystemClock(Clock):
    """Wall clock."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class FixedClock(Clock):
    """
    Manually driven clock for tests and replays.

    Usage:
        clock = FixedClock(datetime(2024, 3, 4, 9, tzinfo=timezone.utc))
        clock.advance(days=1)
    """

    def __init__(self, instant: datetime) -> None:
        self._instant = ensure_utc(instant)

    def now(self) -> datetime:
        return self._instant

    def set(self, instant: datetime) -> None:
        self._instant = ensure_utc(instant)

    def advance(self, **delta: float) -> datetime:
        self._instant = self._instant + timedelta(**delta)
        return self._instant


def ensure_utc(instant: datetime) -> datetime:
    # Naive datetimes are treated as UTC
    if instant.tzinfo is None:
        return instant.replace(tzinfo=timezone.utc)
    return instant.astimezone(timezone.utc)


def resolve_timezone(name: str) -> ZoneInfo:
    """
    Resolve an IANA timezone name.

    Raises:
        ConfigurationError: If the name is unknown
    """
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        raise ConfigurationError(f"Unknown timezone: {name!r}", field="timezone")


def add_months(instant: datetime, months: int) -> datetime:
    """Shift by whole calendar months, clamping to the target month's last day."""
    month_index = instant.month - 1 + months
    year = instant.year + month_index // 12
    month = month_index % 12 + 1
    day = min(instant.day, calendar.monthrange(year, month)[1])
    return instant.replace(year=year, month=month, day=day)


def add_periods(instant: datetime, period: GrowthPeriod, count: int = 1) -> datetime:
    """Advance an instant by ``count`` growth periods."""
    if period == GrowthPeriod.WEEKLY:
        return instant + timedelta(days=7 * count)
    return add_months(instant, count)


@dataclass(frozen=True)
class UserCalendar:
    """
    Calendar arithmetic in one user's timezone.

    Attributes:
        tz: The user's timezone
    """

    tz: ZoneInfo

    @classmethod
    def for_timezone(cls, name: str) -> "UserCalendar":
        return cls(tz=resolve_timezone(name))

    def local_date(self, instant: datetime) -> date:
        """Calendar date the instant falls on for this user."""
        return ensure_utc(instant).astimezone(self.tz).date()

    def local_midnight(self, day: date) -> datetime:
        """Start of a local calendar day, as a UTC instant."""
        return datetime.combine(day, time.min, tzinfo=self.tz).astimezone(timezone.utc)

    def day_bounds(self, day: date) -> tuple[datetime, datetime]:
        """[start, end) of a local day in UTC."""
        return self.local_midnight(day), self.local_midnight(day + timedelta(days=1))

    def week_start(self, day: date) -> date:
        """Monday of the local week containing ``day``."""
        return day - timedelta(days=day.weekday())

    def week_bounds(self, day: date) -> tuple[datetime, datetime]:
        """[Monday 00:00, next Monday 00:00) local, in UTC."""
        monday = self.week_start(day)
        return self.local_midnight(monday), self.local_midnight(monday + timedelta(days=7))

    def month_start(self, day: date) -> date:
        return day.replace(day=1)

    def month_bounds(self, day: date) -> tuple[datetime, datetime]:
        """[1st 00:00, 1st of next month 00:00) local, in UTC."""
        first = self.month_start(day)
        days_in_month = calendar.monthrange(first.year, first.month)[1]
        return (
            self.local_midnight(first),
            self.local_midnight(first + timedelta(days=days_in_month)),
        )

    @staticmethod
    def day_label(day: date) -> str:
        return DAY_LABELS[day.weekday()]
