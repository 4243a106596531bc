"""Calendar services package."""

from bravely.services.calendar.clock import (
    DAY_LABELS,
    Clock,
    FixedClock,
    SystemClock,
    UserCalendar,
    add_months,
    add_periods,
    ensure_utc,
    resolve_timezone,
)

__all__ = [
    "DAY_LABELS",
    "Clock",
    "FixedClock",
    "SystemClock",
    "UserCalendar",
    "add_months",
    "add_periods",
    "ensure_utc",
    "resolve_timezone",
]
