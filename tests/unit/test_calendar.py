"""
Unit Tests for the Clock and Calendar Adapter

Local day/week/month boundaries, DST handling and period arithmetic.
"""

from datetime import date, datetime, timedelta, timezone

import pytest

from bravely.domain.enums.growth_period import GrowthPeriod
from bravely.domain.errors import ConfigurationError
from bravely.services.calendar import (
    FixedClock,
    UserCalendar,
    add_months,
    add_periods,
    ensure_utc,
)


class TestUserCalendar:
    """Tests for local boundary arithmetic."""

    def test_local_date_crosses_midnight_before_utc(self) -> None:
        """23:30 in New York on 4 March is already 5 March in UTC."""
        calendar = UserCalendar.for_timezone("America/New_York")
        instant = datetime(2024, 3, 5, 4, 30, tzinfo=timezone.utc)
        assert calendar.local_date(instant) == date(2024, 3, 4)

    def test_day_bounds_are_local_midnights(self) -> None:
        calendar = UserCalendar.for_timezone("Asia/Tokyo")
        start, end = calendar.day_bounds(date(2024, 3, 4))
        assert start == datetime(2024, 3, 3, 15, 0, tzinfo=timezone.utc)
        assert end - start == timedelta(hours=24)

    def test_dst_spring_forward_day_is_23_hours(self) -> None:
        calendar = UserCalendar.for_timezone("Europe/London")
        start, end = calendar.day_bounds(date(2024, 3, 31))
        assert end - start == timedelta(hours=23)

    def test_week_starts_monday(self) -> None:
        calendar = UserCalendar.for_timezone("UTC")
        assert calendar.week_start(date(2024, 3, 10)) == date(2024, 3, 4)  # Sunday
        assert calendar.week_start(date(2024, 3, 4)) == date(2024, 3, 4)  # Monday

    def test_week_bounds_span_dst_change(self) -> None:
        calendar = UserCalendar.for_timezone("Europe/London")
        start, end = calendar.week_bounds(date(2024, 3, 27))
        assert start == datetime(2024, 3, 25, 0, 0, tzinfo=timezone.utc)
        # Following Monday is BST (UTC+1)
        assert end == datetime(2024, 3, 31, 23, 0, tzinfo=timezone.utc)

    def test_month_bounds_leap_february(self) -> None:
        calendar = UserCalendar.for_timezone("UTC")
        start, end = calendar.month_bounds(date(2024, 2, 14))
        assert start == datetime(2024, 2, 1, tzinfo=timezone.utc)
        assert end == datetime(2024, 3, 1, tzinfo=timezone.utc)

    def test_day_labels(self) -> None:
        assert UserCalendar.day_label(date(2024, 3, 4)) == "Mon"
        assert UserCalendar.day_label(date(2024, 3, 10)) == "Sun"

    def test_unknown_timezone_rejected(self) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            UserCalendar.for_timezone("Mars/Olympus_Mons")
        assert exc_info.value.field == "timezone"


class TestPeriodArithmetic:
    """Tests for growth-period stepping."""

    def test_add_months_clamps_to_month_end(self) -> None:
        instant = datetime(2024, 1, 31, 9, tzinfo=timezone.utc)
        assert add_months(instant, 1) == datetime(2024, 2, 29, 9, tzinfo=timezone.utc)
        assert add_months(instant, 3) == datetime(2024, 4, 30, 9, tzinfo=timezone.utc)

    def test_add_months_rolls_year(self) -> None:
        instant = datetime(2024, 11, 15, tzinfo=timezone.utc)
        assert add_months(instant, 3) == datetime(2025, 2, 15, tzinfo=timezone.utc)

    def test_add_weekly_periods(self) -> None:
        instant = datetime(2024, 3, 4, tzinfo=timezone.utc)
        assert add_periods(instant, GrowthPeriod.WEEKLY, 2) == datetime(2024, 3, 18, tzinfo=timezone.utc)


class TestClock:
    def test_fixed_clock_advances(self) -> None:
        clock = FixedClock(datetime(2024, 3, 4, 12, tzinfo=timezone.utc))
        clock.advance(days=1, hours=2)
        assert clock.now() == datetime(2024, 3, 5, 14, tzinfo=timezone.utc)

    def test_naive_datetimes_are_utc(self) -> None:
        assert ensure_utc(datetime(2024, 3, 4, 12)).tzinfo == timezone.utc
