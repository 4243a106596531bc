"""
Unit Tests for the Stats Aggregator

Day attribution, weekly series and monthly progress.
"""

from datetime import date, datetime, timezone
from uuid import uuid4

import pytest

from bravely.services.calendar import UserCalendar
from bravely.services.progress import StatsAggregator

MONDAY = date(2024, 3, 4)


@pytest.fixture
def aggregator() -> StatsAggregator:
    return StatsAggregator()


@pytest.fixture
def utc() -> UserCalendar:
    return UserCalendar.for_timezone("UTC")


class TestTodayStats:
    """Tests for today's totals."""

    def test_no_sessions_yields_zeros(self, aggregator, utc) -> None:
        stats = aggregator.today([], utc, MONDAY)
        assert stats.distance_miles == 0.0
        assert stats.duration_minutes == 0
        assert stats.session_count == 0

    def test_sums_completed_sessions(self, aggregator, utc, make_session) -> None:
        user_id = uuid4()
        sessions = [
            make_session(user_id, datetime(2024, 3, 4, 8, tzinfo=timezone.utc), minutes=20, distance=0.4),
            make_session(user_id, datetime(2024, 3, 4, 18, tzinfo=timezone.utc), minutes=25, distance=0.7),
            make_session(user_id, datetime(2024, 3, 3, 18, tzinfo=timezone.utc), minutes=60, distance=3.0),
        ]
        stats = aggregator.today(sessions, utc, MONDAY)
        assert stats.session_count == 2
        assert stats.duration_minutes == 45
        assert stats.distance_miles == pytest.approx(1.1)

    def test_incomplete_sessions_excluded(self, aggregator, utc, make_session) -> None:
        user_id = uuid4()
        pending = make_session(user_id, datetime(2024, 3, 4, 9, tzinfo=timezone.utc), complete=False)
        assert aggregator.today([pending], utc, MONDAY).session_count == 0

    def test_missing_distance_counts_as_zero(self, aggregator, utc, make_session) -> None:
        session = make_session(uuid4(), datetime(2024, 3, 4, 9, tzinfo=timezone.utc), distance=None)
        stats = aggregator.today([session], utc, MONDAY)
        assert stats.distance_miles == 0.0
        assert stats.session_count == 1

    def test_session_crossing_midnight_counts_for_start_day(
        self, aggregator, utc, make_session
    ) -> None:
        """23:50 to 00:20 belongs entirely to the first day."""
        session = make_session(uuid4(), datetime(2024, 3, 4, 23, 50, tzinfo=timezone.utc), minutes=30)
        assert aggregator.today([session], utc, MONDAY).duration_minutes == 30
        assert aggregator.today([session], utc, date(2024, 3, 5)).duration_minutes == 0

    def test_attribution_uses_user_timezone(self, aggregator, make_session) -> None:
        # 02:00 UTC on 5 March is the evening of 4 March in New York
        session = make_session(uuid4(), datetime(2024, 3, 5, 2, 0, tzinfo=timezone.utc))
        new_york = UserCalendar.for_timezone("America/New_York")
        assert aggregator.today([session], new_york, MONDAY).session_count == 1
        assert aggregator.today([session], new_york, date(2024, 3, 5)).session_count == 0


class TestWeeklyStats:
    """Tests for the Mon..Sun series."""

    def test_seven_labelled_days_starting_monday(self, aggregator, utc) -> None:
        weekly = aggregator.weekly([], utc, date(2024, 3, 7))
        assert weekly.week_start == MONDAY
        assert [entry.day for entry in weekly.days] == [
            "Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun",
        ]
        assert all(entry.duration_minutes == 0 for entry in weekly.days)

    def test_sessions_bucketed_by_day(self, aggregator, utc, make_session) -> None:
        user_id = uuid4()
        sessions = [
            make_session(user_id, datetime(2024, 3, 4, 9, tzinfo=timezone.utc), minutes=10),
            make_session(user_id, datetime(2024, 3, 6, 9, tzinfo=timezone.utc), minutes=15),
            make_session(user_id, datetime(2024, 3, 6, 19, tzinfo=timezone.utc), minutes=5),
            # Previous week
            make_session(user_id, datetime(2024, 3, 3, 9, tzinfo=timezone.utc), minutes=40),
        ]
        weekly = aggregator.weekly(sessions, utc, date(2024, 3, 10))
        durations = [entry.duration_minutes for entry in weekly.days]
        assert durations == [10, 0, 20, 0, 0, 0, 0]
        assert weekly.total_duration_minutes == 30
        assert weekly.active_days == 2

    def test_empty_week_matches_zero_series(self, aggregator, utc) -> None:
        assert aggregator.empty_week(utc, MONDAY) == aggregator.weekly([], utc, MONDAY)


class TestMonthlyProgress:
    def test_counts_sessions_in_local_month(self, aggregator, utc, make_session) -> None:
        user_id = uuid4()
        sessions = [
            make_session(user_id, datetime(2024, 3, day, 9, tzinfo=timezone.utc))
            for day in (1, 2, 15)
        ]
        sessions.append(make_session(user_id, datetime(2024, 2, 29, 9, tzinfo=timezone.utc)))

        progress = aggregator.monthly(sessions, utc, MONDAY, goal=10)
        assert progress.month_start == date(2024, 3, 1)
        assert progress.completed_sessions == 3
        assert progress.percent == 30.0

    def test_percent_capped_at_100(self, aggregator, utc, make_session) -> None:
        user_id = uuid4()
        sessions = [
            make_session(user_id, datetime(2024, 3, day, 9, tzinfo=timezone.utc))
            for day in range(1, 6)
        ]
        progress = aggregator.monthly(sessions, utc, MONDAY, goal=2)
        assert progress.completed_sessions == 5
        assert progress.percent == 100.0
