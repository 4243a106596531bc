"""
Stats Aggregator

Computes today's totals, the Mon..Sun weekly series and monthly
session progress from completed sessions.

Sessions are attributed to the local calendar day they started on,
so a session running from 23:50 to 00:20 counts entirely toward the
first day. Incomplete sessions never count.
"""

import math
from datetime import date, timedelta
from typing import Iterable

from bravely.domain.models.progress import (
    DailyDuration,
    MonthlyProgress,
    TodayStats,
    WeeklyStats,
)
from bravely.domain.models.session import ExposureSession
from bravely.services.calendar.clock import UserCalendar


def _completed_by_day(
    sessions: Iterable[ExposureSession],
    calendar: UserCalendar,
) -> dict[date, list[ExposureSession]]:
    by_day: dict[date, list[ExposureSession]] = {}
    for session in sessions:
        if not session.is_complete:
            continue
        by_day.setdefault(session.local_start_date(calendar.tz), []).append(session)
    return by_day


def _total_distance(sessions: list[ExposureSession]) -> float:
    return math.fsum(s.distance_miles or 0.0 for s in sessions)


def _total_duration(sessions: list[ExposureSession]) -> int:
    return sum(s.duration_minutes or 0 for s in sessions)


class StatsAggregator:
    """
    Pure aggregation over a list of sessions.

    Callers pass whatever window they fetched; sessions outside the
    requested day, week or month are ignored.
    """

    def today(
        self,
        sessions: Iterable[ExposureSession],
        calendar: UserCalendar,
        today: date,
    ) -> TodayStats:
        day_sessions = _completed_by_day(sessions, calendar).get(today, [])
        return TodayStats(
            date=today,
            distance_miles=_total_distance(day_sessions),
            duration_minutes=_total_duration(day_sessions),
            session_count=len(day_sessions),
        )

    def weekly(
        self,
        sessions: Iterable[ExposureSession],
        calendar: UserCalendar,
        today: date,
    ) -> WeeklyStats:
        """Seven entries, Monday first, zero-filled for days without sessions."""
        by_day = _completed_by_day(sessions, calendar)
        monday = calendar.week_start(today)

        days = []
        for offset in range(7):
            day = monday + timedelta(days=offset)
            day_sessions = by_day.get(day, [])
            days.append(
                DailyDuration(
                    day=calendar.day_label(day),
                    date=day,
                    duration_minutes=_total_duration(day_sessions),
                    distance_miles=_total_distance(day_sessions),
                )
            )
        return WeeklyStats(week_start=monday, days=tuple(days))

    def monthly(
        self,
        sessions: Iterable[ExposureSession],
        calendar: UserCalendar,
        today: date,
        goal: int,
    ) -> MonthlyProgress:
        month_start = calendar.month_start(today)
        count = sum(
            len(day_sessions)
            for day, day_sessions in _completed_by_day(sessions, calendar).items()
            if day.year == month_start.year and day.month == month_start.month
        )
        return MonthlyProgress(month_start=month_start, completed_sessions=count, goal=goal)

    # Zeroed results for degraded reads

    @staticmethod
    def empty_today(today: date) -> TodayStats:
        return TodayStats(date=today)

    def empty_week(self, calendar: UserCalendar, today: date) -> WeeklyStats:
        return self.weekly((), calendar, today)
