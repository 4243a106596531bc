"""
Streak Tracker

Maintains consecutive-local-day streaks from completed sessions.

Transition for a session on local date d (L = last session date):
    L is None      → current = 1
    d == L         → unchanged
    d == L + 1 day → current + 1
    d >  L + 1 day → current = 1
    d <  L         → backfill; the streak is rebuilt from history

The tracker always rebuilds from the full set of distinct session
dates, so out-of-order inserts and deletions produce the same answer
as if history had arrived in order. The longest streak is a
high-water mark and never decreases.
"""

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterable, Optional

from bravely.domain.enums.growth_period import StreakStatus
from bravely.domain.models.progress import StreakSnapshot
from bravely.domain.models.session import ExposureSession
from bravely.services.calendar.clock import UserCalendar

_ONE_DAY = timedelta(days=1)


@dataclass(frozen=True)
class StreakState:
    """Streak values as persisted on the user record."""

    current_streak: int = 0
    longest_streak: int = 0
    last_session_date: Optional[date] = None


class StreakTracker:
    """Pure streak calculations; persistence is the caller's concern."""

    def advance(self, state: StreakState, session_date: date) -> StreakState:
        """
        Apply one session date to a streak built from earlier dates.

        Args:
            state: Streak built from dates ≤ state.last_session_date
            session_date: Local date of the new session

        Returns:
            New streak state. Dates earlier than the last session date
            leave the state unchanged; callers handle backfill by
            replaying history.
        """
        last = state.last_session_date
        if last is None:
            current = 1
        elif session_date <= last:
            return state
        elif session_date == last + _ONE_DAY:
            current = state.current_streak + 1
        else:
            current = 1

        return StreakState(
            current_streak=current,
            longest_streak=max(state.longest_streak, current),
            last_session_date=session_date,
        )

    def replay(self, dates: Iterable[date], *, previous_longest: int = 0) -> StreakState:
        """
        Rebuild the streak from a set of session dates.

        Args:
            dates: Local session dates, any order, duplicates allowed
            previous_longest: Stored longest streak to preserve

        Returns:
            Streak state equivalent to in-order arrival of ``dates``
        """
        state = StreakState(longest_streak=previous_longest)
        for session_date in sorted(set(dates)):
            state = self.advance(state, session_date)
        return state

    def recompute(
        self,
        sessions: Iterable[ExposureSession],
        calendar: UserCalendar,
        *,
        previous_longest: int = 0,
    ) -> StreakState:
        """Rebuild the streak from completed sessions in the user's timezone."""
        dates = [
            session.local_start_date(calendar.tz)
            for session in sessions
            if session.is_complete
        ]
        return self.replay(dates, previous_longest=previous_longest)

    @staticmethod
    def status(last_session_date: Optional[date], today: date) -> StreakStatus:
        """
        Liveness of a streak relative to local today.

        A streak whose last session was yesterday is still alive
        until today ends.
        """
        if last_session_date is None:
            return StreakStatus.NONE
        if last_session_date >= today:
            return StreakStatus.ACTIVE
        if last_session_date == today - _ONE_DAY:
            return StreakStatus.GRACE
        return StreakStatus.LAPSED

    def snapshot(self, state: StreakState, today: date) -> StreakSnapshot:
        return StreakSnapshot(
            current_streak=state.current_streak,
            longest_streak=state.longest_streak,
            last_session_date=state.last_session_date,
            status=self.status(state.last_session_date, today),
        )
