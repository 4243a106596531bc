"""
Unit Tests for the Streak Tracker

Transition rules, full replay and streak status.
"""

from datetime import date, datetime, timedelta, timezone
from uuid import uuid4

from bravely.domain.enums.growth_period import StreakStatus
from bravely.services.calendar import UserCalendar
from bravely.services.progress import StreakState, StreakTracker

DAY_1 = date(2024, 3, 1)


def day(n: int) -> date:
    return DAY_1 + timedelta(days=n - 1)


class TestStreakTransitions:
    """Tests for single-step transitions."""

    def setup_method(self) -> None:
        self.tracker = StreakTracker()

    def test_first_session_starts_streak(self) -> None:
        state = self.tracker.advance(StreakState(), day(1))
        assert state == StreakState(current_streak=1, longest_streak=1, last_session_date=day(1))

    def test_same_day_does_not_increment(self) -> None:
        state = self.tracker.advance(StreakState(), day(1))
        assert self.tracker.advance(state, day(1)) == state

    def test_next_day_increments(self) -> None:
        state = StreakState(current_streak=4, longest_streak=4, last_session_date=day(4))
        state = self.tracker.advance(state, day(5))
        assert state.current_streak == 5
        assert state.longest_streak == 5

    def test_gap_resets_to_one(self) -> None:
        state = StreakState(current_streak=4, longest_streak=6, last_session_date=day(4))
        state = self.tracker.advance(state, day(7))
        assert state.current_streak == 1
        assert state.longest_streak == 6

    def test_past_date_leaves_state_unchanged(self) -> None:
        state = StreakState(current_streak=2, longest_streak=2, last_session_date=day(5))
        assert self.tracker.advance(state, day(2)) == state


class TestStreakReplay:
    """Tests for full recomputation from session dates."""

    def setup_method(self) -> None:
        self.tracker = StreakTracker()

    def test_consecutive_days(self) -> None:
        state = self.tracker.replay([day(1), day(2), day(3)])
        assert state.current_streak == 3
        assert state.longest_streak == 3

    def test_gap_after_two_days(self) -> None:
        state = self.tracker.replay([day(1), day(2), day(5)])
        assert state.current_streak == 1
        assert state.longest_streak == 2

    def test_two_sessions_same_day(self) -> None:
        state = self.tracker.replay([day(1), day(1)])
        assert state.current_streak == 1

    def test_removing_latest_day_recomputes_current(self) -> None:
        before = self.tracker.replay([day(1), day(2), day(3)])
        after = self.tracker.replay([day(1), day(2)], previous_longest=before.longest_streak)
        assert after.current_streak == 2
        assert after.longest_streak == 3

    def test_order_of_arrival_does_not_matter(self) -> None:
        dates = [day(3), day(1), day(6), day(2), day(7)]
        assert self.tracker.replay(dates) == self.tracker.replay(sorted(dates))

    def test_backfill_bridges_gap(self) -> None:
        """A past session filling a gap joins both runs."""
        state = self.tracker.replay([day(1), day(2), day(4), day(5), day(3)])
        assert state.current_streak == 5

    def test_current_never_exceeds_longest(self) -> None:
        state = self.tracker.replay([day(n) for n in (1, 2, 3, 8, 9, 12)])
        assert state.current_streak <= state.longest_streak
        assert (state.current_streak, state.longest_streak) == (1, 3)

    def test_replay_is_idempotent(self) -> None:
        dates = [day(1), day(2), day(4)]
        first = self.tracker.replay(dates)
        second = self.tracker.replay(dates, previous_longest=first.longest_streak)
        assert first == second

    def test_empty_history(self) -> None:
        assert self.tracker.replay([]) == StreakState()

    def test_recompute_uses_local_dates_and_skips_incomplete(self, make_session) -> None:
        user_id = uuid4()
        calendar = UserCalendar.for_timezone("America/Los_Angeles")
        # 06:30 UTC on 2 March is still 1 March in Los Angeles
        first = make_session(user_id, datetime(2024, 3, 2, 6, 30, tzinfo=timezone.utc))
        second = make_session(user_id, datetime(2024, 3, 2, 18, 0, tzinfo=timezone.utc))
        pending = make_session(
            user_id, datetime(2024, 3, 3, 18, 0, tzinfo=timezone.utc), complete=False
        )

        state = self.tracker.recompute([first, second, pending], calendar)
        assert state.current_streak == 2
        assert state.last_session_date == date(2024, 3, 2)


class TestStreakStatus:
    def test_status_relative_to_today(self) -> None:
        today = day(10)
        assert StreakTracker.status(None, today) == StreakStatus.NONE
        assert StreakTracker.status(day(10), today) == StreakStatus.ACTIVE
        assert StreakTracker.status(day(9), today) == StreakStatus.GRACE
        assert StreakTracker.status(day(8), today) == StreakStatus.LAPSED

    def test_snapshot_carries_values(self) -> None:
        state = StreakState(current_streak=2, longest_streak=5, last_session_date=day(9))
        snapshot = StreakTracker().snapshot(state, day(10))
        assert snapshot.current_streak == 2
        assert snapshot.longest_streak == 5
        assert snapshot.status == StreakStatus.GRACE
