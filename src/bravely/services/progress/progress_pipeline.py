"""
Progress Pipeline

Orchestrates the session-aggregation engine for one user event:

1. Stats Aggregator refresh (today + current week)
2. Streak Tracker recompute from the full session history
3. Goal Growth Engine evaluation
4. Persist the updated goal/streak snapshot

Each stage reads from the store and the stored snapshot only, so any
run can be repeated from history with the same result. The stats
stage degrades to zeroed stats (with a warning on the update) when
its read fails; the streak history read and snapshot writes always
propagate.
"""

from datetime import datetime
from typing import Optional, Sequence
from uuid import UUID

from bravely.config.logging_config import get_logger
from bravely.config.settings import Settings, get_settings
from bravely.domain.errors import InvalidRangeError, PersistenceFailure
from bravely.domain.models.goal_state import GoalState
from bravely.domain.models.progress import (
    MonthlyProgress,
    ProgressUpdate,
    StreakSnapshot,
    TodayStats,
    WeeklyStats,
)
from bravely.domain.models.session import ExposureSession
from bravely.infrastructure.metrics import (
    MILESTONES_REACHED_TOTAL,
    SESSIONS_DELETED_TOTAL,
    STREAK_RESETS_TOTAL,
    track_goal_growth,
    track_pipeline_run,
    track_stats_degraded,
)
from bravely.infrastructure.store.base import HISTORY_END, HISTORY_START, ProgressStore
from bravely.services.calendar.clock import Clock, SystemClock, UserCalendar
from bravely.services.progress.goal_engine import GoalGrowthEngine
from bravely.services.progress.stats_aggregator import StatsAggregator
from bravely.services.progress.streak_tracker import StreakState, StreakTracker

logger = get_logger(__name__)

STATS_DEGRADED_WARNING = "stats_unavailable"


class ProgressPipeline:
    """
    Entry point for all progress computation.

    Usage:
        pipeline = ProgressPipeline(store, clock=SystemClock())
        update = await pipeline.on_session_completed(session)
        weekly = await pipeline.get_weekly_stats(user_id)
    """

    def __init__(
        self,
        store: ProgressStore,
        clock: Optional[Clock] = None,
        settings: Optional[Settings] = None,
        *,
        stats: Optional[StatsAggregator] = None,
        streaks: Optional[StreakTracker] = None,
        goals: Optional[GoalGrowthEngine] = None,
    ) -> None:
        self._store = store
        self._clock = clock or SystemClock()
        self._settings = settings or get_settings()
        self._stats = stats or StatsAggregator()
        self._streaks = streaks or StreakTracker()
        self._goals = goals or GoalGrowthEngine(self._settings.goals)

    @property
    def clock(self) -> Clock:
        return self._clock

    # =========================================================================
    # Users
    # =========================================================================

    async def register_user(
        self,
        user_id: UUID,
        timezone: Optional[str] = None,
    ) -> GoalState:
        """Create the goal/streak snapshot for a new user with default goals."""
        state = self._goals.default_state(
            user_id,
            timezone or self._settings.default_timezone,
            self._clock.now(),
        )
        created = await self._store.create_user(state)
        logger.info("User registered", user_id=str(user_id), timezone=state.timezone)
        return created

    # =========================================================================
    # Events
    # =========================================================================

    @track_pipeline_run("completed")
    async def on_session_completed(self, session: ExposureSession) -> ProgressUpdate:
        """
        Run the pipeline for a session that now has an end time.

        Args:
            session: The completed (or re-edited completed) session

        Returns:
            ProgressUpdate with refreshed stats, streak and goals

        Raises:
            InvalidRangeError: If the session is not complete
            NotFoundError: If the user is unknown
            PersistenceFailure: If the snapshot cannot be read or written
        """
        if not session.is_complete:
            raise InvalidRangeError(
                "Session has no end time and cannot count toward progress",
                field="end_time",
            )
        return await self._run(
            session.user_id,
            trigger="completed",
            latest=session,
        )

    @track_pipeline_run("deleted")
    async def on_session_deleted(self, session_id: UUID) -> ProgressUpdate:
        """
        Delete a session and recompute everything derived from it.

        Stats and streak are rebuilt from the remaining history; the
        longest streak keeps its high-water mark and goals never drop.
        """
        removed = await self._store.delete_session(session_id)
        SESSIONS_DELETED_TOTAL.inc()
        logger.info(
            "Session deleted",
            session_id=str(session_id),
            user_id=str(removed.user_id),
            was_complete=removed.is_complete,
        )
        return await self._run(removed.user_id, trigger="deleted")

    @track_pipeline_run("recompute")
    async def recompute(self, user_id: UUID) -> ProgressUpdate:
        """Rebuild stats, streak and goals for a user from stored history."""
        return await self._run(user_id, trigger="recompute")

    async def _run(
        self,
        user_id: UUID,
        *,
        trigger: str,
        latest: Optional[ExposureSession] = None,
    ) -> ProgressUpdate:
        state = await self._store.get_user_goal_state(user_id)
        calendar = UserCalendar.for_timezone(state.timezone)
        now = self._clock.now()
        today = calendar.local_date(now)

        warnings: list[str] = []

        # Stage 1: stats
        week = await self._sessions_between(user_id, calendar.week_bounds(today), "pipeline")
        if week is None:
            warnings.append(STATS_DEGRADED_WARNING)
            today_stats = self._stats.empty_today(today)
            weekly = self._stats.empty_week(calendar, today)
        else:
            today_stats = self._stats.today(week, calendar, today)
            weekly = self._stats.weekly(week, calendar, today)

        # Stage 2: streak
        history = await self._store.list_completed_sessions(user_id, HISTORY_START, HISTORY_END)
        previous = StreakState(
            current_streak=state.current_streak,
            longest_streak=state.longest_streak,
            last_session_date=state.last_session_date,
        )
        streak = self._streaks.recompute(
            history, calendar, previous_longest=state.longest_streak
        )
        if self._is_reset(previous, streak):
            STREAK_RESETS_TOTAL.inc()
            logger.info(
                "Streak restarted",
                user_id=str(user_id),
                previous_streak=previous.current_streak,
            )

        # Stage 3: goals
        if latest is None and history:
            latest = history[-1]
        evaluation = self._goals.evaluate(
            state,
            now,
            latest_distance=latest.distance_miles if latest else None,
            session_id=latest.id if latest else None,
        )
        updated = evaluation.state
        updated.current_streak = streak.current_streak
        updated.longest_streak = streak.longest_streak
        updated.last_session_date = streak.last_session_date

        # Stage 4: persist
        saved = await self._store.save_user_goal_state(user_id, updated)

        track_goal_growth(saved.goal_growth_period.value, evaluation.growth_steps)
        if evaluation.milestone_reached is not None:
            MILESTONES_REACHED_TOTAL.inc()

        logger.info(
            "Progress updated",
            user_id=str(user_id),
            trigger=trigger,
            sessions_in_history=len(history),
            current_streak=saved.current_streak,
            longest_streak=saved.longest_streak,
            growth_steps=evaluation.growth_steps,
        )

        return ProgressUpdate(
            today=today_stats,
            weekly=weekly,
            streak=self._streaks.snapshot(streak, today),
            goal_state=saved,
            goal_growth_steps=evaluation.growth_steps,
            milestone_reached=evaluation.milestone_reached,
            warnings=warnings,
        )

    @staticmethod
    def _is_reset(previous: StreakState, current: StreakState) -> bool:
        return (
            previous.current_streak > 1
            and current.current_streak == 1
            and current.last_session_date != previous.last_session_date
        )

    # =========================================================================
    # Reads
    # =========================================================================

    async def _calendar_for(self, user_id: UUID) -> tuple[GoalState, UserCalendar]:
        state = await self._store.get_user_goal_state(user_id)
        return state, UserCalendar.for_timezone(state.timezone)

    async def _sessions_between(
        self,
        user_id: UUID,
        bounds: tuple[datetime, datetime],
        view: str,
    ) -> Optional[Sequence[ExposureSession]]:
        """Range read for display stats; None when the store is unavailable."""
        try:
            return await self._store.list_completed_sessions(user_id, *bounds)
        except PersistenceFailure as e:
            track_stats_degraded(view)
            logger.warning(
                "Stats read failed, serving zeroed stats",
                user_id=str(user_id),
                view=view,
                error=e.message,
            )
            return None

    async def get_today_stats(
        self,
        user_id: UUID,
        now: Optional[datetime] = None,
    ) -> TodayStats:
        """Today's totals in the user's timezone; zero on store failure."""
        _, calendar = await self._calendar_for(user_id)
        today = calendar.local_date(now or self._clock.now())
        sessions = await self._sessions_between(user_id, calendar.day_bounds(today), "today")
        if sessions is None:
            return self._stats.empty_today(today)
        return self._stats.today(sessions, calendar, today)

    async def get_weekly_stats(
        self,
        user_id: UUID,
        now: Optional[datetime] = None,
    ) -> WeeklyStats:
        """Mon..Sun series for the user's current week; zero on store failure."""
        _, calendar = await self._calendar_for(user_id)
        today = calendar.local_date(now or self._clock.now())
        sessions = await self._sessions_between(user_id, calendar.week_bounds(today), "weekly")
        if sessions is None:
            return self._stats.empty_week(calendar, today)
        return self._stats.weekly(sessions, calendar, today)

    async def get_monthly_progress(
        self,
        user_id: UUID,
        now: Optional[datetime] = None,
    ) -> MonthlyProgress:
        state, calendar = await self._calendar_for(user_id)
        today = calendar.local_date(now or self._clock.now())
        sessions = await self._sessions_between(user_id, calendar.month_bounds(today), "monthly")
        return self._stats.monthly(sessions or (), calendar, today, state.monthly_session_goal)

    async def get_streak(
        self,
        user_id: UUID,
        now: Optional[datetime] = None,
    ) -> StreakSnapshot:
        """Stored streak with its status relative to the user's local today."""
        state, calendar = await self._calendar_for(user_id)
        today = calendar.local_date(now or self._clock.now())
        return self._streaks.snapshot(
            StreakState(
                current_streak=state.current_streak,
                longest_streak=state.longest_streak,
                last_session_date=state.last_session_date,
            ),
            today,
        )

    async def get_goal_state(self, user_id: UUID) -> GoalState:
        return await self._store.get_user_goal_state(user_id)

    # =========================================================================
    # Goal preferences
    # =========================================================================

    async def update_goal_preferences(self, user_id: UUID, **changes) -> GoalState:
        """
        Apply goal preference changes and persist the snapshot.

        Accepts the keyword arguments of GoalGrowthEngine.update_preferences.

        Raises:
            ConfigurationError: For a non-positive rate, unknown period or timezone
            InvalidRangeError: For ceilings below the floor
        """
        state = await self._store.get_user_goal_state(user_id)
        updated = self._goals.update_preferences(state, self._clock.now(), **changes)
        saved = await self._store.save_user_goal_state(user_id, updated)
        logger.info(
            "Goal preferences updated",
            user_id=str(user_id),
            fields=sorted(changes),
        )
        return saved

    async def reset_goals(self, user_id: UUID) -> GoalState:
        state = await self._store.get_user_goal_state(user_id)
        return await self._store.save_user_goal_state(
            user_id, self._goals.reset(state, self._clock.now())
        )

    async def add_destination_goal(
        self,
        user_id: UUID,
        name: str,
        target_distance_miles: float,
    ) -> GoalState:
        state = await self._store.get_user_goal_state(user_id)
        updated = self._goals.add_destination(state, name, target_distance_miles)
        saved = await self._store.save_user_goal_state(user_id, updated)
        logger.info(
            "Destination added",
            user_id=str(user_id),
            position=len(saved.destination_goals),
            target_distance=target_distance_miles,
        )
        return saved
