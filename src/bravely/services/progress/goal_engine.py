"""
Goal Growth Engine

Evolves a user's distance and duration targets over successive
growth periods and advances destination milestones.

Growth rules:
1. Growth happens only across whole period boundaries measured from
   the stored anchor (last_goal_update), compounding once per period.
2. The anchor moves by whole periods, never to "now", so a long
   absence yields exactly the periods that elapsed, capped at
   max_compounding_steps per evaluation.
3. Goals are rounded once per evaluation (0.1 mile, whole minutes),
   clamped to the ceiling, and never decrease while enabled.
4. Disabled goals are frozen; re-enabling restarts the anchor at now.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional
from uuid import UUID

from bravely.config.logging_config import get_logger
from bravely.config.settings import GoalSettings, get_settings
from bravely.domain.enums.growth_period import GrowthPeriod
from bravely.domain.errors import ConfigurationError, InvalidRangeError
from bravely.domain.models.goal_state import DestinationGoal, GoalState
from bravely.services.calendar.clock import add_periods, resolve_timezone

logger = get_logger(__name__)

_DISTANCE_PRECISION = Decimal("0.1")
_DURATION_PRECISION = Decimal("1")

# Sentinel distinguishing "leave unchanged" from an explicit None
_UNSET = object()


def round_distance(value: float) -> float:
    """Round miles half-up to one decimal place."""
    return float(Decimal(str(value)).quantize(_DISTANCE_PRECISION, rounding=ROUND_HALF_UP))


def round_duration(value: float) -> int:
    """Round minutes half-up to a whole minute."""
    return int(Decimal(str(value)).quantize(_DURATION_PRECISION, rounding=ROUND_HALF_UP))


@dataclass
class GoalEvaluation:
    """
    Result of one growth evaluation.

    Attributes:
        state: Updated snapshot (a copy; the input is not mutated)
        periods_elapsed: Whole periods between the old anchor and now
        growth_steps: Periods actually compounded (≤ max_compounding_steps)
        milestone_reached: Destination reached during this evaluation
    """

    state: GoalState
    periods_elapsed: int = 0
    growth_steps: int = 0
    milestone_reached: Optional[DestinationGoal] = None


class GoalGrowthEngine:
    """
    Evaluates progressive goal growth and destination milestones.

    Usage:
        engine = GoalGrowthEngine()
        result = engine.evaluate(state, now, latest_distance=1.4, session_id=sid)
        store.save_user_goal_state(user_id, result.state)
    """

    def __init__(self, settings: Optional[GoalSettings] = None) -> None:
        self._settings = settings or get_settings().goals

    @property
    def settings(self) -> GoalSettings:
        return self._settings

    def default_state(self, user_id: UUID, timezone: str, now: datetime) -> GoalState:
        """Snapshot for a newly registered user."""
        resolve_timezone(timezone)
        return GoalState(
            user_id=user_id,
            timezone=timezone,
            progressive_goals_enabled=True,
            goal_growth_rate=self._settings.default_growth_rate,
            goal_growth_period=GrowthPeriod.parse(self._settings.default_growth_period),
            current_distance_goal=self._settings.default_distance_goal,
            current_duration_goal=self._settings.default_duration_goal,
            last_goal_update=now,
            monthly_session_goal=self._settings.default_monthly_session_goal,
        )

    # Evaluation

    def evaluate(
        self,
        state: GoalState,
        now: datetime,
        *,
        latest_distance: Optional[float] = None,
        session_id: Optional[UUID] = None,
    ) -> GoalEvaluation:
        """
        Apply elapsed growth periods and milestone advancement.

        Args:
            state: Current snapshot
            now: Evaluation instant
            latest_distance: Distance of the triggering session, if any
            session_id: Triggering session; a milestone is credited to a
                given session at most once so retries stay idempotent

        Returns:
            GoalEvaluation with a new snapshot

        Raises:
            ConfigurationError: If the stored growth settings are invalid
        """
        self.validate_growth_settings(state.goal_growth_rate, state.goal_growth_period)
        updated = state.copy()
        evaluation = GoalEvaluation(state=updated)

        if updated.progressive_goals_enabled:
            if updated.last_goal_update is None:
                updated.last_goal_update = now
            else:
                self._apply_growth(updated, now, evaluation)

        if latest_distance is not None:
            evaluation.milestone_reached = self.advance_destination(
                updated, latest_distance, now, session_id=session_id
            )

        return evaluation

    def count_elapsed_periods(
        self,
        anchor: datetime,
        now: datetime,
        period: GrowthPeriod,
    ) -> int:
        """Whole period boundaries crossed in (anchor, now]."""
        if now <= anchor:
            return 0
        if period == GrowthPeriod.WEEKLY:
            return (now - anchor) // timedelta(days=7)

        # Months vary in length; step from the anchor each time to avoid clamp drift
        count = 0
        while add_periods(anchor, period, count + 1) <= now:
            count += 1
        return count

    def _apply_growth(
        self,
        state: GoalState,
        now: datetime,
        evaluation: GoalEvaluation,
    ) -> None:
        period = GrowthPeriod.parse(state.goal_growth_period)
        elapsed = self.count_elapsed_periods(state.last_goal_update, now, period)
        if elapsed == 0:
            return

        steps = min(elapsed, self._settings.max_compounding_steps)
        factor = (1 + state.goal_growth_rate / 100) ** steps

        old_distance = state.current_distance_goal
        old_duration = state.current_duration_goal

        state.current_distance_goal = self._bounded(
            round_distance(old_distance * factor),
            current=old_distance,
            floor=self._settings.distance_floor,
            ceiling=self.distance_ceiling(state),
        )
        state.current_duration_goal = int(self._bounded(
            round_duration(old_duration * factor),
            current=old_duration,
            floor=self._settings.duration_floor,
            ceiling=self.duration_ceiling(state),
        ))
        # Periods beyond the cap are forfeited, not deferred
        state.last_goal_update = add_periods(state.last_goal_update, period, elapsed)

        evaluation.periods_elapsed = elapsed
        evaluation.growth_steps = steps

        if steps < elapsed:
            logger.info(
                "Goal growth capped",
                user_id=str(state.user_id),
                periods_elapsed=elapsed,
                growth_steps=steps,
            )
        logger.info(
            "Goals grown",
            user_id=str(state.user_id),
            distance_from=old_distance,
            distance_to=state.current_distance_goal,
            duration_from=old_duration,
            duration_to=state.current_duration_goal,
            growth_steps=steps,
        )

    @staticmethod
    def _bounded(value: float, *, current: float, floor: float, ceiling: float) -> float:
        # Clamp to the ceiling but never below the current goal or the floor
        return max(min(value, ceiling), current, floor)

    def distance_ceiling(self, state: GoalState) -> float:
        if state.distance_goal_ceiling is not None:
            return min(state.distance_goal_ceiling, self._settings.max_distance_goal)
        return self._settings.max_distance_goal

    def duration_ceiling(self, state: GoalState) -> int:
        if state.duration_goal_ceiling is not None:
            return min(state.duration_goal_ceiling, self._settings.max_duration_goal)
        return self._settings.max_duration_goal

    # Destinations

    def advance_destination(
        self,
        state: GoalState,
        distance: float,
        now: datetime,
        *,
        session_id: Optional[UUID] = None,
    ) -> Optional[DestinationGoal]:
        """
        Mark the next pending milestone reached if ``distance`` meets it.

        At most one milestone advances per call; milestones are never
        skipped or reordered.
        """
        if session_id is not None and any(
            goal.reached_session_id == session_id for goal in state.destination_goals
        ):
            return None

        pending = state.next_destination
        if pending is None or distance < pending.target_distance_miles:
            return None

        pending.reached_at = now
        pending.reached_session_id = session_id
        logger.info(
            "Destination reached",
            user_id=str(state.user_id),
            destination=pending.name,
            target_distance=pending.target_distance_miles,
        )
        return pending

    def add_destination(self, state: GoalState, name: str, target_distance_miles: float) -> GoalState:
        """Append a milestone to the end of the progression."""
        if not name or not name.strip():
            raise InvalidRangeError("Destination name must not be blank", field="name")
        if target_distance_miles <= 0:
            raise InvalidRangeError(
                "Destination distance must be positive",
                field="target_distance_miles",
            )
        updated = state.copy()
        updated.destination_goals.append(
            DestinationGoal(name=name.strip(), target_distance_miles=float(target_distance_miles))
        )
        return updated

    # Preferences

    @staticmethod
    def validate_growth_settings(rate: float, period: "GrowthPeriod | str") -> GrowthPeriod:
        """
        Validate a growth rate and period.

        Raises:
            ConfigurationError: If rate ≤ 0 or the period is unknown
        """
        if rate is None or rate <= 0:
            raise ConfigurationError(
                f"Goal growth rate must be positive, got {rate!r}",
                field="goal_growth_rate",
            )
        return GrowthPeriod.parse(period)

    def update_preferences(
        self,
        state: GoalState,
        now: datetime,
        *,
        enabled: Optional[bool] = None,
        growth_rate: Optional[float] = None,
        growth_period: "GrowthPeriod | str | None" = None,
        distance_ceiling: object = _UNSET,
        duration_ceiling: object = _UNSET,
        monthly_session_goal: Optional[int] = None,
        timezone: Optional[str] = None,
    ) -> GoalState:
        """
        Apply user-editable goal preferences.

        Re-enabling progressive goals restarts the growth anchor at
        ``now`` so missed periods are not applied retroactively.
        """
        updated = state.copy()

        rate = updated.goal_growth_rate if growth_rate is None else growth_rate
        period = updated.goal_growth_period if growth_period is None else growth_period
        updated.goal_growth_rate = float(rate)
        updated.goal_growth_period = self.validate_growth_settings(rate, period)

        if timezone is not None:
            resolve_timezone(timezone)
            updated.timezone = timezone

        if distance_ceiling is not _UNSET:
            if distance_ceiling is not None and distance_ceiling < self._settings.distance_floor:
                raise InvalidRangeError(
                    f"Distance ceiling must be at least {self._settings.distance_floor}",
                    field="distance_goal_ceiling",
                )
            updated.distance_goal_ceiling = distance_ceiling

        if duration_ceiling is not _UNSET:
            if duration_ceiling is not None and duration_ceiling < self._settings.duration_floor:
                raise InvalidRangeError(
                    f"Duration ceiling must be at least {self._settings.duration_floor}",
                    field="duration_goal_ceiling",
                )
            updated.duration_goal_ceiling = duration_ceiling

        if monthly_session_goal is not None:
            if monthly_session_goal < 1:
                raise InvalidRangeError(
                    "Monthly session goal must be at least 1",
                    field="monthly_session_goal",
                )
            updated.monthly_session_goal = monthly_session_goal

        if enabled is not None and enabled != updated.progressive_goals_enabled:
            updated.progressive_goals_enabled = enabled
            if enabled:
                updated.last_goal_update = now
            logger.info(
                "Progressive goals toggled",
                user_id=str(updated.user_id),
                enabled=enabled,
            )

        return updated

    def reset(self, state: GoalState, now: datetime) -> GoalState:
        """
        Administrative reset to configured defaults.

        This is the only operation allowed to lower goals.
        """
        updated = state.copy()
        updated.current_distance_goal = self._settings.default_distance_goal
        updated.current_duration_goal = self._settings.default_duration_goal
        updated.last_goal_update = now
        logger.warning("Goals reset to defaults", user_id=str(updated.user_id))
        return updated
