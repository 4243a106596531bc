"""
Unit Tests for the Goal Growth Engine

Compounding, rounding, clamping, anchors and destination milestones.
"""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest

from bravely.config.settings import GoalSettings
from bravely.domain.enums.growth_period import GrowthPeriod
from bravely.domain.errors import ConfigurationError, InvalidRangeError
from bravely.domain.models.goal_state import DestinationGoal, GoalState
from bravely.services.progress import GoalGrowthEngine, round_distance, round_duration

ANCHOR = datetime(2024, 1, 1, 9, 0, tzinfo=timezone.utc)


@pytest.fixture
def engine() -> GoalGrowthEngine:
    return GoalGrowthEngine(GoalSettings())


@pytest.fixture
def state() -> GoalState:
    return GoalState(
        user_id=uuid4(),
        goal_growth_rate=5.0,
        goal_growth_period=GrowthPeriod.WEEKLY,
        current_distance_goal=1.0,
        current_duration_goal=15,
        last_goal_update=ANCHOR,
    )


class TestRounding:
    def test_distance_rounds_half_up(self) -> None:
        assert round_distance(1.157625) == 1.2
        assert round_distance(1.25) == 1.3
        assert round_distance(1.04) == 1.0

    def test_duration_rounds_half_up(self) -> None:
        assert round_duration(17.5) == 18
        assert round_duration(17.36) == 17


class TestGoalGrowth:
    """Tests for periodic compounding."""

    def test_no_growth_before_first_boundary(self, engine, state) -> None:
        result = engine.evaluate(state, ANCHOR + timedelta(days=6, hours=23))
        assert result.growth_steps == 0
        assert result.state.current_distance_goal == 1.0
        assert result.state.last_goal_update == ANCHOR

    def test_three_weeks_compound_then_round(self, engine, state) -> None:
        """1.0 * 1.05^3 = 1.1576 rounds to 1.2."""
        result = engine.evaluate(state, ANCHOR + timedelta(weeks=3, hours=1))
        assert result.growth_steps == 3
        assert result.state.current_distance_goal == 1.2
        assert result.state.current_duration_goal == 17

    def test_anchor_advances_by_whole_periods(self, engine, state) -> None:
        result = engine.evaluate(state, ANCHOR + timedelta(weeks=2, days=3))
        assert result.state.last_goal_update == ANCHOR + timedelta(weeks=2)

    def test_input_state_is_not_mutated(self, engine, state) -> None:
        engine.evaluate(state, ANCHOR + timedelta(weeks=4))
        assert state.current_distance_goal == 1.0
        assert state.last_goal_update == ANCHOR

    def test_repeat_evaluation_is_idempotent(self, engine, state) -> None:
        now = ANCHOR + timedelta(weeks=3, days=2)
        first = engine.evaluate(state, now)
        second = engine.evaluate(first.state, now)
        assert second.growth_steps == 0
        assert second.state == first.state

    def test_long_absence_capped_and_forfeited(self, engine, state) -> None:
        """Fifty idle weeks apply at most max_compounding_steps."""
        now = ANCHOR + timedelta(weeks=50)
        result = engine.evaluate(state, now)
        assert result.periods_elapsed == 50
        assert result.growth_steps == engine.settings.max_compounding_steps
        assert result.state.current_distance_goal == round_distance(1.05 ** 12)
        assert result.state.last_goal_update == ANCHOR + timedelta(weeks=50)

    def test_growth_clamped_to_ceiling(self, engine, state) -> None:
        state.current_distance_goal = 26.0
        state.current_duration_goal = 235
        result = engine.evaluate(state, ANCHOR + timedelta(weeks=1))
        assert result.state.current_distance_goal == 26.2
        assert result.state.current_duration_goal == 240

    def test_user_ceiling_applies(self, engine, state) -> None:
        state.distance_goal_ceiling = 1.1
        result = engine.evaluate(state, ANCHOR + timedelta(weeks=3))
        assert result.state.current_distance_goal == 1.1

    def test_goal_above_lowered_ceiling_is_kept(self, engine, state) -> None:
        """Goals never decrease while growth is enabled."""
        state.current_distance_goal = 3.0
        state.distance_goal_ceiling = 2.0
        result = engine.evaluate(state, ANCHOR + timedelta(weeks=1))
        assert result.state.current_distance_goal == 3.0

    def test_small_goal_raised_to_floor(self, engine, state) -> None:
        state.current_distance_goal = 0.05
        result = engine.evaluate(state, ANCHOR + timedelta(weeks=1))
        assert result.state.current_distance_goal == engine.settings.distance_floor

    def test_monthly_period_uses_calendar_months(self, engine, state) -> None:
        state.goal_growth_period = GrowthPeriod.MONTHLY
        state.last_goal_update = datetime(2024, 1, 31, tzinfo=timezone.utc)
        # Boundaries fall on 29 Feb and 31 Mar; 30 Apr is still ahead
        result = engine.evaluate(state, datetime(2024, 4, 15, tzinfo=timezone.utc))
        assert result.growth_steps == 2
        assert result.state.last_goal_update == datetime(2024, 3, 31, tzinfo=timezone.utc)

    def test_monthly_boundary_not_yet_crossed(self, engine, state) -> None:
        state.goal_growth_period = GrowthPeriod.MONTHLY
        state.last_goal_update = datetime(2024, 1, 31, tzinfo=timezone.utc)
        result = engine.evaluate(state, datetime(2024, 2, 28, tzinfo=timezone.utc))
        assert result.growth_steps == 0

    def test_missing_anchor_set_without_growth(self, engine, state) -> None:
        state.last_goal_update = None
        now = ANCHOR + timedelta(weeks=10)
        result = engine.evaluate(state, now)
        assert result.growth_steps == 0
        assert result.state.last_goal_update == now

    def test_disabled_goals_are_frozen(self, engine, state) -> None:
        state.progressive_goals_enabled = False
        result = engine.evaluate(state, ANCHOR + timedelta(weeks=5))
        assert result.growth_steps == 0
        assert result.state.current_distance_goal == 1.0
        assert result.state.last_goal_update == ANCHOR

    def test_invalid_stored_rate_rejected(self, engine, state) -> None:
        state.goal_growth_rate = 0
        with pytest.raises(ConfigurationError):
            engine.evaluate(state, ANCHOR + timedelta(weeks=1))


class TestPreferences:
    """Tests for user-editable preferences."""

    def test_reenabling_resets_anchor(self, engine, state) -> None:
        state.progressive_goals_enabled = False
        now = ANCHOR + timedelta(weeks=8)
        updated = engine.update_preferences(state, now, enabled=True)
        assert updated.last_goal_update == now

        # No retroactive growth for the disabled weeks
        result = engine.evaluate(updated, now + timedelta(days=1))
        assert result.growth_steps == 0

    def test_disabling_keeps_anchor(self, engine, state) -> None:
        updated = engine.update_preferences(state, ANCHOR + timedelta(days=3), enabled=False)
        assert updated.last_goal_update == ANCHOR

    @pytest.mark.parametrize("rate", [0, -5.0])
    def test_non_positive_rate_rejected(self, engine, state, rate) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            engine.update_preferences(state, ANCHOR, growth_rate=rate)
        assert exc_info.value.field == "goal_growth_rate"

    def test_unknown_period_rejected(self, engine, state) -> None:
        with pytest.raises(ConfigurationError):
            engine.update_preferences(state, ANCHOR, growth_period="fortnightly")

    def test_period_and_ceiling_update(self, engine, state) -> None:
        updated = engine.update_preferences(
            state,
            ANCHOR,
            growth_period="monthly",
            distance_ceiling=5.0,
        )
        assert updated.goal_growth_period == GrowthPeriod.MONTHLY
        assert updated.distance_goal_ceiling == 5.0

    def test_clearing_ceiling(self, engine, state) -> None:
        state.distance_goal_ceiling = 5.0
        updated = engine.update_preferences(state, ANCHOR, distance_ceiling=None)
        assert updated.distance_goal_ceiling is None

    def test_ceiling_below_floor_rejected(self, engine, state) -> None:
        with pytest.raises(InvalidRangeError):
            engine.update_preferences(state, ANCHOR, duration_ceiling=1)

    def test_unknown_timezone_rejected(self, engine, state) -> None:
        with pytest.raises(ConfigurationError):
            engine.update_preferences(state, ANCHOR, timezone="Nowhere/City")

    def test_reset_restores_defaults(self, engine, state) -> None:
        state.current_distance_goal = 4.4
        state.current_duration_goal = 60
        now = ANCHOR + timedelta(days=40)
        updated = engine.reset(state, now)
        assert updated.current_distance_goal == engine.settings.default_distance_goal
        assert updated.current_duration_goal == engine.settings.default_duration_goal
        assert updated.last_goal_update == now


class TestDestinations:
    """Tests for milestone progression."""

    @pytest.fixture
    def with_destinations(self, state) -> GoalState:
        state.destination_goals = [
            DestinationGoal(name="Corner shop", target_distance_miles=0.3),
            DestinationGoal(name="Park gate", target_distance_miles=0.8),
            DestinationGoal(name="Library", target_distance_miles=1.5),
        ]
        return state

    def test_reaches_next_milestone(self, engine, with_destinations) -> None:
        session_id = uuid4()
        result = engine.evaluate(with_destinations, ANCHOR, latest_distance=0.4, session_id=session_id)
        assert result.milestone_reached.name == "Corner shop"
        assert result.state.destination_goals[0].reached_at == ANCHOR
        assert result.state.destination_goals[0].reached_session_id == session_id
        assert result.state.next_destination.name == "Park gate"

    def test_advances_at_most_one(self, engine, with_destinations) -> None:
        result = engine.evaluate(with_destinations, ANCHOR, latest_distance=5.0, session_id=uuid4())
        reached = [goal.name for goal in result.state.destination_goals if goal.is_reached]
        assert reached == ["Corner shop"]

    def test_same_session_not_credited_twice(self, engine, with_destinations) -> None:
        session_id = uuid4()
        first = engine.evaluate(with_destinations, ANCHOR, latest_distance=5.0, session_id=session_id)
        second = engine.evaluate(first.state, ANCHOR, latest_distance=5.0, session_id=session_id)
        assert second.milestone_reached is None
        assert second.state == first.state

    def test_short_distance_reaches_nothing(self, engine, with_destinations) -> None:
        result = engine.evaluate(with_destinations, ANCHOR, latest_distance=0.2)
        assert result.milestone_reached is None

    def test_add_destination_appends(self, engine, state) -> None:
        updated = engine.add_destination(state, "  River bridge ", 2.0)
        assert updated.destination_goals[-1].name == "River bridge"
        assert state.destination_goals == []

    @pytest.mark.parametrize("name,distance", [("", 1.0), ("   ", 1.0), ("Shop", 0), ("Shop", -1.0)])
    def test_add_destination_validation(self, engine, state, name, distance) -> None:
        with pytest.raises(InvalidRangeError):
            engine.add_destination(state, name, distance)
