"""Progress engine: stats, streaks and adaptive goals."""

from bravely.services.progress.stats_aggregator import StatsAggregator
from bravely.services.progress.streak_tracker import StreakState, StreakTracker
from bravely.services.progress.goal_engine import (
    GoalEvaluation,
    GoalGrowthEngine,
    round_distance,
    round_duration,
)
from bravely.services.progress.progress_pipeline import STATS_DEGRADED_WARNING, ProgressPipeline

__all__ = [
    "StatsAggregator",
    "StreakState",
    "StreakTracker",
    "GoalEvaluation",
    "GoalGrowthEngine",
    "round_distance",
    "round_duration",
    "ProgressPipeline",
    "STATS_DEGRADED_WARNING",
]
