"""Domain models package."""

from bravely.domain.models.session import ExposureSession
from bravely.domain.models.goal_state import DestinationGoal, GoalState
from bravely.domain.models.progress import (
    DailyDuration,
    MonthlyProgress,
    ProgressUpdate,
    StreakSnapshot,
    TodayStats,
    WeeklyStats,
)
from bravely.domain.models.content import CbtTip, MotivationalQuote

__all__ = [
    # Session
    "ExposureSession",
    # Goal state
    "DestinationGoal",
    "GoalState",
    # Progress results
    "DailyDuration",
    "MonthlyProgress",
    "ProgressUpdate",
    "StreakSnapshot",
    "TodayStats",
    "WeeklyStats",
    # Content
    "CbtTip",
    "MotivationalQuote",
]
