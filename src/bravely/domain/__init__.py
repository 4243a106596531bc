"""
Bravely Domain Layer

Core business entities, value objects and errors.
These models represent the domain logic independent of infrastructure.
"""

from bravely.domain.models.session import ExposureSession
from bravely.domain.models.goal_state import DestinationGoal, GoalState
from bravely.domain.enums.growth_period import GrowthPeriod, MoodTag, StreakStatus
from bravely.domain.errors import (
    ConfigurationError,
    InvalidRangeError,
    NotFoundError,
    PersistenceFailure,
    ProgressError,
)

__all__ = [
    # Entities
    "ExposureSession",
    "DestinationGoal",
    "GoalState",
    # Enums
    "GrowthPeriod",
    "MoodTag",
    "StreakStatus",
    # Errors
    "ProgressError",
    "NotFoundError",
    "InvalidRangeError",
    "PersistenceFailure",
    "ConfigurationError",
]
