"""Domain enums package."""

from bravely.domain.enums.growth_period import GrowthPeriod, MoodTag, StreakStatus

__all__ = ["GrowthPeriod", "MoodTag", "StreakStatus"]
