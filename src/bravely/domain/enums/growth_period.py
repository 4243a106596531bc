"""
Goal Growth Period and Session Tag Enumerations

Standardized vocabularies shared by the goal engine, the session
service and the API schemas.
"""

from enum import StrEnum

from bravely.domain.errors import ConfigurationError


class GrowthPeriod(StrEnum):
    """
    Interval after which progressive goals may grow.

    WEEKLY periods are exactly seven days; MONTHLY periods are one
    calendar month, clamped to the last day of shorter months.
    """

    WEEKLY = "weekly"
    MONTHLY = "monthly"

    @classmethod
    def parse(cls, value: "str | GrowthPeriod") -> "GrowthPeriod":
        """
        Parse a stored or user-supplied period value.

        Raises:
            ConfigurationError: If the value is not a known period
        """
        try:
            return cls(str(value).lower())
        except ValueError:
            raise ConfigurationError(
                f"Unknown goal growth period: {value!r}",
                field="goal_growth_period",
            )


class MoodTag(StrEnum):
    """How the user labelled the session afterwards."""

    ANXIOUS = "anxious"
    NEUTRAL = "neutral"
    ACCOMPLISHED = "accomplished"
    BRAVE = "brave"
    REFLECTIVE = "reflective"


class StreakStatus(StrEnum):
    """
    Streak liveness relative to the user's local today.

    GRACE means the last session was yesterday: the streak is still
    alive until a full local day passes without a session.
    """

    NONE = "none"
    ACTIVE = "active"
    GRACE = "grace"
    LAPSED = "lapsed"
