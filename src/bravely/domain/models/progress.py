"""
Progress Result Models

Fixed-field records returned by the stats aggregator, the streak
tracker and the progress pipeline.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from bravely.domain.enums.growth_period import StreakStatus
from bravely.domain.models.goal_state import DestinationGoal, GoalState


@dataclass(frozen=True)
class TodayStats:
    """Totals over today's completed sessions (user-local day)."""

    date: date
    distance_miles: float = 0.0
    duration_minutes: int = 0
    session_count: int = 0

    def to_dict(self) -> dict:
        return {
            "date": self.date.isoformat(),
            "distance": round(self.distance_miles, 2),
            "duration": self.duration_minutes,
            "session_count": self.session_count,
        }


@dataclass(frozen=True)
class DailyDuration:
    """One entry of the weekly series."""

    day: str
    date: date
    duration_minutes: int = 0
    distance_miles: float = 0.0

    def to_dict(self) -> dict:
        return {
            "day": self.day,
            "date": self.date.isoformat(),
            "duration": self.duration_minutes,
            "distance": round(self.distance_miles, 2),
        }


@dataclass(frozen=True)
class WeeklyStats:
    """Mon..Sun series for the user's current local week."""

    week_start: date
    days: tuple[DailyDuration, ...]

    @property
    def total_duration_minutes(self) -> int:
        return sum(entry.duration_minutes for entry in self.days)

    @property
    def active_days(self) -> int:
        return sum(1 for entry in self.days if entry.duration_minutes > 0)

    def to_dict(self) -> dict:
        return {
            "week_start": self.week_start.isoformat(),
            "days": [entry.to_dict() for entry in self.days],
            "total_duration": self.total_duration_minutes,
            "active_days": self.active_days,
        }


@dataclass(frozen=True)
class MonthlyProgress:
    """Completed sessions this local month against the monthly goal."""

    month_start: date
    completed_sessions: int
    goal: int

    @property
    def percent(self) -> float:
        if self.goal <= 0:
            return 0.0
        return round(min(100.0, self.completed_sessions * 100.0 / self.goal), 1)

    def to_dict(self) -> dict:
        return {
            "month_start": self.month_start.isoformat(),
            "completed_sessions": self.completed_sessions,
            "goal": self.goal,
            "percent": self.percent,
        }


@dataclass(frozen=True)
class StreakSnapshot:
    """Streak values plus liveness relative to the user's local today."""

    current_streak: int
    longest_streak: int
    last_session_date: Optional[date]
    status: StreakStatus

    def to_dict(self) -> dict:
        return {
            "current_streak": self.current_streak,
            "longest_streak": self.longest_streak,
            "last_session_date": (
                self.last_session_date.isoformat() if self.last_session_date else None
            ),
            "status": self.status.value,
        }


@dataclass
class ProgressUpdate:
    """
    Outcome of one pipeline run.

    Attributes:
        today: Today's totals after the triggering event
        weekly: Current week series after the triggering event
        streak: Recomputed streak
        goal_state: Persisted goal/streak snapshot
        goal_growth_steps: Periods of growth applied in this run
        milestone_reached: Destination reached in this run, if any
        warnings: Degradations tolerated during the run (e.g. stale stats)
    """

    today: TodayStats
    weekly: WeeklyStats
    streak: StreakSnapshot
    goal_state: GoalState
    goal_growth_steps: int = 0
    milestone_reached: Optional[DestinationGoal] = None
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "stats": {
                "today": self.today.to_dict(),
                "weekly": self.weekly.to_dict(),
            },
            "streak": self.streak.to_dict(),
            "goal_state": self.goal_state.to_dict(),
            "goal_growth_steps": self.goal_growth_steps,
            "milestone_reached": (
                self.milestone_reached.to_dict() if self.milestone_reached else None
            ),
            "warnings": list(self.warnings),
        }
