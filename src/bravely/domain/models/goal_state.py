"""
Goal and Streak State Model

The per-user projection owned by the progress engine. It is
embedded in the user record and mutated only by the streak tracker
and the goal growth engine, never directly by request handlers.
"""

from dataclasses import dataclass, field, replace
from datetime import date, datetime
from typing import Optional
from uuid import UUID

from bravely.domain.enums.growth_period import GrowthPeriod


@dataclass
class DestinationGoal:
    """
    A named distance milestone in an ordered progression.

    Attributes:
        name: Display name ("Corner shop", "Park gate")
        target_distance_miles: Distance that reaches the milestone
        reached_at: When the milestone was reached; None while pending
        reached_session_id: Session credited with reaching it
    """

    name: str
    target_distance_miles: float
    reached_at: Optional[datetime] = None
    reached_session_id: Optional[UUID] = None

    @property
    def is_reached(self) -> bool:
        return self.reached_at is not None

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "target_distance_miles": self.target_distance_miles,
            "reached_at": self.reached_at.isoformat() if self.reached_at else None,
            "reached_session_id": (
                str(self.reached_session_id) if self.reached_session_id else None
            ),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "DestinationGoal":
        reached_at = data.get("reached_at")
        session_id = data.get("reached_session_id")
        return cls(
            name=data["name"],
            target_distance_miles=float(data["target_distance_miles"]),
            reached_at=datetime.fromisoformat(reached_at) if reached_at else None,
            reached_session_id=UUID(session_id) if session_id else None,
        )


@dataclass
class GoalState:
    """
    User goal/streak snapshot.

    Attributes:
        user_id: Owning user
        timezone: IANA timezone name for all day-boundary logic
        progressive_goals_enabled: Whether goals grow over time
        goal_growth_rate: Percent growth per period (> 0)
        goal_growth_period: Weekly or monthly growth
        current_distance_goal: Distance target in miles
        current_duration_goal: Duration target in minutes
        distance_goal_ceiling: User-set distance cap (None = configured max)
        duration_goal_ceiling: User-set duration cap (None = configured max)
        destination_goals: Ordered milestones
        last_goal_update: Anchor of the current growth period
        current_streak: Consecutive local days ending at last_session_date
        longest_streak: High-water mark of current_streak
        last_session_date: Local date of the most recent completed session
        monthly_session_goal: Target number of sessions per month
    """

    user_id: UUID
    timezone: str = "UTC"
    progressive_goals_enabled: bool = True
    goal_growth_rate: float = 5.0
    goal_growth_period: GrowthPeriod = GrowthPeriod.WEEKLY
    current_distance_goal: float = 1.0
    current_duration_goal: int = 15
    distance_goal_ceiling: Optional[float] = None
    duration_goal_ceiling: Optional[int] = None
    destination_goals: list[DestinationGoal] = field(default_factory=list)
    last_goal_update: Optional[datetime] = None
    current_streak: int = 0
    longest_streak: int = 0
    last_session_date: Optional[date] = None
    monthly_session_goal: int = 10

    def copy(self) -> "GoalState":
        """Independent copy; milestone records are duplicated too."""
        return replace(
            self,
            destination_goals=[replace(goal) for goal in self.destination_goals],
        )

    @property
    def next_destination(self) -> Optional[DestinationGoal]:
        """First milestone not yet reached, in stored order."""
        for goal in self.destination_goals:
            if not goal.is_reached:
                return goal
        return None

    def to_dict(self) -> dict:
        """Serialize snapshot to dictionary."""
        return {
            "user_id": str(self.user_id),
            "timezone": self.timezone,
            "progressive_goals_enabled": self.progressive_goals_enabled,
            "goal_growth_rate": self.goal_growth_rate,
            "goal_growth_period": self.goal_growth_period.value,
            "current_distance_goal": self.current_distance_goal,
            "current_duration_goal": self.current_duration_goal,
            "distance_goal_ceiling": self.distance_goal_ceiling,
            "duration_goal_ceiling": self.duration_goal_ceiling,
            "destination_goals": [goal.to_dict() for goal in self.destination_goals],
            "last_goal_update": (
                self.last_goal_update.isoformat() if self.last_goal_update else None
            ),
            "current_streak": self.current_streak,
            "longest_streak": self.longest_streak,
            "last_session_date": (
                self.last_session_date.isoformat() if self.last_session_date else None
            ),
            "monthly_session_goal": self.monthly_session_goal,
        }
