"""
API v1 Response Schemas

Pydantic models for the progress records shared by several
endpoint modules. Each is validated from the domain record's
``to_dict()`` output.
"""

from datetime import date, datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class SessionResponse(BaseModel):
    """One exposure session."""

    id: UUID
    user_id: UUID
    session_type: str
    start_time: datetime
    end_time: Optional[datetime] = None
    duration_minutes: Optional[int] = None
    distance_miles: Optional[float] = None
    fear_level_before: int
    fear_level_after: Optional[int] = None
    mood_before: int
    mood_after: Optional[int] = None
    is_active: bool
    notes: Optional[str] = None
    mood_tag: Optional[str] = None
    daily_intention: Optional[str] = None
    tools_used: list[str] = Field(default_factory=list)
    reflection: Optional[str] = None


class TodayStatsResponse(BaseModel):
    """Totals over today's completed sessions."""

    date: date
    distance: float = Field(..., description="Miles")
    duration: int = Field(..., description="Minutes")
    session_count: int

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "date": "2024-03-04",
                "distance": 1.2,
                "duration": 25,
                "session_count": 2,
            }
        }
    )


class DailyDurationResponse(BaseModel):
    day: str
    date: date
    duration: int
    distance: float


class WeeklyStatsResponse(BaseModel):
    """Mon..Sun series for the current local week."""

    week_start: date
    days: list[DailyDurationResponse]
    total_duration: int
    active_days: int


class MonthlyProgressResponse(BaseModel):
    month_start: date
    completed_sessions: int
    goal: int
    percent: float


class StreakResponse(BaseModel):
    """Streak values and liveness (none, active, grace, lapsed)."""

    current_streak: int
    longest_streak: int
    last_session_date: Optional[date] = None
    status: str


class DestinationResponse(BaseModel):
    name: str
    target_distance_miles: float
    reached_at: Optional[datetime] = None
    reached_session_id: Optional[UUID] = None


class GoalStateResponse(BaseModel):
    """The user's goal and streak snapshot."""

    user_id: UUID
    timezone: str
    progressive_goals_enabled: bool
    goal_growth_rate: float
    goal_growth_period: str
    current_distance_goal: float
    current_duration_goal: int
    distance_goal_ceiling: Optional[float] = None
    duration_goal_ceiling: Optional[int] = None
    destination_goals: list[DestinationResponse]
    last_goal_update: Optional[datetime] = None
    current_streak: int
    longest_streak: int
    last_session_date: Optional[date] = None
    monthly_session_goal: int


class StatsBundle(BaseModel):
    today: TodayStatsResponse
    weekly: WeeklyStatsResponse


class ProgressUpdateResponse(BaseModel):
    """Everything recomputed by one pipeline run."""

    stats: StatsBundle
    streak: StreakResponse
    goal_state: GoalStateResponse
    goal_growth_steps: int
    milestone_reached: Optional[DestinationResponse] = None
    warnings: list[str] = Field(default_factory=list)


class SessionResultResponse(BaseModel):
    """A stored session and, for completed sessions, the progress it produced."""

    session: SessionResponse
    progress: Optional[ProgressUpdateResponse] = None
