"""
Progress Endpoints

Read-side statistics, streak and goal views, plus goal preferences
and destination milestones. All day boundaries follow the user's
stored timezone.
"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from bravely.api.dependencies import get_pipeline
from bravely.api.v1.schemas import (
    GoalStateResponse,
    MonthlyProgressResponse,
    ProgressUpdateResponse,
    StreakResponse,
    TodayStatsResponse,
    WeeklyStatsResponse,
)
from bravely.domain.enums.growth_period import GrowthPeriod
from bravely.services.progress import ProgressPipeline

router = APIRouter()


class GoalPreferencesRequest(BaseModel):
    """Partial update of goal preferences; omitted fields are unchanged."""

    progressive_goals_enabled: Optional[bool] = None
    goal_growth_rate: Optional[float] = Field(default=None, description="Percent per period, > 0")
    goal_growth_period: Optional[GrowthPeriod] = None
    distance_goal_ceiling: Optional[float] = Field(default=None, description="null clears the ceiling")
    duration_goal_ceiling: Optional[int] = Field(default=None, description="null clears the ceiling")
    monthly_session_goal: Optional[int] = None
    timezone: Optional[str] = Field(default=None, max_length=64)


class DestinationRequest(BaseModel):
    """A milestone appended to the end of the progression."""

    name: str = Field(..., min_length=1, max_length=100)
    target_distance_miles: float


_PREFERENCE_ARGUMENTS = {
    "progressive_goals_enabled": "enabled",
    "goal_growth_rate": "growth_rate",
    "goal_growth_period": "growth_period",
    "distance_goal_ceiling": "distance_ceiling",
    "duration_goal_ceiling": "duration_ceiling",
    "monthly_session_goal": "monthly_session_goal",
    "timezone": "timezone",
}


@router.get("/{user_id}/today", response_model=TodayStatsResponse, summary="Today's totals")
async def get_today(
    user_id: UUID,
    pipeline: ProgressPipeline = Depends(get_pipeline),
) -> TodayStatsResponse:
    stats = await pipeline.get_today_stats(user_id)
    return TodayStatsResponse.model_validate(stats.to_dict())


@router.get("/{user_id}/weekly", response_model=WeeklyStatsResponse, summary="Mon..Sun series")
async def get_weekly(
    user_id: UUID,
    pipeline: ProgressPipeline = Depends(get_pipeline),
) -> WeeklyStatsResponse:
    stats = await pipeline.get_weekly_stats(user_id)
    return WeeklyStatsResponse.model_validate(stats.to_dict())


@router.get(
    "/{user_id}/monthly",
    response_model=MonthlyProgressResponse,
    summary="Sessions this month against the monthly goal",
)
async def get_monthly(
    user_id: UUID,
    pipeline: ProgressPipeline = Depends(get_pipeline),
) -> MonthlyProgressResponse:
    progress = await pipeline.get_monthly_progress(user_id)
    return MonthlyProgressResponse.model_validate(progress.to_dict())


@router.get("/{user_id}/streak", response_model=StreakResponse, summary="Current streak")
async def get_streak(
    user_id: UUID,
    pipeline: ProgressPipeline = Depends(get_pipeline),
) -> StreakResponse:
    snapshot = await pipeline.get_streak(user_id)
    return StreakResponse.model_validate(snapshot.to_dict())


@router.get("/{user_id}/goals", response_model=GoalStateResponse, summary="Goal state")
async def get_goals(
    user_id: UUID,
    pipeline: ProgressPipeline = Depends(get_pipeline),
) -> GoalStateResponse:
    state = await pipeline.get_goal_state(user_id)
    return GoalStateResponse.model_validate(state.to_dict())


@router.patch("/{user_id}/goals", response_model=GoalStateResponse, summary="Update goal preferences")
async def update_goals(
    user_id: UUID,
    request: GoalPreferencesRequest,
    pipeline: ProgressPipeline = Depends(get_pipeline),
) -> GoalStateResponse:
    changes = {
        _PREFERENCE_ARGUMENTS[name]: value
        for name, value in request.model_dump(exclude_unset=True).items()
    }
    state = await pipeline.update_goal_preferences(user_id, **changes)
    return GoalStateResponse.model_validate(state.to_dict())


@router.post(
    "/{user_id}/goals/reset",
    response_model=GoalStateResponse,
    summary="Reset goals to defaults",
)
async def reset_goals(
    user_id: UUID,
    pipeline: ProgressPipeline = Depends(get_pipeline),
) -> GoalStateResponse:
    state = await pipeline.reset_goals(user_id)
    return GoalStateResponse.model_validate(state.to_dict())


@router.post(
    "/{user_id}/destinations",
    response_model=GoalStateResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add a destination milestone",
)
async def add_destination(
    user_id: UUID,
    request: DestinationRequest,
    pipeline: ProgressPipeline = Depends(get_pipeline),
) -> GoalStateResponse:
    state = await pipeline.add_destination_goal(
        user_id, request.name, request.target_distance_miles
    )
    return GoalStateResponse.model_validate(state.to_dict())


@router.post(
    "/{user_id}/recompute",
    response_model=ProgressUpdateResponse,
    summary="Rebuild progress from session history",
)
async def recompute(
    user_id: UUID,
    pipeline: ProgressPipeline = Depends(get_pipeline),
) -> ProgressUpdateResponse:
    update = await pipeline.recompute(user_id)
    return ProgressUpdateResponse.model_validate(update.to_dict())
