"""
Exposure Session Endpoints

Session lifecycle: start, complete, edit, read, list and delete.
Completing, editing a completed session, or deleting returns the
refreshed progress so clients can update without a second request.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, ConfigDict, Field

from bravely.api.dependencies import get_session_service
from bravely.api.v1.schemas import (
    ProgressUpdateResponse,
    SessionResponse,
    SessionResultResponse,
)
from bravely.domain.enums.growth_period import MoodTag
from bravely.services.sessions import SessionService

router = APIRouter()


# Request Models

class StartSessionRequest(BaseModel):
    """Before-ratings for a new session."""

    user_id: UUID
    fear_level_before: int = Field(..., description="Fear rating before starting")
    mood_before: int = Field(..., description="Mood rating before starting")
    session_type: str = Field(default="walk", max_length=50)
    start_time: Optional[datetime] = Field(
        default=None,
        description="Defaults to now; set to log a past session",
    )
    daily_intention: Optional[str] = Field(default=None, max_length=500)
    notes: Optional[str] = Field(default=None, max_length=4000)


class CompleteSessionRequest(BaseModel):
    """After-ratings and measurements for completing a session."""

    fear_level_after: Optional[int] = None
    mood_after: Optional[int] = None
    end_time: Optional[datetime] = Field(default=None, description="Defaults to now")
    duration_minutes: Optional[int] = Field(
        default=None,
        description="Defaults to the elapsed minutes between start and end",
    )
    distance_miles: Optional[float] = None
    mood_tag: Optional[MoodTag] = None
    tools_used: Optional[list[str]] = None
    reflection: Optional[str] = Field(default=None, max_length=4000)
    notes: Optional[str] = Field(default=None, max_length=4000)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "fear_level_after": 4,
                "mood_after": 7,
                "distance_miles": 0.8,
                "mood_tag": "brave",
                "tools_used": ["breathing"],
            }
        }
    )


class UpdateSessionRequest(BaseModel):
    """Partial edit; only fields present in the body are changed."""

    session_type: Optional[str] = Field(default=None, max_length=50)
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    duration_minutes: Optional[int] = None
    distance_miles: Optional[float] = None
    fear_level_before: Optional[int] = None
    fear_level_after: Optional[int] = None
    mood_before: Optional[int] = None
    mood_after: Optional[int] = None
    notes: Optional[str] = Field(default=None, max_length=4000)
    mood_tag: Optional[MoodTag] = None
    daily_intention: Optional[str] = Field(default=None, max_length=500)
    tools_used: Optional[list[str]] = None
    reflection: Optional[str] = Field(default=None, max_length=4000)


def _session_response(session) -> SessionResponse:
    return SessionResponse.model_validate(session.to_dict())


# Endpoints

@router.post(
    "",
    response_model=SessionResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Start an exposure session",
)
async def start_session(
    request: StartSessionRequest,
    service: SessionService = Depends(get_session_service),
) -> SessionResponse:
    session = await service.start_session(
        request.user_id,
        fear_level_before=request.fear_level_before,
        mood_before=request.mood_before,
        session_type=request.session_type,
        start_time=request.start_time,
        daily_intention=request.daily_intention,
        notes=request.notes,
    )
    return _session_response(session)


@router.post(
    "/{session_id}/complete",
    response_model=SessionResultResponse,
    summary="Complete a session and refresh progress",
)
async def complete_session(
    session_id: UUID,
    request: CompleteSessionRequest,
    service: SessionService = Depends(get_session_service),
) -> SessionResultResponse:
    result = await service.complete_session(session_id, **request.model_dump())
    return SessionResultResponse.model_validate(result.to_dict())


@router.patch(
    "/{session_id}",
    response_model=SessionResultResponse,
    summary="Edit a session",
)
async def update_session(
    session_id: UUID,
    request: UpdateSessionRequest,
    service: SessionService = Depends(get_session_service),
) -> SessionResultResponse:
    result = await service.update_session(session_id, request.model_dump(exclude_unset=True))
    return SessionResultResponse.model_validate(result.to_dict())


@router.get(
    "/{session_id}",
    response_model=SessionResponse,
    summary="Get a session",
)
async def get_session(
    session_id: UUID,
    service: SessionService = Depends(get_session_service),
) -> SessionResponse:
    return _session_response(await service.get_session(session_id))


@router.get(
    "",
    response_model=list[SessionResponse],
    summary="List a user's sessions, newest first",
)
async def list_sessions(
    user_id: UUID,
    limit: Optional[int] = Query(default=None, ge=1, le=500),
    service: SessionService = Depends(get_session_service),
) -> list[SessionResponse]:
    sessions = await service.list_sessions(user_id, limit)
    return [_session_response(s) for s in sessions]


@router.delete(
    "/{session_id}",
    response_model=ProgressUpdateResponse,
    summary="Delete a session and recompute progress",
)
async def delete_session(
    session_id: UUID,
    service: SessionService = Depends(get_session_service),
) -> ProgressUpdateResponse:
    update = await service.delete_session(session_id)
    return ProgressUpdateResponse.model_validate(update.to_dict())
