"""
User Endpoints

Registers a user with default goals so sessions can be recorded.
Account management and authentication live outside this service.
"""

from typing import Optional
from uuid import UUID, uuid4

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from bravely.api.dependencies import get_pipeline
from bravely.api.v1.schemas import GoalStateResponse
from bravely.services.progress import ProgressPipeline

router = APIRouter()


class RegisterUserRequest(BaseModel):
    """Request to register a user."""

    user_id: Optional[UUID] = Field(default=None, description="Existing account ID; generated if omitted")
    timezone: Optional[str] = Field(
        default=None,
        max_length=64,
        description="IANA timezone name, e.g. Europe/London",
    )


@router.post(
    "",
    response_model=GoalStateResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a user with default goals",
)
async def register_user(
    request: RegisterUserRequest,
    pipeline: ProgressPipeline = Depends(get_pipeline),
) -> GoalStateResponse:
    state = await pipeline.register_user(request.user_id or uuid4(), request.timezone)
    return GoalStateResponse.model_validate(state.to_dict())
