"""
API v1 Router

Aggregates all v1 API endpoints.
"""

from fastapi import APIRouter

from bravely.api.v1.endpoints.content import router as content_router
from bravely.api.v1.endpoints.health import router as health_router
from bravely.api.v1.endpoints.progress import router as progress_router
from bravely.api.v1.endpoints.sessions import router as sessions_router
from bravely.api.v1.endpoints.users import router as users_router

api_router = APIRouter()

api_router.include_router(
    health_router,
    prefix="/health",
    tags=["Health"],
)

api_router.include_router(
    users_router,
    prefix="/users",
    tags=["Users"],
)

api_router.include_router(
    sessions_router,
    prefix="/sessions",
    tags=["Sessions"],
)

api_router.include_router(
    progress_router,
    prefix="/progress",
    tags=["Progress"],
)

api_router.include_router(
    content_router,
    prefix="/content",
    tags=["Content"],
)
