"""
Health Check Endpoints

Liveness and readiness for load balancers and orchestration probes.
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from bravely import __version__
from bravely.api.dependencies import get_store
from bravely.config import get_settings
from bravely.config.logging_config import get_logger
from bravely.domain.errors import PersistenceFailure
from bravely.infrastructure.store import ProgressStore

logger = get_logger(__name__)
router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str
    environment: str


class ReadinessResponse(BaseModel):
    """Readiness check response with component health."""

    ready: bool
    components: dict[str, bool]


@router.get(
    "",
    response_model=HealthResponse,
    summary="Health check",
)
async def health_check() -> HealthResponse:
    """Returns 200 while the application is running."""
    return HealthResponse(
        status="healthy",
        version=__version__,
        environment=get_settings().env,
    )


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    summary="Readiness check",
)
async def readiness_check(
    store: ProgressStore = Depends(get_store),
) -> ReadinessResponse:
    """Ready when the progress store answers."""
    try:
        store_ok = await store.health_check()
    except PersistenceFailure as e:
        logger.warning("Store health check failed", backend=store.backend_name, error=e.message)
        store_ok = False

    return ReadinessResponse(
        ready=store_ok,
        components={f"store_{store.backend_name}": store_ok},
    )


@router.get(
    "/live",
    response_model=HealthResponse,
    summary="Liveness probe",
)
async def liveness_check() -> HealthResponse:
    return HealthResponse(
        status="alive",
        version=__version__,
        environment=get_settings().env,
    )
