"""Tests configuration and fixtures."""

from datetime import datetime, timedelta, timezone
from typing import Callable, Optional
from uuid import UUID

import pytest

from bravely.config import Settings
from bravely.domain.models.session import ExposureSession
from bravely.infrastructure.store import InMemoryProgressStore
from bravely.services.calendar import FixedClock
from bravely.services.progress import ProgressPipeline
from bravely.services.sessions import SessionService

# Monday 4 March 2024, midday UTC
MONDAY_NOON = datetime(2024, 3, 4, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def test_settings() -> Settings:
    """Settings isolated from the developer's environment."""
    return Settings(
        env="development",
        debug=True,
        store_backend="memory",
        default_timezone="UTC",
    )


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(MONDAY_NOON)


@pytest.fixture
def store() -> InMemoryProgressStore:
    return InMemoryProgressStore()


@pytest.fixture
def pipeline(store, clock, test_settings) -> ProgressPipeline:
    return ProgressPipeline(store, clock=clock, settings=test_settings)


@pytest.fixture
def session_service(store, pipeline, test_settings) -> SessionService:
    return SessionService(store, pipeline, settings=test_settings.sessions)


@pytest.fixture
async def user_id(pipeline) -> UUID:
    """A registered user in UTC with default goals."""
    state = await pipeline.register_user(UUID("00000000-0000-4000-8000-000000000001"), "UTC")
    return state.user_id


@pytest.fixture
def make_session() -> Callable[..., ExposureSession]:
    """Factory for session records, completed by default."""

    def _make(
        user_id: UUID,
        start: datetime,
        *,
        minutes: int = 20,
        distance: Optional[float] = 0.5,
        complete: bool = True,
    ) -> ExposureSession:
        return ExposureSession(
            user_id=user_id,
            fear_level_before=7,
            mood_before=4,
            start_time=start,
            end_time=start + timedelta(minutes=minutes) if complete else None,
            duration_minutes=minutes if complete else None,
            distance_miles=distance if complete else None,
            fear_level_after=4 if complete else None,
            mood_after=6 if complete else None,
            is_active=not complete,
        )

    return _make
