"""
API Dependencies

FastAPI dependency providers for the store, clock and services.
Tests swap any of them through ``app.dependency_overrides``.
"""

from functools import lru_cache

from fastapi import Depends

from bravely.config import get_settings
from bravely.infrastructure.database import get_db_manager
from bravely.infrastructure.store import ProgressStore, StoreBackend, get_progress_store
from bravely.services.calendar import Clock, SystemClock
from bravely.services.content import (
    ContentService,
    DatabaseContentSource,
    StaticContentSource,
)
from bravely.services.progress import ProgressPipeline
from bravely.services.sessions import SessionService


def get_store() -> ProgressStore:
    return get_progress_store()


@lru_cache()
def get_clock() -> Clock:
    return SystemClock()


def get_pipeline(
    store: ProgressStore = Depends(get_store),
    clock: Clock = Depends(get_clock),
) -> ProgressPipeline:
    return ProgressPipeline(store, clock=clock, settings=get_settings())


def get_session_service(
    store: ProgressStore = Depends(get_store),
    pipeline: ProgressPipeline = Depends(get_pipeline),
) -> SessionService:
    return SessionService(store, pipeline, settings=get_settings().sessions)


@lru_cache()
def get_content_service() -> ContentService:
    """Content from the database when it is the configured backend."""
    if get_settings().store_backend == StoreBackend.POSTGRES:
        return ContentService(DatabaseContentSource(get_db_manager()))
    return ContentService(StaticContentSource())
