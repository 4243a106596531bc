"""
Progress Store Factory

Creates the progress store selected by configuration.

CONFIGURATION:
    BRAVELY_STORE_BACKEND=postgres  # or: memory
"""

from enum import StrEnum
from typing import Optional

from bravely.config import get_settings
from bravely.config.logging_config import get_logger
from bravely.infrastructure.store.base import ProgressStore

logger = get_logger(__name__)


class StoreBackend(StrEnum):
    """Supported store backends."""

    POSTGRES = "postgres"
    MEMORY = "memory"


_store_instance: Optional[ProgressStore] = None


def get_progress_store(backend: Optional[StoreBackend] = None) -> ProgressStore:
    """
    Get the process-wide progress store.

    Args:
        backend: Override the configured backend (first call only)

    Returns:
        Configured progress store
    """
    global _store_instance
    if _store_instance is not None:
        return _store_instance

    if backend is None:
        backend = StoreBackend(get_settings().store_backend)

    _store_instance = _create_store(backend)
    logger.info("Progress store initialized", backend=backend.value)
    return _store_instance


def _create_store(backend: StoreBackend) -> ProgressStore:
    if backend == StoreBackend.POSTGRES:
        from bravely.infrastructure.store.sql_store import SqlAlchemyProgressStore
        return SqlAlchemyProgressStore()

    if backend == StoreBackend.MEMORY:
        from bravely.infrastructure.store.memory_store import InMemoryProgressStore
        return InMemoryProgressStore()

    raise ValueError(f"Unknown store backend: {backend}")


def clear_store_cache() -> None:
    """Drop the cached store (for testing)."""
    global _store_instance
    _store_instance = None
