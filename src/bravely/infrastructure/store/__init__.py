"""
Progress store package.

Usage:
    from bravely.infrastructure.store import get_progress_store

    store = get_progress_store()
    sessions = await store.list_completed_sessions(user_id, start, end)
"""

from bravely.infrastructure.store.base import HISTORY_END, HISTORY_START, ProgressStore
from bravely.infrastructure.store.memory_store import InMemoryProgressStore
from bravely.infrastructure.store.store_factory import (
    StoreBackend,
    clear_store_cache,
    get_progress_store,
)

__all__ = [
    "HISTORY_END",
    "HISTORY_START",
    "ProgressStore",
    "InMemoryProgressStore",
    "StoreBackend",
    "get_progress_store",
    "clear_store_cache",
]
