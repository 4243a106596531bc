"""
Repository pattern implementations package.
"""

from bravely.infrastructure.database.repositories.base import BaseRepository
from bravely.infrastructure.database.repositories.user_repository import UserRepository
from bravely.infrastructure.database.repositories.session_repository import SessionRepository
from bravely.infrastructure.database.repositories.content_repository import ContentRepository

__all__ = [
    "BaseRepository",
    "UserRepository",
    "SessionRepository",
    "ContentRepository",
]
