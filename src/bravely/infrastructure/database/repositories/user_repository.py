"""
User Repository

Data access layer for users and their embedded goal snapshot.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from bravely.infrastructure.database.models.user_model import UserModel
from bravely.infrastructure.database.repositories.base import BaseRepository


class UserRepository(BaseRepository[UserModel]):
    """
    Repository for user data access.

    Goal snapshot columns are updated through ``save`` after the
    engine has mutated the loaded row.
    """

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(UserModel, session)

    async def save(self, user: UserModel) -> UserModel:
        """Flush pending changes on a loaded user row."""
        await self._session.flush()
        return user
