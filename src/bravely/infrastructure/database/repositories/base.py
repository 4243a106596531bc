"""
Base Repository Pattern

Generic async CRUD operations shared by all repositories, keeping
query construction out of the store and service layers.
"""

from typing import Any, Generic, Optional, Type, TypeVar

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from bravely.infrastructure.database.connection import Base

ModelT = TypeVar("ModelT", bound=Base)


class BaseRepository(Generic[ModelT]):
    """
    Generic base repository with async CRUD operations.

    Usage:
        class UserRepository(BaseRepository[UserModel]):
            pass

        repo = UserRepository(session)
        user = await repo.get_by_id(user_id)
    """

    def __init__(self, model: Type[ModelT], session: AsyncSession) -> None:
        """
        Args:
            model: SQLAlchemy model class
            session: Async database session
        """
        self._model = model
        self._session = session

    async def get_by_id(self, id: Any) -> Optional[ModelT]:
        """
        Get entity by primary key.

        Returns:
            Entity if found, None otherwise
        """
        return await self._session.get(self._model, id)

    async def create(self, entity: ModelT) -> ModelT:
        """Insert an entity and flush to obtain generated values."""
        self._session.add(entity)
        await self._session.flush()
        await self._session.refresh(entity)
        return entity

    async def delete(self, id: Any) -> bool:
        """
        Delete entity by primary key.

        Returns:
            True if deleted, False if not found
        """
        result = await self._session.execute(
            delete(self._model).where(self._model.id == id)
        )
        return result.rowcount > 0
