"""
Exposure Session Repository

Data access for exposure sessions, including the completed-session
range query the progress engine is built on.
"""

from datetime import datetime
from typing import Sequence
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from bravely.infrastructure.database.models.session_model import ExposureSessionModel
from bravely.infrastructure.database.repositories.base import BaseRepository


class SessionRepository(BaseRepository[ExposureSessionModel]):
    """Repository for exposure session data access."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(ExposureSessionModel, session)

    async def get_recent_for_user(
        self,
        user_id: UUID,
        *,
        limit: int = 50,
    ) -> Sequence[ExposureSessionModel]:
        """Newest sessions first, any state."""
        result = await self._session.execute(
            select(ExposureSessionModel)
            .where(ExposureSessionModel.user_id == user_id)
            .order_by(ExposureSessionModel.start_time.desc())
            .limit(limit)
        )
        return result.scalars().all()

    async def get_completed_in_range(
        self,
        user_id: UUID,
        from_inclusive: datetime,
        to_exclusive: datetime,
    ) -> Sequence[ExposureSessionModel]:
        """
        Completed sessions started within [from, to).

        Returns:
            Sessions ascending by start time
        """
        result = await self._session.execute(
            select(ExposureSessionModel)
            .where(
                ExposureSessionModel.user_id == user_id,
                ExposureSessionModel.end_time.is_not(None),
                ExposureSessionModel.start_time >= from_inclusive,
                ExposureSessionModel.start_time < to_exclusive,
            )
            .order_by(ExposureSessionModel.start_time.asc())
        )
        return result.scalars().all()
