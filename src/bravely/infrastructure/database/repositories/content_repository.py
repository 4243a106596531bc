"""
Content Repository

Loads the quote and CBT tip corpora for the content selector.
"""

from typing import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from bravely.infrastructure.database.models.content_model import (
    CbtTipModel,
    MotivationalQuoteModel,
)


class ContentRepository:
    """Read-only access to supportive content tables."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_quotes(self) -> Sequence[MotivationalQuoteModel]:
        result = await self._session.execute(
            select(MotivationalQuoteModel).order_by(MotivationalQuoteModel.id)
        )
        return result.scalars().all()

    async def get_cbt_tips(self) -> Sequence[CbtTipModel]:
        result = await self._session.execute(
            select(CbtTipModel).order_by(CbtTipModel.id)
        )
        return result.scalars().all()
