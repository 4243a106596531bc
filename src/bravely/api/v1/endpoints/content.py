"""
Supportive Content Endpoints

A random motivational quote or CBT tip.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel

from bravely.api.dependencies import get_content_service
from bravely.services.content import ContentService

router = APIRouter()


class QuoteResponse(BaseModel):
    id: Optional[int] = None
    quote: str
    author: Optional[str] = None


class CbtTipResponse(BaseModel):
    id: Optional[int] = None
    title: str
    description: str
    category: str


@router.get("/quote", response_model=QuoteResponse, summary="Random motivational quote")
async def random_quote(
    service: ContentService = Depends(get_content_service),
) -> QuoteResponse:
    quote = await service.random_quote()
    return QuoteResponse.model_validate(quote.to_dict())


@router.get("/cbt-tip", response_model=CbtTipResponse, summary="Random CBT tip")
async def random_tip(
    category: Optional[str] = Query(default=None, max_length=50),
    service: ContentService = Depends(get_content_service),
) -> CbtTipResponse:
    tip = await service.random_tip(category)
    return CbtTipResponse.model_validate(tip.to_dict())
