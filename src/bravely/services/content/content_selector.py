"""
Supportive Content Selector

Picks a motivational quote or CBT tip from a corpus. Selection is a
pure function of the corpus and an injected random generator, so
tests can seed it; an unavailable or empty corpus yields a fixed
fallback instead of an error.
"""

import random
from abc import ABC, abstractmethod
from typing import Optional, Sequence

from sqlalchemy.exc import SQLAlchemyError

from bravely.config.logging_config import get_logger
from bravely.domain.errors import PersistenceFailure
from bravely.domain.models.content import CbtTip, MotivationalQuote
from bravely.infrastructure.database.connection import DatabaseManager
from bravely.infrastructure.database.repositories import ContentRepository

logger = get_logger(__name__)

DEFAULT_QUOTE = MotivationalQuote(
    id=1,
    quote="Every step forward is progress.",
    author="Bravely",
)

DEFAULT_TIP = CbtTip(
    id=1,
    title="Breathing",
    description="Take slow, deep breaths",
    category="grounding",
)

BUILTIN_QUOTES: tuple[MotivationalQuote, ...] = (
    DEFAULT_QUOTE,
    MotivationalQuote(id=2, quote="Courage is not the absence of fear, it is walking with it."),
    MotivationalQuote(id=3, quote="You have survived every hard day so far."),
    MotivationalQuote(id=4, quote="Small steps every day add up to big results."),
)

BUILTIN_TIPS: tuple[CbtTip, ...] = (
    DEFAULT_TIP,
    CbtTip(
        id=2,
        title="5-4-3-2-1",
        description="Name five things you see, four you hear, three you can touch, "
        "two you smell and one you taste",
        category="grounding",
    ),
    CbtTip(
        id=3,
        title="Check the evidence",
        description="Ask what actually happened the last time you felt this way",
        category="reframing",
    ),
    CbtTip(
        id=4,
        title="Ride the wave",
        description="Anxiety peaks and passes; notice it rise and fall without fighting it",
        category="acceptance",
    ),
)


def pick_quote(corpus: Sequence[MotivationalQuote], rng: random.Random) -> MotivationalQuote:
    """Uniformly random quote; the default quote for an empty corpus."""
    if not corpus:
        return DEFAULT_QUOTE
    return rng.choice(list(corpus))


def pick_tip(
    corpus: Sequence[CbtTip],
    rng: random.Random,
    category: Optional[str] = None,
) -> CbtTip:
    """
    Uniformly random tip, optionally restricted to one category.

    Falls back to the default tip when nothing matches.
    """
    candidates = [
        tip for tip in corpus
        if category is None or tip.category == category
    ]
    if not candidates:
        return DEFAULT_TIP
    return rng.choice(candidates)


class ContentSource(ABC):
    """Supplies the quote and tip corpora."""

    @abstractmethod
    async def quotes(self) -> Sequence[MotivationalQuote]:
        """All quotes."""

    @abstractmethod
    async def tips(self) -> Sequence[CbtTip]:
        """All CBT tips."""


class StaticContentSource(ContentSource):
    """Fixed in-process corpus."""

    def __init__(
        self,
        quotes: Sequence[MotivationalQuote] = BUILTIN_QUOTES,
        tips: Sequence[CbtTip] = BUILTIN_TIPS,
    ) -> None:
        self._quotes = tuple(quotes)
        self._tips = tuple(tips)

    async def quotes(self) -> Sequence[MotivationalQuote]:
        return self._quotes

    async def tips(self) -> Sequence[CbtTip]:
        return self._tips


class DatabaseContentSource(ContentSource):
    """Corpus read from the motivational_quotes and cbt_tips tables."""

    def __init__(self, db: DatabaseManager) -> None:
        self._db = db

    async def quotes(self) -> Sequence[MotivationalQuote]:
        try:
            async with self._db.session() as session:
                rows = await ContentRepository(session).get_quotes()
                return [MotivationalQuote(id=r.id, quote=r.quote, author=r.author) for r in rows]
        except SQLAlchemyError as e:
            raise PersistenceFailure("Loading quotes failed", original_error=e)

    async def tips(self) -> Sequence[CbtTip]:
        try:
            async with self._db.session() as session:
                rows = await ContentRepository(session).get_cbt_tips()
                return [
                    CbtTip(id=r.id, title=r.title, description=r.description, category=r.category)
                    for r in rows
                ]
        except SQLAlchemyError as e:
            raise PersistenceFailure("Loading CBT tips failed", original_error=e)


class ContentService:
    """
    Serves one quote or tip per request.

    Usage:
        service = ContentService(StaticContentSource(), rng=random.Random(7))
        quote = await service.random_quote()
    """

    def __init__(
        self,
        source: Optional[ContentSource] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self._source = source or StaticContentSource()
        self._rng = rng or random.Random()

    async def random_quote(self) -> MotivationalQuote:
        try:
            corpus = await self._source.quotes()
        except PersistenceFailure as e:
            logger.warning("Quote corpus unavailable, using fallback", error=e.message)
            return DEFAULT_QUOTE
        return pick_quote(corpus, self._rng)

    async def random_tip(self, category: Optional[str] = None) -> CbtTip:
        try:
            corpus = await self._source.tips()
        except PersistenceFailure as e:
            logger.warning("Tip corpus unavailable, using fallback", error=e.message)
            return DEFAULT_TIP
        return pick_tip(corpus, self._rng, category)
