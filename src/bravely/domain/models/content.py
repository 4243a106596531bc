"""
Supportive Content Models

Motivational quotes and CBT tips shown around sessions. The engine
only selects from a supplied corpus; it never generates content.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class MotivationalQuote:
    """A short quote shown on the home screen."""

    quote: str
    author: Optional[str] = None
    id: Optional[int] = None

    def to_dict(self) -> dict:
        return {"id": self.id, "quote": self.quote, "author": self.author}


@dataclass(frozen=True)
class CbtTip:
    """
    A cognitive-behavioural technique offered before or during a session.

    Attributes:
        title: Short technique name
        description: How to apply it
        category: grounding, breathing, reframing...
    """

    title: str
    description: str
    category: str
    id: Optional[int] = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "category": self.category,
        }
