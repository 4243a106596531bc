"""Supportive content (quotes and CBT tips) package."""

from bravely.services.content.content_selector import (
    BUILTIN_QUOTES,
    BUILTIN_TIPS,
    DEFAULT_QUOTE,
    DEFAULT_TIP,
    ContentService,
    ContentSource,
    DatabaseContentSource,
    StaticContentSource,
    pick_quote,
    pick_tip,
)

__all__ = [
    "BUILTIN_QUOTES",
    "BUILTIN_TIPS",
    "DEFAULT_QUOTE",
    "DEFAULT_TIP",
    "ContentService",
    "ContentSource",
    "DatabaseContentSource",
    "StaticContentSource",
    "pick_quote",
    "pick_tip",
]
