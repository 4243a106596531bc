"""Exposure session recording package."""

from bravely.services.sessions.session_service import (
    EDITABLE_FIELDS,
    REQUIRED_FIELDS,
    SessionResult,
    SessionService,
)

__all__ = [
    "EDITABLE_FIELDS",
    "REQUIRED_FIELDS",
    "SessionResult",
    "SessionService",
]
