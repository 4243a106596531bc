"""
Progress Engine Errors

Exception taxonomy shared by the store, the engine and the API layer.
Every error carries a stable machine-readable reason so handlers can
return structured responses without leaking internals.
"""

from typing import Any, Optional


class ProgressError(Exception):
    """Base exception for progress engine errors."""

    reason: str = "progress_error"

    def __init__(
        self,
        message: str,
        *,
        field: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.field = field
        self.original_error = original_error

    def to_dict(self) -> dict[str, Any]:
        """Serialize for API responses."""
        payload: dict[str, Any] = {
            "error": self.reason,
            "message": self.message,
        }
        if self.field:
            payload["field"] = self.field
        return payload


class NotFoundError(ProgressError):
    """User or session ID is unknown."""

    reason = "not_found"

    def __init__(self, entity: str, entity_id: Any) -> None:
        super().__init__(f"{entity} {entity_id} not found")
        self.entity = entity
        self.entity_id = entity_id


class InvalidRangeError(ProgressError):
    """
    A value falls outside its permitted range.

    Raised for end times before start times, ratings off the scale,
    negative distances or durations, and blank annotations.
    """

    reason = "invalid_range"


class PersistenceFailure(ProgressError):
    """
    Store read or write failed.

    The message is for logs only; API responses use a generic text.
    """

    reason = "persistence_failure"

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.reason,
            "message": "Progress data is temporarily unavailable. Please try again.",
        }


class ConfigurationError(ProgressError):
    """Goal preferences or calendar settings are invalid."""

    reason = "configuration_error"
