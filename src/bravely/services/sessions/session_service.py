"""
Exposure Session Service

Validates and records exposure sessions, then hands completed
sessions to the progress pipeline.

Lifecycle:
    start    → active session with before-ratings
    complete → end time + after-ratings; counts toward progress
    update   → edits; completed sessions re-run the pipeline
    delete   → removal plus full recompute

A session that has been completed cannot be reopened.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional, Sequence
from uuid import UUID

from bravely.config.logging_config import get_logger
from bravely.config.settings import SessionSettings, get_settings
from bravely.domain.enums.growth_period import MoodTag
from bravely.domain.errors import InvalidRangeError, NotFoundError
from bravely.domain.models.progress import ProgressUpdate
from bravely.domain.models.session import ExposureSession
from bravely.infrastructure.metrics import SESSIONS_STARTED_TOTAL, track_session_completed
from bravely.infrastructure.store.base import ProgressStore
from bravely.services.calendar.clock import Clock, ensure_utc
from bravely.services.progress.progress_pipeline import ProgressPipeline

logger = get_logger(__name__)

_ANNOTATION_FIELDS = ("notes", "daily_intention", "reflection")

# Fields a client may edit after creation
EDITABLE_FIELDS = frozenset({
    "session_type",
    "start_time",
    "end_time",
    "duration_minutes",
    "distance_miles",
    "fear_level_before",
    "fear_level_after",
    "mood_before",
    "mood_after",
    "notes",
    "mood_tag",
    "daily_intention",
    "tools_used",
    "reflection",
})

# Editable fields that must always hold a value
REQUIRED_FIELDS = frozenset({
    "session_type",
    "start_time",
    "fear_level_before",
    "mood_before",
    "tools_used",
})


@dataclass
class SessionResult:
    """A stored session plus the progress it produced, if any."""

    session: ExposureSession
    progress: Optional[ProgressUpdate] = None

    def to_dict(self) -> dict:
        return {
            "session": self.session.to_dict(),
            "progress": self.progress.to_dict() if self.progress else None,
        }


class SessionService:
    """
    Session recording service.

    Usage:
        service = SessionService(store, pipeline)
        session = await service.start_session(user_id, fear_level_before=7, mood_before=3)
        result = await service.complete_session(session.id, fear_level_after=4, mood_after=6)
    """

    def __init__(
        self,
        store: ProgressStore,
        pipeline: ProgressPipeline,
        clock: Optional[Clock] = None,
        settings: Optional[SessionSettings] = None,
    ) -> None:
        self._store = store
        self._pipeline = pipeline
        self._clock = clock or pipeline.clock
        self._settings = settings or get_settings().sessions

    # =========================================================================
    # Validation
    # =========================================================================

    def _check_rating(self, name: str, value: Optional[int]) -> None:
        if value is None:
            return
        low, high = self._settings.rating_min, self._settings.rating_max
        if not low <= value <= high:
            raise InvalidRangeError(
                f"{name} must be between {low} and {high}, got {value}",
                field=name,
            )

    def validate(self, session: ExposureSession) -> None:
        """
        Check a session record before it is stored.

        Raises:
            InvalidRangeError: On the first violated constraint
        """
        for name in ("start_time", "fear_level_before", "mood_before"):
            if getattr(session, name) is None:
                raise InvalidRangeError(f"{name} is required", field=name)

        for name in ("fear_level_before", "fear_level_after", "mood_before", "mood_after"):
            self._check_rating(name, getattr(session, name))

        if session.end_time is not None and session.end_time < session.start_time:
            raise InvalidRangeError("end_time must not be before start_time", field="end_time")

        if session.duration_minutes is not None and session.duration_minutes < 0:
            raise InvalidRangeError("duration_minutes must not be negative", field="duration_minutes")

        if session.distance_miles is not None and session.distance_miles < 0:
            raise InvalidRangeError("distance_miles must not be negative", field="distance_miles")

        if not session.session_type or not session.session_type.strip():
            raise InvalidRangeError("session_type must not be blank", field="session_type")

        for name in _ANNOTATION_FIELDS:
            value = getattr(session, name)
            if value is not None and not value.strip():
                raise InvalidRangeError(f"{name} must not be blank", field=name)

        if any(not tool or not tool.strip() for tool in session.tools_used):
            raise InvalidRangeError("tools_used entries must not be blank", field="tools_used")

        if session.is_active and session.is_complete:
            raise InvalidRangeError("A completed session cannot be active", field="is_active")

    # =========================================================================
    # Operations
    # =========================================================================

    async def start_session(
        self,
        user_id: UUID,
        *,
        fear_level_before: int,
        mood_before: int,
        session_type: str = "walk",
        start_time: Optional[datetime] = None,
        daily_intention: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> ExposureSession:
        """
        Create an active session.

        Raises:
            NotFoundError: If the user is unknown
            InvalidRangeError: If a rating or annotation is invalid
        """
        session = ExposureSession(
            user_id=user_id,
            fear_level_before=fear_level_before,
            mood_before=mood_before,
            session_type=session_type,
            start_time=ensure_utc(start_time) if start_time else self._clock.now(),
            daily_intention=daily_intention,
            notes=notes,
        )
        self.validate(session)
        created = await self._store.create_session(session)

        SESSIONS_STARTED_TOTAL.labels(session_type=created.session_type).inc()
        logger.info(
            "Session started",
            session_id=str(created.id),
            user_id=str(user_id),
            session_type=created.session_type,
        )
        return created

    async def complete_session(
        self,
        session_id: UUID,
        *,
        fear_level_after: Optional[int] = None,
        mood_after: Optional[int] = None,
        end_time: Optional[datetime] = None,
        duration_minutes: Optional[int] = None,
        distance_miles: Optional[float] = None,
        mood_tag: Optional[MoodTag] = None,
        tools_used: Optional[Sequence[str]] = None,
        reflection: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> SessionResult:
        """
        Complete an active session and run the progress pipeline.

        Duration defaults to the elapsed minutes between start and end.

        Raises:
            NotFoundError: If the session is unknown
            InvalidRangeError: If the session is already complete or a value is invalid
        """
        session = await self.get_session(session_id)
        if session.is_complete:
            raise InvalidRangeError("Session is already complete", field="end_time")

        session.end_time = ensure_utc(end_time) if end_time else self._clock.now()
        session.fear_level_after = fear_level_after
        session.mood_after = mood_after
        session.distance_miles = distance_miles
        session.mood_tag = mood_tag
        session.reflection = reflection
        if tools_used is not None:
            session.tools_used = list(tools_used)
        if notes is not None:
            session.notes = notes
        session.is_active = False
        session.duration_minutes = (
            duration_minutes if duration_minutes is not None else session.elapsed_minutes()
        )

        self.validate(session)
        stored = await self._store.update_session(session)

        track_session_completed(stored.session_type, stored.duration_minutes)
        logger.info(
            "Session completed",
            session_id=str(stored.id),
            user_id=str(stored.user_id),
            duration_minutes=stored.duration_minutes,
            fear_reduction=stored.fear_reduction,
            mood_change=stored.mood_change,
        )

        progress = await self._pipeline.on_session_completed(stored)
        return SessionResult(session=stored, progress=progress)

    async def update_session(self, session_id: UUID, changes: dict[str, Any]) -> SessionResult:
        """
        Edit a session.

        Completed sessions re-run the pipeline so stats, streak and goals
        reflect the edit. Setting end_time on an active session completes it.

        Raises:
            NotFoundError: If the session is unknown
            InvalidRangeError: For unknown fields, reopening, clearing a required
                field, or invalid values
        """
        unknown = set(changes) - EDITABLE_FIELDS
        if unknown:
            raise InvalidRangeError(
                f"Fields cannot be edited: {', '.join(sorted(unknown))}",
                field=sorted(unknown)[0],
            )

        for name in sorted(REQUIRED_FIELDS & set(changes)):
            if changes[name] is None:
                raise InvalidRangeError(f"{name} cannot be cleared", field=name)

        session = await self.get_session(session_id)
        was_complete = session.is_complete

        if was_complete and "end_time" in changes and changes["end_time"] is None:
            raise InvalidRangeError("A completed session cannot be reopened", field="end_time")

        for name, value in changes.items():
            if name == "tools_used" and value is not None:
                value = list(value)
            elif name in ("start_time", "end_time") and value is not None:
                value = ensure_utc(value)
            setattr(session, name, value)

        if session.is_complete:
            session.is_active = False
            if session.duration_minutes is None:
                session.duration_minutes = session.elapsed_minutes()

        self.validate(session)
        stored = await self._store.update_session(session)
        logger.info(
            "Session updated",
            session_id=str(stored.id),
            fields=sorted(changes),
        )

        if not stored.is_complete:
            return SessionResult(session=stored)

        if not was_complete:
            track_session_completed(stored.session_type, stored.duration_minutes)
        progress = await self._pipeline.on_session_completed(stored)
        return SessionResult(session=stored, progress=progress)

    async def delete_session(self, session_id: UUID) -> ProgressUpdate:
        """Delete a session and recompute the owner's progress."""
        return await self._pipeline.on_session_deleted(session_id)

    async def get_session(self, session_id: UUID) -> ExposureSession:
        session = await self._store.get_session(session_id)
        if session is None:
            raise NotFoundError("Session", session_id)
        return session

    async def list_sessions(
        self,
        user_id: UUID,
        limit: Optional[int] = None,
    ) -> Sequence[ExposureSession]:
        """Session history, newest first."""
        # Confirms the user exists
        await self._store.get_user_goal_state(user_id)
        return await self._store.list_sessions(
            user_id, limit=limit or self._settings.history_limit
        )
