"""
Progress Store Abstract Interface

Defines the persistence contract consumed by the progress engine.
Session records are created, point-updated and deleted; the engine
itself only issues range reads plus goal snapshot read/write.

ARCHITECTURE: Failures are raised as PersistenceFailure and never
swallowed here, so callers decide whether to degrade or fail.
"""

from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Optional, Sequence
from uuid import UUID

from bravely.domain.models.goal_state import GoalState
from bravely.domain.models.session import ExposureSession

# Open bounds for whole-history reads
HISTORY_START = datetime(1970, 1, 1, tzinfo=timezone.utc)
HISTORY_END = datetime.max.replace(tzinfo=timezone.utc)


class ProgressStore(ABC):
    """
    Abstract persistence collaborator.

    All implementations must:
    - Return completed sessions ascending by start time
    - Treat from/to bounds as [inclusive, exclusive) on start time
    - Raise NotFoundError for unknown session IDs on point operations
    - Raise PersistenceFailure for backend errors
    """

    @property
    @abstractmethod
    def backend_name(self) -> str:
        """Backend name for logging/health."""

    # Session records

    @abstractmethod
    async def create_session(self, session: ExposureSession) -> ExposureSession:
        """Persist a new session."""

    @abstractmethod
    async def get_session(self, session_id: UUID) -> Optional[ExposureSession]:
        """Fetch a session or None."""

    @abstractmethod
    async def update_session(self, session: ExposureSession) -> ExposureSession:
        """
        Replace a stored session.

        Raises:
            NotFoundError: If the session does not exist
        """

    @abstractmethod
    async def delete_session(self, session_id: UUID) -> ExposureSession:
        """
        Delete a session and return the removed record.

        Raises:
            NotFoundError: If the session does not exist
        """

    @abstractmethod
    async def list_sessions(
        self,
        user_id: UUID,
        *,
        limit: int = 50,
    ) -> Sequence[ExposureSession]:
        """Most recent sessions (any state), newest first."""

    @abstractmethod
    async def list_completed_sessions(
        self,
        user_id: UUID,
        from_inclusive: datetime,
        to_exclusive: datetime,
    ) -> Sequence[ExposureSession]:
        """Completed sessions started within [from, to), ascending by start time."""

    # Goal/streak snapshot

    @abstractmethod
    async def create_user(self, state: GoalState) -> GoalState:
        """Register a user with an initial snapshot."""

    @abstractmethod
    async def get_user_goal_state(self, user_id: UUID) -> GoalState:
        """
        Stored snapshot for a user.

        Raises:
            NotFoundError: If the user is unknown
        """

    @abstractmethod
    async def save_user_goal_state(self, user_id: UUID, state: GoalState) -> GoalState:
        """
        Persist the snapshot and return what was stored.

        Raises:
            NotFoundError: If the user is unknown
        """

    async def health_check(self) -> bool:
        """Check backend availability."""
        return True
