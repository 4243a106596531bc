"""
In-Memory Progress Store

Dictionary-backed store for development and tests. Records are
copied on the way in and out so callers can never mutate stored
state without going through the store.
"""

from copy import deepcopy
from datetime import datetime
from typing import Optional, Sequence
from uuid import UUID

from bravely.config.logging_config import get_logger
from bravely.domain.errors import InvalidRangeError, NotFoundError
from bravely.domain.models.goal_state import GoalState
from bravely.domain.models.session import ExposureSession
from bravely.infrastructure.store.base import ProgressStore

logger = get_logger(__name__)


class InMemoryProgressStore(ProgressStore):
    """
    Process-local store.

    Not shared between workers; suitable for development and tests only.
    """

    def __init__(self) -> None:
        self._sessions: dict[UUID, ExposureSession] = {}
        self._goal_states: dict[UUID, GoalState] = {}

    @property
    def backend_name(self) -> str:
        return "memory"

    async def create_session(self, session: ExposureSession) -> ExposureSession:
        if session.user_id not in self._goal_states:
            raise NotFoundError("User", session.user_id)
        if session.id in self._sessions:
            raise InvalidRangeError(f"Session {session.id} already exists", field="id")
        self._sessions[session.id] = deepcopy(session)
        return deepcopy(session)

    async def get_session(self, session_id: UUID) -> Optional[ExposureSession]:
        session = self._sessions.get(session_id)
        return deepcopy(session) if session else None

    async def update_session(self, session: ExposureSession) -> ExposureSession:
        if session.id not in self._sessions:
            raise NotFoundError("Session", session.id)
        self._sessions[session.id] = deepcopy(session)
        return deepcopy(session)

    async def delete_session(self, session_id: UUID) -> ExposureSession:
        session = self._sessions.pop(session_id, None)
        if session is None:
            raise NotFoundError("Session", session_id)
        return session

    async def list_sessions(
        self,
        user_id: UUID,
        *,
        limit: int = 50,
    ) -> Sequence[ExposureSession]:
        owned = [s for s in self._sessions.values() if s.user_id == user_id]
        owned.sort(key=lambda s: s.start_time, reverse=True)
        return [deepcopy(s) for s in owned[:limit]]

    async def list_completed_sessions(
        self,
        user_id: UUID,
        from_inclusive: datetime,
        to_exclusive: datetime,
    ) -> Sequence[ExposureSession]:
        matching = [
            s for s in self._sessions.values()
            if s.user_id == user_id
            and s.is_complete
            and from_inclusive <= s.start_time < to_exclusive
        ]
        matching.sort(key=lambda s: s.start_time)
        return [deepcopy(s) for s in matching]

    async def create_user(self, state: GoalState) -> GoalState:
        if state.user_id in self._goal_states:
            raise InvalidRangeError(f"User {state.user_id} already exists", field="user_id")
        self._goal_states[state.user_id] = state.copy()
        logger.debug("User registered", user_id=str(state.user_id))
        return state.copy()

    async def get_user_goal_state(self, user_id: UUID) -> GoalState:
        state = self._goal_states.get(user_id)
        if state is None:
            raise NotFoundError("User", user_id)
        return state.copy()

    async def save_user_goal_state(self, user_id: UUID, state: GoalState) -> GoalState:
        if user_id not in self._goal_states:
            raise NotFoundError("User", user_id)
        self._goal_states[user_id] = state.copy()
        return state.copy()
