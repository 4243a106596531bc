"""
SQLAlchemy Progress Store

PostgreSQL-backed implementation of the progress store. Each call
runs in its own transaction; transient connection errors on reads
are retried with exponential backoff before surfacing.

SECURITY: Database errors are logged here and re-raised as
PersistenceFailure so internal details never reach API responses.
"""

from contextlib import contextmanager
from datetime import datetime
from typing import Iterator, Optional, Sequence
from uuid import UUID

from sqlalchemy.exc import IntegrityError, InterfaceError, OperationalError, SQLAlchemyError
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from bravely.config.logging_config import get_logger
from bravely.domain.enums.growth_period import GrowthPeriod, MoodTag
from bravely.domain.errors import InvalidRangeError, NotFoundError, PersistenceFailure
from bravely.domain.models.goal_state import DestinationGoal, GoalState
from bravely.domain.models.session import ExposureSession
from bravely.infrastructure.database.connection import DatabaseManager, get_db_manager
from bravely.infrastructure.database.models import ExposureSessionModel, UserModel
from bravely.infrastructure.database.repositories import SessionRepository, UserRepository
from bravely.infrastructure.store.base import ProgressStore

logger = get_logger(__name__)

_retry_transient = retry(
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=0.1, min=0.1, max=2),
    retry=retry_if_exception_type((OperationalError, InterfaceError)),
    reraise=True,
)

_SESSION_FIELDS = (
    "user_id",
    "session_type",
    "start_time",
    "end_time",
    "duration_minutes",
    "distance_miles",
    "fear_level_before",
    "fear_level_after",
    "mood_before",
    "mood_after",
    "is_active",
    "notes",
    "daily_intention",
    "reflection",
)

_GOAL_FIELDS = (
    "timezone",
    "progressive_goals_enabled",
    "goal_growth_rate",
    "current_distance_goal",
    "current_duration_goal",
    "distance_goal_ceiling",
    "duration_goal_ceiling",
    "last_goal_update",
    "current_streak",
    "longest_streak",
    "last_session_date",
    "monthly_session_goal",
)


def _session_to_domain(model: ExposureSessionModel) -> ExposureSession:
    return ExposureSession(
        id=model.id,
        tools_used=list(model.tools_used or []),
        mood_tag=MoodTag(model.mood_tag) if model.mood_tag else None,
        **{name: getattr(model, name) for name in _SESSION_FIELDS},
    )


def _apply_session(model: ExposureSessionModel, session: ExposureSession) -> None:
    for name in _SESSION_FIELDS:
        setattr(model, name, getattr(session, name))
    model.tools_used = list(session.tools_used)
    model.mood_tag = session.mood_tag.value if session.mood_tag else None


def _goal_state_to_domain(user: UserModel) -> GoalState:
    return GoalState(
        user_id=user.id,
        goal_growth_period=GrowthPeriod.parse(user.goal_growth_period),
        destination_goals=[
            DestinationGoal.from_dict(item) for item in (user.destination_goals or [])
        ],
        **{name: getattr(user, name) for name in _GOAL_FIELDS},
    )


def _apply_goal_state(user: UserModel, state: GoalState) -> None:
    for name in _GOAL_FIELDS:
        setattr(user, name, getattr(state, name))
    user.goal_growth_period = state.goal_growth_period.value
    user.destination_goals = [goal.to_dict() for goal in state.destination_goals]


class SqlAlchemyProgressStore(ProgressStore):
    """
    Progress store backed by the async SQLAlchemy engine.

    Usage:
        store = SqlAlchemyProgressStore(get_db_manager())
        sessions = await store.list_completed_sessions(user_id, start, end)
    """

    def __init__(self, db: Optional[DatabaseManager] = None) -> None:
        self._db = db or get_db_manager()

    @property
    def backend_name(self) -> str:
        return "postgres"

    @contextmanager
    def _translate_errors(self, operation: str) -> Iterator[None]:
        """Convert database errors into PersistenceFailure."""
        try:
            yield
        except IntegrityError as e:
            logger.warning("Store integrity violation", operation=operation, error=str(e.orig))
            raise InvalidRangeError(f"{operation} violates a data constraint")
        except SQLAlchemyError as e:
            logger.error("Store operation failed", operation=operation, error=str(e))
            raise PersistenceFailure(f"{operation} failed", original_error=e)

    # Session records

    async def create_session(self, session: ExposureSession) -> ExposureSession:
        with self._translate_errors("create_session"):
            async with self._db.session() as db_session:
                if await UserRepository(db_session).get_by_id(session.user_id) is None:
                    raise NotFoundError("User", session.user_id)
                model = ExposureSessionModel(id=session.id)
                _apply_session(model, session)
                await SessionRepository(db_session).create(model)
                return _session_to_domain(model)

    async def get_session(self, session_id: UUID) -> Optional[ExposureSession]:
        with self._translate_errors("get_session"):
            return await self._read_session(session_id)

    @_retry_transient
    async def _read_session(self, session_id: UUID) -> Optional[ExposureSession]:
        async with self._db.session() as db_session:
            model = await SessionRepository(db_session).get_by_id(session_id)
            return _session_to_domain(model) if model else None

    async def update_session(self, session: ExposureSession) -> ExposureSession:
        with self._translate_errors("update_session"):
            async with self._db.session() as db_session:
                model = await SessionRepository(db_session).get_by_id(session.id)
                if model is None:
                    raise NotFoundError("Session", session.id)
                _apply_session(model, session)
                await db_session.flush()
                return _session_to_domain(model)

    async def delete_session(self, session_id: UUID) -> ExposureSession:
        with self._translate_errors("delete_session"):
            async with self._db.session() as db_session:
                repository = SessionRepository(db_session)
                model = await repository.get_by_id(session_id)
                if model is None:
                    raise NotFoundError("Session", session_id)
                removed = _session_to_domain(model)
                await repository.delete(session_id)
                return removed

    async def list_sessions(
        self,
        user_id: UUID,
        *,
        limit: int = 50,
    ) -> Sequence[ExposureSession]:
        with self._translate_errors("list_sessions"):
            return await self._read_recent(user_id, limit)

    @_retry_transient
    async def _read_recent(self, user_id: UUID, limit: int) -> list[ExposureSession]:
        async with self._db.session() as db_session:
            models = await SessionRepository(db_session).get_recent_for_user(user_id, limit=limit)
            return [_session_to_domain(m) for m in models]

    async def list_completed_sessions(
        self,
        user_id: UUID,
        from_inclusive: datetime,
        to_exclusive: datetime,
    ) -> Sequence[ExposureSession]:
        with self._translate_errors("list_completed_sessions"):
            return await self._read_completed(user_id, from_inclusive, to_exclusive)

    @_retry_transient
    async def _read_completed(
        self,
        user_id: UUID,
        from_inclusive: datetime,
        to_exclusive: datetime,
    ) -> list[ExposureSession]:
        async with self._db.session() as db_session:
            models = await SessionRepository(db_session).get_completed_in_range(
                user_id, from_inclusive, to_exclusive
            )
            return [_session_to_domain(m) for m in models]

    # Goal/streak snapshot

    async def create_user(self, state: GoalState) -> GoalState:
        with self._translate_errors("create_user"):
            async with self._db.session() as db_session:
                user = UserModel(id=state.user_id)
                _apply_goal_state(user, state)
                await UserRepository(db_session).create(user)
                return _goal_state_to_domain(user)

    async def get_user_goal_state(self, user_id: UUID) -> GoalState:
        with self._translate_errors("get_user_goal_state"):
            return await self._read_goal_state(user_id)

    @_retry_transient
    async def _read_goal_state(self, user_id: UUID) -> GoalState:
        async with self._db.session() as db_session:
            user = await UserRepository(db_session).get_by_id(user_id)
            if user is None:
                raise NotFoundError("User", user_id)
            return _goal_state_to_domain(user)

    async def save_user_goal_state(self, user_id: UUID, state: GoalState) -> GoalState:
        with self._translate_errors("save_user_goal_state"):
            async with self._db.session() as db_session:
                repository = UserRepository(db_session)
                user = await repository.get_by_id(user_id)
                if user is None:
                    raise NotFoundError("User", user_id)
                _apply_goal_state(user, state)
                await repository.save(user)
                return _goal_state_to_domain(user)

    async def health_check(self) -> bool:
        return await self._db.health_check()
