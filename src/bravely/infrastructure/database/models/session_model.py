"""
Exposure Session Database Model

SQLAlchemy ORM model for exposure session persistence.

PRIVACY: Notes, intentions and reflections may contain sensitive
content and should be encrypted at rest.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
)
from sqlalchemy.dialects.postgresql import ARRAY, UUID as PGUUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bravely.infrastructure.database.connection import Base


class ExposureSessionModel(Base):
    """
    Exposure session table ORM model.

    Table: exposure_sessions
    """

    __tablename__ = "exposure_sessions"
    __table_args__ = (
        CheckConstraint(
            "end_time IS NULL OR end_time >= start_time",
            name="ck_exposure_sessions_end_after_start",
        ),
        CheckConstraint("duration_minutes IS NULL OR duration_minutes >= 0", name="ck_exposure_sessions_duration"),
        CheckConstraint("distance_miles IS NULL OR distance_miles >= 0", name="ck_exposure_sessions_distance"),
        Index("ix_exposure_sessions_user_start", "user_id", "start_time"),
    )

    id: Mapped[UUID] = mapped_column(
        PGUUID(as_uuid=True),
        primary_key=True,
        default=uuid4,
        doc="Unique session identifier"
    )
    user_id: Mapped[UUID] = mapped_column(
        PGUUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        doc="Owning user"
    )
    session_type: Mapped[str] = mapped_column(String(50), nullable=False, default="walk")

    start_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    end_time: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        doc="Set on completion; NULL while the session is in progress"
    )
    duration_minutes: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    distance_miles: Mapped[Optional[float]] = mapped_column(Float, nullable=True)

    fear_level_before: Mapped[int] = mapped_column(Integer, nullable=False)
    fear_level_after: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    mood_before: Mapped[int] = mapped_column(Integer, nullable=False)
    mood_after: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    mood_tag: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    daily_intention: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    tools_used: Mapped[list[str]] = mapped_column(ARRAY(Text), nullable=False, default=list)
    reflection: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    user = relationship("UserModel", back_populates="sessions")

    def __repr__(self) -> str:
        return f"<ExposureSessionModel(id={self.id}, user_id={self.user_id}, active={self.is_active})>"
