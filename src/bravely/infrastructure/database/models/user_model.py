"""
User Database Model

SQLAlchemy ORM model for users and their embedded goal/streak
snapshot. The snapshot columns are written only by the progress
engine; request handlers never update them directly.
"""

from datetime import date, datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import Boolean, CheckConstraint, Date, DateTime, Float, Integer, String, func
from sqlalchemy.dialects.postgresql import JSONB, UUID as PGUUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bravely.infrastructure.database.connection import Base


class UserModel(Base):
    """
    User table ORM model.

    Table: users
    """

    __tablename__ = "users"
    __table_args__ = (
        CheckConstraint("goal_growth_rate > 0", name="ck_users_growth_rate_positive"),
        CheckConstraint("current_streak <= longest_streak", name="ck_users_streak_le_longest"),
    )

    id: Mapped[UUID] = mapped_column(
        PGUUID(as_uuid=True),
        primary_key=True,
        default=uuid4,
        doc="Unique user identifier"
    )
    timezone: Mapped[str] = mapped_column(
        String(64),
        default="UTC",
        nullable=False,
        doc="IANA timezone for local day boundaries"
    )

    # Progressive goals
    progressive_goals_enabled: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    goal_growth_rate: Mapped[float] = mapped_column(Float, default=5.0, nullable=False)
    goal_growth_period: Mapped[str] = mapped_column(
        String(16),
        default="weekly",
        nullable=False,
        doc="weekly or monthly"
    )
    current_distance_goal: Mapped[float] = mapped_column(Float, default=1.0, nullable=False)
    current_duration_goal: Mapped[int] = mapped_column(Integer, default=15, nullable=False)
    distance_goal_ceiling: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    duration_goal_ceiling: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    destination_goals: Mapped[list] = mapped_column(
        JSONB,
        default=list,
        nullable=False,
        doc="Ordered milestone list [{name, target_distance_miles, reached_at}]"
    )
    last_goal_update: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        doc="Anchor of the current growth period"
    )
    monthly_session_goal: Mapped[int] = mapped_column(Integer, default=10, nullable=False)

    # Bravery streak
    current_streak: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    longest_streak: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    last_session_date: Mapped[Optional[date]] = mapped_column(
        Date,
        nullable=True,
        doc="Local calendar date of the most recent completed session"
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    sessions = relationship(
        "ExposureSessionModel",
        back_populates="user",
        lazy="raise",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<UserModel(id={self.id}, streak={self.current_streak})>"
