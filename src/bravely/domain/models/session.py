"""
Exposure Session Domain Model

Represents one exposure attempt: the user steps outside their
comfort zone, rates fear and mood before, and rates them again
after completing the session.

PRIVACY: Notes, intentions and reflections are therapy content and
should be encrypted at rest.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Optional
from uuid import UUID, uuid4
from zoneinfo import ZoneInfo

from bravely.domain.enums.growth_period import MoodTag


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class ExposureSession:
    """
    Exposure session entity.

    A session is created active with before-ratings, then completed
    in place by setting an end time and after-ratings. Only complete
    sessions count toward statistics, streaks and goals.

    Attributes:
        id: Unique session identifier
        user_id: Owning user
        session_type: Kind of exposure (walk, drive, store visit...)
        start_time: When the session began (aware, UTC)
        end_time: When the session ended; None while in progress
        duration_minutes: Derived or user-entered duration
        distance_miles: Derived or user-entered distance
        fear_level_before: Fear rating before starting
        fear_level_after: Fear rating after completion
        mood_before: Mood rating before starting
        mood_after: Mood rating after completion
        is_active: True only between start and completion
        notes: Free-form notes
        mood_tag: Post-session mood label
        daily_intention: The small goal set for the day
        tools_used: CBT tools used during the session
        reflection: Post-session reflection
    """

    user_id: UUID
    fear_level_before: int
    mood_before: int
    id: UUID = field(default_factory=uuid4)
    session_type: str = "walk"
    start_time: datetime = field(default_factory=_utcnow)
    end_time: Optional[datetime] = None
    duration_minutes: Optional[int] = None
    distance_miles: Optional[float] = None
    fear_level_after: Optional[int] = None
    mood_after: Optional[int] = None
    is_active: bool = True
    notes: Optional[str] = None
    mood_tag: Optional[MoodTag] = None
    daily_intention: Optional[str] = None
    tools_used: list[str] = field(default_factory=list)
    reflection: Optional[str] = None

    @property
    def is_complete(self) -> bool:
        """A session is complete iff its end time is set."""
        return self.end_time is not None

    @property
    def fear_reduction(self) -> Optional[int]:
        """Drop in fear from before to after (positive = less afraid)."""
        if self.fear_level_after is None:
            return None
        return self.fear_level_before - self.fear_level_after

    @property
    def mood_change(self) -> Optional[int]:
        """Change in mood from before to after (positive = better)."""
        if self.mood_after is None:
            return None
        return self.mood_after - self.mood_before

    def elapsed_minutes(self) -> Optional[int]:
        """Whole minutes between start and end, rounded to nearest."""
        if self.end_time is None:
            return None
        seconds = (self.end_time - self.start_time).total_seconds()
        return max(0, int(round(seconds / 60)))

    def local_start_date(self, tz: ZoneInfo) -> date:
        """Calendar date the session started on in the given timezone."""
        return self.start_time.astimezone(tz).date()

    def to_dict(self) -> dict:
        """Serialize session to dictionary."""
        return {
            "id": str(self.id),
            "user_id": str(self.user_id),
            "session_type": self.session_type,
            "start_time": self.start_time.isoformat(),
            "end_time": self.end_time.isoformat() if self.end_time else None,
            "duration_minutes": self.duration_minutes,
            "distance_miles": self.distance_miles,
            "fear_level_before": self.fear_level_before,
            "fear_level_after": self.fear_level_after,
            "mood_before": self.mood_before,
            "mood_after": self.mood_after,
            "is_active": self.is_active,
            "notes": self.notes,
            "mood_tag": self.mood_tag.value if self.mood_tag else None,
            "daily_intention": self.daily_intention,
            "tools_used": list(self.tools_used),
            "reflection": self.reflection,
        }
