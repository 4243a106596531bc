"""
Unit Tests for the Session Service

Session lifecycle, validation and the hand-off to the progress pipeline.
"""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest

from bravely.domain.enums.growth_period import MoodTag
from bravely.domain.errors import InvalidRangeError, NotFoundError


class TestSessionLifecycle:
    """Tests for start, complete, update and delete."""

    async def test_start_creates_active_session(self, session_service, clock, user_id) -> None:
        session = await session_service.start_session(
            user_id, fear_level_before=8, mood_before=3, daily_intention="Walk to the corner"
        )
        assert session.is_active
        assert not session.is_complete
        assert session.start_time == clock.now()

    async def test_start_for_unknown_user(self, session_service) -> None:
        with pytest.raises(NotFoundError):
            await session_service.start_session(uuid4(), fear_level_before=5, mood_before=5)

    async def test_complete_derives_duration_and_updates_progress(
        self, session_service, clock, user_id
    ) -> None:
        session = await session_service.start_session(user_id, fear_level_before=8, mood_before=3)
        clock.advance(minutes=25)

        result = await session_service.complete_session(
            session.id,
            fear_level_after=4,
            mood_after=7,
            distance_miles=0.6,
            mood_tag=MoodTag.BRAVE,
            tools_used=["Breathing"],
        )

        assert result.session.duration_minutes == 25
        assert result.session.is_active is False
        assert result.session.fear_reduction == 4
        assert result.session.mood_change == 4
        assert result.progress.today.session_count == 1
        assert result.progress.today.duration_minutes == 25
        assert result.progress.streak.current_streak == 1

    async def test_explicit_duration_wins(self, session_service, clock, user_id) -> None:
        session = await session_service.start_session(user_id, fear_level_before=6, mood_before=4)
        clock.advance(minutes=40)
        result = await session_service.complete_session(
            session.id, fear_level_after=3, mood_after=6, duration_minutes=30
        )
        assert result.session.duration_minutes == 30

    async def test_cannot_complete_twice(self, session_service, clock, user_id) -> None:
        session = await session_service.start_session(user_id, fear_level_before=6, mood_before=4)
        clock.advance(minutes=10)
        await session_service.complete_session(session.id, fear_level_after=3, mood_after=6)

        with pytest.raises(InvalidRangeError):
            await session_service.complete_session(session.id, fear_level_after=3, mood_after=6)

    async def test_edit_completed_session_reruns_pipeline(self, session_service, clock, user_id) -> None:
        session = await session_service.start_session(user_id, fear_level_before=6, mood_before=4)
        clock.advance(minutes=10)
        await session_service.complete_session(session.id, fear_level_after=3, mood_after=6)

        result = await session_service.update_session(session.id, {"duration_minutes": 45})
        assert result.progress is not None
        assert result.progress.today.duration_minutes == 45

    async def test_edit_active_session_skips_pipeline(self, session_service, user_id) -> None:
        session = await session_service.start_session(user_id, fear_level_before=6, mood_before=4)
        result = await session_service.update_session(session.id, {"notes": "Windy out"})
        assert result.progress is None
        assert result.session.notes == "Windy out"

    async def test_setting_end_time_completes_session(self, session_service, clock, user_id) -> None:
        session = await session_service.start_session(user_id, fear_level_before=6, mood_before=4)
        result = await session_service.update_session(
            session.id, {"end_time": clock.now() + timedelta(minutes=12)}
        )
        assert result.session.is_complete
        assert result.session.is_active is False
        assert result.session.duration_minutes == 12
        assert result.progress.streak.current_streak == 1

    async def test_completed_session_cannot_be_reopened(self, session_service, clock, user_id) -> None:
        session = await session_service.start_session(user_id, fear_level_before=6, mood_before=4)
        clock.advance(minutes=10)
        await session_service.complete_session(session.id, fear_level_after=3, mood_after=6)

        with pytest.raises(InvalidRangeError):
            await session_service.update_session(session.id, {"end_time": None})

    async def test_unknown_field_rejected(self, session_service, user_id) -> None:
        session = await session_service.start_session(user_id, fear_level_before=6, mood_before=4)
        with pytest.raises(InvalidRangeError) as exc_info:
            await session_service.update_session(session.id, {"user_id": uuid4()})
        assert exc_info.value.field == "user_id"

    async def test_delete_recomputes_progress(self, session_service, clock, user_id) -> None:
        session = await session_service.start_session(user_id, fear_level_before=6, mood_before=4)
        clock.advance(minutes=10)
        await session_service.complete_session(session.id, fear_level_after=3, mood_after=6)

        update = await session_service.delete_session(session.id)
        assert update.today.session_count == 0
        assert update.streak.current_streak == 0
        assert update.streak.longest_streak == 1

        with pytest.raises(NotFoundError):
            await session_service.get_session(session.id)

    async def test_list_sessions_newest_first(self, session_service, clock, user_id) -> None:
        first = await session_service.start_session(user_id, fear_level_before=6, mood_before=4)
        clock.advance(hours=1)
        second = await session_service.start_session(user_id, fear_level_before=5, mood_before=5)

        sessions = await session_service.list_sessions(user_id)
        assert [s.id for s in sessions] == [second.id, first.id]

        assert len(await session_service.list_sessions(user_id, limit=1)) == 1

    async def test_list_sessions_unknown_user(self, session_service) -> None:
        with pytest.raises(NotFoundError):
            await session_service.list_sessions(uuid4())


class TestSessionValidation:
    """Tests for rejected values."""

    @pytest.mark.parametrize("rating", [0, 11, -3])
    async def test_rating_outside_scale(self, session_service, user_id, rating) -> None:
        with pytest.raises(InvalidRangeError) as exc_info:
            await session_service.start_session(user_id, fear_level_before=rating, mood_before=5)
        assert exc_info.value.field == "fear_level_before"

    async def test_end_before_start(self, session_service, clock, user_id) -> None:
        session = await session_service.start_session(user_id, fear_level_before=6, mood_before=4)
        with pytest.raises(InvalidRangeError) as exc_info:
            await session_service.complete_session(
                session.id,
                fear_level_after=3,
                mood_after=6,
                end_time=clock.now() - timedelta(minutes=5),
            )
        assert exc_info.value.field == "end_time"

    async def test_negative_distance(self, session_service, clock, user_id) -> None:
        session = await session_service.start_session(user_id, fear_level_before=6, mood_before=4)
        clock.advance(minutes=10)
        with pytest.raises(InvalidRangeError):
            await session_service.complete_session(
                session.id, fear_level_after=3, mood_after=6, distance_miles=-0.5
            )

    async def test_negative_duration(self, session_service, clock, user_id) -> None:
        session = await session_service.start_session(user_id, fear_level_before=6, mood_before=4)
        clock.advance(minutes=10)
        with pytest.raises(InvalidRangeError):
            await session_service.complete_session(
                session.id, fear_level_after=3, mood_after=6, duration_minutes=-1
            )

    @pytest.mark.parametrize("field", ["notes", "daily_intention"])
    async def test_blank_annotation(self, session_service, user_id, field) -> None:
        with pytest.raises(InvalidRangeError) as exc_info:
            await session_service.start_session(
                user_id, fear_level_before=6, mood_before=4, **{field: "   "}
            )
        assert exc_info.value.field == field

    async def test_blank_tool_name(self, session_service, clock, user_id) -> None:
        session = await session_service.start_session(user_id, fear_level_before=6, mood_before=4)
        clock.advance(minutes=10)
        with pytest.raises(InvalidRangeError):
            await session_service.complete_session(
                session.id, fear_level_after=3, mood_after=6, tools_used=["Breathing", ""]
            )

    async def test_failed_completion_leaves_session_active(self, session_service, clock, user_id) -> None:
        session = await session_service.start_session(user_id, fear_level_before=6, mood_before=4)
        clock.advance(minutes=10)
        with pytest.raises(InvalidRangeError):
            await session_service.complete_session(session.id, fear_level_after=42, mood_after=6)

        stored = await session_service.get_session(session.id)
        assert stored.is_active
        assert not stored.is_complete

    async def test_naive_start_time_treated_as_utc(self, session_service, user_id) -> None:
        session = await session_service.start_session(
            user_id, fear_level_before=6, mood_before=4, start_time=datetime(2024, 3, 4, 8, 0)
        )
        assert session.start_time == datetime(2024, 3, 4, 8, 0, tzinfo=timezone.utc)

    @pytest.mark.parametrize(
        "field",
        ["start_time", "tools_used", "fear_level_before", "mood_before", "session_type"],
    )
    async def test_required_field_cannot_be_cleared(self, session_service, clock, user_id, field) -> None:
        session = await session_service.start_session(user_id, fear_level_before=6, mood_before=4)
        clock.advance(minutes=10)
        await session_service.complete_session(session.id, fear_level_after=3, mood_after=6)

        with pytest.raises(InvalidRangeError) as exc_info:
            await session_service.update_session(session.id, {field: None})
        assert exc_info.value.field == field

        stored = await session_service.get_session(session.id)
        assert stored.fear_level_before == 6
        assert stored.mood_before == 4
        assert stored.tools_used == []
