"""Metrics infrastructure package."""

from bravely.infrastructure.metrics.prometheus_metrics import (
    # Session metrics
    SESSIONS_STARTED_TOTAL,
    SESSIONS_COMPLETED_TOTAL,
    SESSIONS_DELETED_TOTAL,
    SESSION_DURATION_MINUTES,
    # Pipeline metrics
    PIPELINE_RUNS_TOTAL,
    PIPELINE_DURATION,
    STREAK_RESETS_TOTAL,
    GOAL_GROWTH_STEPS_TOTAL,
    MILESTONES_REACHED_TOTAL,
    STATS_DEGRADED_TOTAL,
    # API metrics
    HTTP_REQUESTS_TOTAL,
    HTTP_REQUEST_DURATION,
    # Helpers
    track_pipeline_run,
    track_session_completed,
    track_goal_growth,
    track_stats_degraded,
    update_system_info,
    # Router
    metrics_router,
)

__all__ = [
    "SESSIONS_STARTED_TOTAL",
    "SESSIONS_COMPLETED_TOTAL",
    "SESSIONS_DELETED_TOTAL",
    "SESSION_DURATION_MINUTES",
    "PIPELINE_RUNS_TOTAL",
    "PIPELINE_DURATION",
    "STREAK_RESETS_TOTAL",
    "GOAL_GROWTH_STEPS_TOTAL",
    "MILESTONES_REACHED_TOTAL",
    "STATS_DEGRADED_TOTAL",
    "HTTP_REQUESTS_TOTAL",
    "HTTP_REQUEST_DURATION",
    "track_pipeline_run",
    "track_session_completed",
    "track_goal_growth",
    "track_stats_degraded",
    "update_system_info",
    "metrics_router",
]
