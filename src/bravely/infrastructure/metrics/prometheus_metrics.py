"""
Prometheus Metrics

Counters and histograms for the session pipeline and the HTTP layer,
exposed at /metrics for Prometheus scraping.

ARCHITECTURE: Metrics are decoupled from business logic.
Only increment/observe; never block on metrics operations.
"""

import time
from functools import wraps
from typing import Callable

from fastapi import APIRouter, Response
from prometheus_client import (
    CONTENT_TYPE_LATEST,
    REGISTRY,
    Counter,
    Histogram,
    Info,
    generate_latest,
)

from bravely import __version__

# =============================================================================
# SESSION METRICS
# =============================================================================

SESSIONS_STARTED_TOTAL = Counter(
    "bravely_sessions_started_total",
    "Exposure sessions started",
    ["session_type"],
)

SESSIONS_COMPLETED_TOTAL = Counter(
    "bravely_sessions_completed_total",
    "Exposure sessions completed",
    ["session_type"],
)

SESSIONS_DELETED_TOTAL = Counter(
    "bravely_sessions_deleted_total",
    "Exposure sessions deleted",
)

SESSION_DURATION_MINUTES = Histogram(
    "bravely_session_duration_minutes",
    "Duration of completed exposure sessions",
    buckets=[5, 10, 15, 30, 45, 60, 90, 120, 240],
)

# =============================================================================
# PROGRESS PIPELINE METRICS
# =============================================================================

PIPELINE_RUNS_TOTAL = Counter(
    "bravely_pipeline_runs_total",
    "Progress pipeline runs",
    ["trigger", "status"],  # completed/deleted/recompute; success/error
)

PIPELINE_DURATION = Histogram(
    "bravely_pipeline_duration_seconds",
    "Progress pipeline run duration",
    ["trigger"],
    buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5],
)

STREAK_RESETS_TOTAL = Counter(
    "bravely_streak_resets_total",
    "Streaks that restarted at 1 after a gap",
)

GOAL_GROWTH_STEPS_TOTAL = Counter(
    "bravely_goal_growth_steps_total",
    "Growth periods applied to user goals",
    ["period"],
)

MILESTONES_REACHED_TOTAL = Counter(
    "bravely_milestones_reached_total",
    "Destination milestones reached",
)

STATS_DEGRADED_TOTAL = Counter(
    "bravely_stats_degraded_total",
    "Stats reads served as zero because the store failed",
    ["view"],  # today, weekly, monthly
)

# =============================================================================
# API METRICS
# =============================================================================

HTTP_REQUESTS_TOTAL = Counter(
    "bravely_http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status_code"],
)

HTTP_REQUEST_DURATION = Histogram(
    "bravely_http_request_duration_seconds",
    "HTTP request duration",
    ["method", "endpoint"],
    buckets=[0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0],
)

# =============================================================================
# SYSTEM INFO
# =============================================================================

SYSTEM_INFO = Info(
    "bravely_system",
    "Bravely system information",
)

SYSTEM_INFO.info({
    "version": __version__,
    "environment": "development",  # Updated at runtime
})


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def track_pipeline_run(trigger: str) -> Callable:
    """Decorator recording run count and latency of a pipeline entry point."""
    def decorator(func: Callable) -> Callable:
        @wraps(func)
        async def wrapper(*args, **kwargs):
            start_time = time.perf_counter()
            try:
                result = await func(*args, **kwargs)
                PIPELINE_RUNS_TOTAL.labels(trigger=trigger, status="success").inc()
                return result
            except Exception:
                PIPELINE_RUNS_TOTAL.labels(trigger=trigger, status="error").inc()
                raise
            finally:
                PIPELINE_DURATION.labels(trigger=trigger).observe(
                    time.perf_counter() - start_time
                )
        return wrapper
    return decorator


def track_session_completed(session_type: str, duration_minutes: int | None) -> None:
    """Record a completed session."""
    SESSIONS_COMPLETED_TOTAL.labels(session_type=session_type).inc()
    if duration_minutes is not None:
        SESSION_DURATION_MINUTES.observe(duration_minutes)


def track_goal_growth(period: str, steps: int) -> None:
    if steps > 0:
        GOAL_GROWTH_STEPS_TOTAL.labels(period=period).inc(steps)


def track_stats_degraded(view: str) -> None:
    STATS_DEGRADED_TOTAL.labels(view=view).inc()


# =============================================================================
# METRICS ENDPOINT
# =============================================================================

metrics_router = APIRouter(tags=["metrics"])


@metrics_router.get("/metrics")
async def metrics() -> Response:
    """
    Prometheus metrics endpoint.

    Returns metrics in Prometheus text format for scraping.
    """
    return Response(
        content=generate_latest(REGISTRY),
        media_type=CONTENT_TYPE_LATEST,
    )


def update_system_info(environment: str, version: str = __version__) -> None:
    """Update system info metric with current environment."""
    SYSTEM_INFO.info({
        "version": version,
        "environment": environment,
    })
