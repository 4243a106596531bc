"""
Sentry Error Tracking Integration

Error tracking for the API and the progress pipeline. Session notes,
reflections and intentions are therapy content and are stripped
before anything leaves the process, along with credentials.
"""

import re
from typing import Optional

import sentry_sdk
from sentry_sdk.integrations.asyncio import AsyncioIntegration
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.logging import LoggingIntegration
from sentry_sdk.integrations.sqlalchemy import SqlalchemyIntegration

from bravely import __version__
from bravely.config.logging_config import get_logger

logger = get_logger(__name__)

SENSITIVE_PATTERNS = [
    r"password[\"']?\s*[:=]\s*[\"']?[^\"'\s,}]+",
    r"token[\"']?\s*[:=]\s*[\"']?[^\"'\s,}]+",
    r"secret[\"']?\s*[:=]\s*[\"']?[^\"'\s,}]+",
    r"bearer\s+[a-zA-Z0-9\-._~+/]+=*",
    r"postgres(?:ql)?(?:\+\w+)?://[^\s\"']+",
]

SENSITIVE_KEYS = frozenset({
    "password",
    "token",
    "secret",
    "authorization",
    "credential",
    "dsn",
    # Therapy content
    "notes",
    "reflection",
    "daily_intention",
})


def _scrub_string(value: str) -> str:
    result = value
    for pattern in SENSITIVE_PATTERNS:
        result = re.sub(pattern, "[REDACTED]", result, flags=re.IGNORECASE)
    return result


def _scrub_value(value):
    if isinstance(value, dict):
        return _scrub_dict(value)
    if isinstance(value, list):
        return [_scrub_value(item) for item in value]
    if isinstance(value, str):
        return _scrub_string(value)
    return value


def _scrub_dict(data: dict) -> dict:
    """Recursively scrub sensitive data from a dictionary."""
    result = {}
    for key, value in data.items():
        key_lower = str(key).lower().replace("-", "_")
        if any(sensitive in key_lower for sensitive in SENSITIVE_KEYS):
            result[key] = "[REDACTED]"
        else:
            result[key] = _scrub_value(value)
    return result


def before_send(event: dict, hint: dict) -> Optional[dict]:
    """Scrub request bodies, headers, breadcrumbs and extras."""
    request = event.get("request")
    if request:
        for section in ("data", "headers"):
            if isinstance(request.get(section), dict):
                request[section] = _scrub_dict(request[section])

    for breadcrumb in event.get("breadcrumbs", {}).get("values", []):
        if isinstance(breadcrumb.get("data"), dict):
            breadcrumb["data"] = _scrub_dict(breadcrumb["data"])

    if "extra" in event:
        event["extra"] = _scrub_dict(event["extra"])

    return event


def before_breadcrumb(breadcrumb: dict, hint: dict) -> Optional[dict]:
    # SQL breadcrumbs may carry bound parameters
    if breadcrumb.get("category") == "query" and "message" in breadcrumb:
        breadcrumb["message"] = _scrub_string(breadcrumb["message"])
    return breadcrumb


def init_sentry(
    dsn: str,
    environment: str = "development",
    release: str = f"bravely@{__version__}",
    traces_sample_rate: float = 0.1,
) -> bool:
    """
    Initialize Sentry error tracking.

    Args:
        dsn: Sentry DSN; empty disables tracking
        environment: Environment name
        release: Release version
        traces_sample_rate: Performance tracing rate

    Returns:
        True if Sentry was initialized
    """
    if not dsn:
        logger.info("Sentry DSN not configured, error tracking disabled")
        return False

    sentry_sdk.init(
        dsn=dsn,
        environment=environment,
        release=release,
        traces_sample_rate=traces_sample_rate,
        before_send=before_send,
        before_breadcrumb=before_breadcrumb,
        integrations=[
            FastApiIntegration(transaction_style="endpoint"),
            SqlalchemyIntegration(),
            AsyncioIntegration(),
            LoggingIntegration(level=None, event_level=None),
        ],
        send_default_pii=False,
        attach_stacktrace=True,
        max_breadcrumbs=50,
    )

    logger.info("Sentry initialized", environment=environment, release=release)
    return True


def capture_exception_with_context(
    exception: Exception,
    user_id: Optional[str] = None,
    extra: Optional[dict] = None,
) -> Optional[str]:
    """
    Capture an exception with scrubbed context.

    Returns:
        Sentry event ID (None when Sentry is disabled)
    """
    with sentry_sdk.new_scope() as scope:
        if user_id:
            scope.set_tag("user_id", user_id)
        if extra:
            for key, value in _scrub_dict(extra).items():
                scope.set_extra(key, value)
        return sentry_sdk.capture_exception(exception)
