"""
Error Handler Middleware

Correlation IDs, request metrics and consistent error responses.

Domain errors are mapped to status codes by the exception handlers
registered here; anything else is logged with the correlation ID and
returned as a sanitised 500.
"""

import time
import traceback
from uuid import uuid4

from fastapi import FastAPI, Request, Response, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from bravely.config.logging_config import bind_correlation_id, clear_context, get_logger
from bravely.domain.errors import (
    ConfigurationError,
    InvalidRangeError,
    NotFoundError,
    PersistenceFailure,
    ProgressError,
)
from bravely.infrastructure.metrics import HTTP_REQUEST_DURATION, HTTP_REQUESTS_TOTAL
from bravely.infrastructure.monitoring import capture_exception_with_context

logger = get_logger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"

ERROR_STATUS_CODES: dict[type[ProgressError], int] = {
    NotFoundError: status.HTTP_404_NOT_FOUND,
    InvalidRangeError: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ConfigurationError: status.HTTP_422_UNPROCESSABLE_ENTITY,
    PersistenceFailure: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def _route_template(request: Request) -> str:
    # Templated path keeps metric label cardinality bounded
    route = request.scope.get("route")
    return getattr(route, "path", request.url.path)


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """
    Global error handling middleware.

    Provides:
    - Correlation ID tracking for all requests
    - HTTP request metrics
    - Sanitised responses for unhandled errors
    """

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        correlation_id = request.headers.get(CORRELATION_HEADER) or str(uuid4())
        bind_correlation_id(correlation_id)
        request.state.correlation_id = correlation_id
        start_time = time.perf_counter()
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

        try:
            response = await call_next(request)
            status_code = response.status_code
            response.headers[CORRELATION_HEADER] = correlation_id
            return response

        except Exception as e:
            logger.error(
                "Unhandled exception",
                path=request.url.path,
                method=request.method,
                error_type=type(e).__name__,
                error_message=str(e),
                traceback=traceback.format_exc(),
            )
            capture_exception_with_context(e, extra={"correlation_id": correlation_id})

            return JSONResponse(
                status_code=status_code,
                content={
                    "error": "internal_error",
                    "correlation_id": correlation_id,
                    "message": "An unexpected error occurred. Please try again.",
                },
                headers={CORRELATION_HEADER: correlation_id},
            )

        finally:
            endpoint = _route_template(request)
            HTTP_REQUESTS_TOTAL.labels(
                method=request.method,
                endpoint=endpoint,
                status_code=str(status_code),
            ).inc()
            HTTP_REQUEST_DURATION.labels(method=request.method, endpoint=endpoint).observe(
                time.perf_counter() - start_time
            )
            clear_context()


async def progress_error_handler(request: Request, exc: ProgressError) -> JSONResponse:
    """Render a domain error as a structured JSON response."""
    status_code = status.HTTP_400_BAD_REQUEST
    for error_type, code in ERROR_STATUS_CODES.items():
        if isinstance(exc, error_type):
            status_code = code
            break

    log = logger.error if isinstance(exc, PersistenceFailure) else logger.info
    log(
        "Request rejected",
        path=request.url.path,
        reason=exc.reason,
        status_code=status_code,
        error_message=exc.message,
    )

    content = exc.to_dict()
    correlation_id = getattr(request.state, "correlation_id", None)
    if correlation_id:
        content["correlation_id"] = correlation_id
    return JSONResponse(status_code=status_code, content=content)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ProgressError, progress_error_handler)
