"""
Todo API — Request Instrumentation Middleware
===============================================

What:  Times every request, records Prometheus metrics, writes one structured
       access-log line, and turns unhandled exceptions into a generic 500.
How:   Wraps `call_next` with a perf_counter timer. Runs inside
       CorrelationIdMiddleware, so the correlation ID is already set.

Log entry (JSON via the root handler configured in main.setup_logging):
    {
        "timestamp": "2026-10-19T12:00:00.000123+00:00",
        "level": "INFO",
        "logger": "todo_api.access",
        "message": "HTTP Request",
        "correlationId": "1760890000123-k3j9x0a2b",
        "method": "POST",
        "path": "/todos",
        "status": 201,
        "duration": 0.000412
    }

Metric labels:
    `path` is the matched route template (`/todos/{todo_id}`) so label
    cardinality stays bounded; unmatched requests use the raw path.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.types import ASGIApp

from todo_api.middleware.correlation_id import correlation_id_var
from todo_api.services.metrics import RequestMetrics

logger = logging.getLogger("todo_api.access")
error_logger = logging.getLogger(__name__)


def route_label(request: Request) -> str:
    """Route template for a matched request, raw path otherwise."""
    route = request.scope.get("route")
    template = getattr(route, "path", None)
    return template or request.url.path


class RequestInstrumentationMiddleware(BaseHTTPMiddleware):
    """
    Per-request metrics, access logging and last-resort error handling.

    Log level follows the status code:
        5xx → ERROR, 4xx → WARNING, everything else → INFO
    """

    def __init__(self, app: ASGIApp, metrics: RequestMetrics):
        super().__init__(app)
        self.metrics = metrics

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        start_time = time.perf_counter()
        method = request.method
        correlation_id = correlation_id_var.get("")

        try:
            response = await call_next(request)
        except Exception as exc:
            # Final fallback: the client never sees internal detail.
            error_logger.error(
                "Unhandled error: %s",
                str(exc),
                exc_info=True,
                extra={"correlationId": correlation_id, "error": str(exc)},
            )
            response = JSONResponse(
                status_code=500,
                content={"error": "Internal server error"},
            )

        duration = time.perf_counter() - start_time
        status = response.status_code
        path = request.url.path

        self.metrics.observe(method, route_label(request), status, duration)

        if status >= 500:
            log_level = logging.ERROR
        elif status >= 400:
            log_level = logging.WARNING
        else:
            log_level = logging.INFO

        logger.log(
            log_level,
            "HTTP Request",
            extra={
                "correlationId": correlation_id,
                "method": method,
                "path": path,
                "status": status,
                "duration": round(duration, 6),
            },
        )

        return response
