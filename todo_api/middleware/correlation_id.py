"""
Todo API — Correlation ID Middleware
======================================

What:  Assigns a correlation ID to each request and echoes it on the response.
How:   Reuses the inbound X-Correlation-ID header when present, otherwise asks
       the configured generator for a fresh one. The ID is stored in a
       ContextVar (read by the log filter and the instrumentation middleware)
       and in request.state (read by route handlers).
When:  Outermost application middleware, so every response carries the
       header, including 404s and the 500 fallback.

Generated IDs look like `1760890000123-k3j9x0a2b`: epoch milliseconds plus
nine random base-36 characters, unique enough to tell concurrent requests
apart in the logs.
"""

import logging
import secrets
import string
import time
from contextvars import ContextVar
from typing import Callable, Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

CORRELATION_ID_HEADER = "X-Correlation-ID"

# Coroutine-local: concurrent requests on one event loop each see their own ID.
correlation_id_var: ContextVar[str] = ContextVar("correlation_id", default="")

_SUFFIX_ALPHABET = string.digits + string.ascii_lowercase

IdGenerator = Callable[[], str]


def generate_correlation_id() -> str:
    """Time-based ID with a random suffix."""
    millis = int(time.time() * 1000)
    suffix = "".join(secrets.choice(_SUFFIX_ALPHABET) for _ in range(9))
    return f"{millis}-{suffix}"


class CorrelationIdLogFilter(logging.Filter):
    """Stamps every log record with the current request's correlation ID."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not getattr(record, "correlationId", None):
            record.correlationId = correlation_id_var.get("")
        return True


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """
    Middleware that attaches a correlation ID to every request.

    Behavior:
        1. Use the client's X-Correlation-ID header if it is non-blank
        2. Otherwise call `id_generator()`
        3. Store the ID in `correlation_id_var` and `request.state.correlation_id`
        4. Set X-Correlation-ID on the response

    Args:
        id_generator: Zero-argument callable returning a new ID. Tests inject
                      a deterministic one.
    """

    def __init__(self, app: ASGIApp, id_generator: Optional[IdGenerator] = None):
        super().__init__(app)
        self.id_generator = id_generator or generate_correlation_id

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        correlation_id = request.headers.get(CORRELATION_ID_HEADER, "").strip()
        if not correlation_id:
            correlation_id = self.id_generator()

        token = correlation_id_var.set(correlation_id)
        request.state.correlation_id = correlation_id
        try:
            response = await call_next(request)
        finally:
            correlation_id_var.reset(token)

        response.headers[CORRELATION_ID_HEADER] = correlation_id
        return response
