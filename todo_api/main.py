"""
Todo API — FastAPI Application Factory
========================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() wires settings, the TodoStore, the
       metrics registry, middleware, exception handlers and routers.
Who:   Called by uvicorn (`uvicorn todo_api.main:app`), by run() for the
       `todo-api` console script, and by the test suite.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌────────────────┐ ┌────────────────────────────┐  │
    │  │ Correlation ID │→│ Instrumentation (metrics,  │  │
    │  │                │ │ access log, 500 fallback)  │  │
    │  └────────────────┘ └────────────────────────────┘  │
    │                                                     │
    │  Routes:                                            │
    │  ┌──────────┐ ┌──────────┐ ┌─────────────────────┐  │
    │  │ /health  │ │ /metrics │ │ /todos, /todos/{id} │  │
    │  └──────────┘ └──────────┘ └─────────────────────┘  │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌──────────────────────────────────────────────┐   │
    │  │ Validation→400 │ NotFound→404 │ Route→404     │   │
    │  └──────────────────────────────────────────────┘   │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  configure JSON logging, log port and environment
    Shutdown: uvicorn stops accepting connections on SIGTERM/SIGINT, then
              the lifespan logs the shutdown
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pythonjsonlogger.json import JsonFormatter
from starlette.exceptions import HTTPException as StarletteHTTPException

from todo_api import __version__
from todo_api.config import Settings, settings as default_settings
from todo_api.exceptions import (
    NotFoundError,
    RouteNotFoundError,
    TodoServiceError,
    ValidationError,
)
from todo_api.middleware.correlation_id import (
    CorrelationIdLogFilter,
    CorrelationIdMiddleware,
    IdGenerator,
    correlation_id_var,
)
from todo_api.middleware.instrumentation import RequestInstrumentationMiddleware
from todo_api.routes import health, metrics, todos
from todo_api.services.metrics import RequestMetrics
from todo_api.services.todo_store import TodoStore

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Structured Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def build_log_handler(stream=None) -> logging.Handler:
    """
    Stdout handler writing one JSON object per record.

    Fields: `timestamp`, `level`, `logger`, `correlationId` and `message`,
    plus any `extra` the caller passed (method, path, status, duration,
    todoId, ...).
    """
    handler = logging.StreamHandler(stream or sys.stdout)
    handler.addFilter(CorrelationIdLogFilter())
    handler.setFormatter(
        JsonFormatter(
            "%(levelname)s %(name)s %(correlationId)s %(message)s",
            rename_fields={"levelname": "level", "name": "logger"},
            timestamp=True,
        )
    )
    return handler


def setup_logging(level: str = "INFO") -> None:
    """Configure JSON-lines logging for the entire application."""
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        handlers=[build_log_handler()],
        force=True,
    )

    # The access middleware already logs one line per request
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    app_settings: Settings = app.state.settings

    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging(app_settings.log_level)
    logger.info(
        "Server running on port %d",
        app_settings.port,
        extra={"port": app_settings.port, "environment": app_settings.environment},
    )

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info(
        "Shutdown signal received, shutting down gracefully",
        extra={"todoCount": app.state.todo_store.list()[1]},
    )


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register global exception handlers for consistent `{"error": ...}` bodies.

    Handler hierarchy:
        ValidationError          → 400 (message from the store)
        RequestValidationError   → 400 "Invalid request body"
        NotFoundError            → 404 "Todo not found"
        RouteNotFoundError       → 404 "Route not found"
        HTTPException 404/405    → 404 "Route not found"
        HTTPException (other)    → its status, its detail
        TodoServiceError (base)  → its status_code
        Exception (fallback)     → 500 "Internal server error"

    Unhandled exceptions raised by route handlers are normally converted by
    RequestInstrumentationMiddleware; the Exception handler here covers
    failures outside that middleware.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning("Validation error: %s", exc.message, extra={"details": exc.context})
        return error_response(400, exc.message)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        logger.warning("Malformed request body: %s", exc.errors())
        return error_response(400, "Invalid request body")

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return error_response(404, exc.message)

    @app.exception_handler(RouteNotFoundError)
    async def handle_route_not_found(request: Request, exc: RouteNotFoundError):
        return error_response(404, exc.message)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        # An unsupported verb on a known path is just another unmatched route
        if exc.status_code in (404, 405):
            route_error = RouteNotFoundError(method=request.method, path=request.url.path)
            return error_response(404, route_error.message)
        return error_response(exc.status_code, str(exc.detail))

    @app.exception_handler(TodoServiceError)
    async def handle_service_error(request: Request, exc: TodoServiceError):
        logger.error("Service error: %s | Context: %s", exc.message, exc.context)
        return error_response(exc.status_code, exc.message)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error(
            "Unhandled error: %s",
            str(exc),
            exc_info=True,
            extra={"correlationId": correlation_id_var.get(""), "error": str(exc)},
        )
        return error_response(500, "Internal server error")


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(
    settings: Optional[Settings] = None,
    store: Optional[TodoStore] = None,
    id_generator: Optional[IdGenerator] = None,
    request_metrics: Optional[RequestMetrics] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Every dependency can be injected; by default each call gets a fresh
    TodoStore and its own Prometheus registry, so apps never share state.

    Args:
        settings:        Configuration (module-level `settings` if omitted)
        store:           Todo collection served by the /todos routes
        id_generator:    Correlation ID generator for requests without one
        request_metrics: Prometheus registry wrapper for the HTTP metrics
    """
    app_settings = settings if settings is not None else default_settings

    app = FastAPI(
        title=app_settings.app_name,
        description="In-memory todo list service with health and Prometheus metrics endpoints.",
        version=__version__,
        lifespan=lifespan,
    )

    app.state.settings = app_settings
    app.state.todo_store = store if store is not None else TodoStore()
    app.state.metrics = request_metrics if request_metrics is not None else RequestMetrics()

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added executes first: CorrelationId → Instrumentation → routes
    app.add_middleware(RequestInstrumentationMiddleware, metrics=app.state.metrics)
    app.add_middleware(CorrelationIdMiddleware, id_generator=id_generator)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(health.router)
    app.include_router(metrics.router)
    app.include_router(todos.router)

    return app


app = create_app()


def run() -> None:
    """Serve the module-level app with uvicorn on the configured host/port."""
    uvicorn.run(
        app,
        host=default_settings.host,
        port=default_settings.port,
        log_config=None,
    )
