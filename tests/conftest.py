"""
Todo API — Test Configuration (conftest.py)
=============================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped, created fresh for each test):
    ├── fixed_now: The instant every store-created todo is stamped with
    ├── todo_store: Empty TodoStore with a frozen clock
    ├── correlation_ids: Deterministic correlation ID generator
    ├── app: FastAPI app wired to the fixtures above
    └── test_client: HTTPX AsyncClient talking to `app` in-process
"""

import itertools
import os
from datetime import datetime, timezone

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# Override settings for testing BEFORE any app imports
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["ENVIRONMENT"] = "test"

from todo_api.config import Settings  # noqa: E402
from todo_api.main import create_app  # noqa: E402
from todo_api.services.todo_store import TodoStore  # noqa: E402


@pytest.fixture
def fixed_now():
    return datetime(2026, 10, 19, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def todo_store(fixed_now):
    """An empty store whose clock always returns `fixed_now`."""
    return TodoStore(clock=lambda: fixed_now)


@pytest.fixture
def correlation_ids():
    """
    Deterministic correlation ID generator: test-cid-1, test-cid-2, ...

    Usage:
        async def test_x(test_client):
            response = await test_client.get("/health")
            assert response.headers["X-Correlation-ID"] == "test-cid-1"
    """
    counter = itertools.count(1)
    return lambda: f"test-cid-{next(counter)}"


@pytest.fixture
def app(todo_store, correlation_ids):
    return create_app(
        settings=Settings(log_level="WARNING", environment="test"),
        store=todo_store,
        id_generator=correlation_ids,
    )


@pytest_asyncio.fixture
async def test_client(app):
    """
    Provides an async HTTP test client for endpoint testing.

    Uses ASGITransport to route requests directly to the app (no server, no
    lifespan), so logging configuration is left to the test harness.
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
