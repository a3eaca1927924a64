"""
Exercise Tracker: Test Configuration (conftest.py)
====================================================

What:  Shared pytest fixtures for the test suite.
How:   Service tests use a mocked AsyncSession; endpoint tests run the real
       app against an in-memory SQLite database through httpx's ASGITransport.

Fixtures:
    mock_db_session: AsyncMock standing in for AsyncSession
    app:             fresh application with its own empty in-memory database
    test_client:     httpx AsyncClient bound to `app`
    create_user:     helper coroutine POSTing a user and returning its JSON
"""

import os
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

# Set before the package is imported: `settings` and the module-level app
# read the environment at import time
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from exercise_tracker.config import Settings
from exercise_tracker.main import create_app

PROJECT_ROOT = Path(__file__).resolve().parent.parent


@pytest.fixture
def mock_db_session():
    """
    A MagicMock that simulates AsyncSession behavior.

    Usage:
        mock_db_session.execute.return_value.scalar_one_or_none.return_value = user
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def test_settings():
    return Settings(
        database_url="sqlite+aiosqlite:///:memory:",
        log_level="WARNING",
        views_dir=str(PROJECT_ROOT / "views"),
        public_dir=str(PROJECT_ROOT / "public"),
    )


@pytest_asyncio.fixture
async def app(test_settings):
    """Application with an isolated, already-initialised in-memory store."""
    application = create_app(test_settings)
    await application.state.database.create_tables()
    yield application
    await application.state.database.dispose()


@pytest_asyncio.fixture
async def test_client(app):
    """
    HTTPX AsyncClient routed straight into the ASGI app (no server, no lifespan).

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def create_user(test_client):
    """Returns a coroutine function: await create_user("alice") → {"username", "_id"}."""

    async def _create(username: str) -> dict:
        response = await test_client.post("/api/users", data={"username": username})
        assert response.status_code == 200
        body = response.json()
        assert "_id" in body, body
        return body

    return _create
