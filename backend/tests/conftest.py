"""
Wrapped Backend - Test Configuration (conftest.py)
====================================================

What:  Shared pytest fixtures for the entire test suite.
How:   Each test that needs a database gets its own SQLite file in tmp_path,
       so API tests never share rows.

Fixture Hierarchy (all function-scoped):
    ├── test_settings:   Settings pointing at the per-test database
    ├── database:        Database with tables created
    ├── app:             FastAPI app wired to that database
    ├── make_client:     factory for independent HTTPX clients (one cookie jar each)
    ├── test_client:     a single client from make_client
    └── mock_db_session: AsyncMock session for service-level unit tests
"""

import os
from typing import AsyncGenerator
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# Override settings for testing BEFORE any app imports
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./test-default.db"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["APP_ENV"] = "test"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["LOG_LEVEL"] = "WARNING"

from wrapped.config import Settings  # noqa: E402
from wrapped.database import Database  # noqa: E402
from wrapped.main import create_app  # noqa: E402

TEST_PASSWORD = "secret123"


@pytest.fixture
def test_settings(tmp_path) -> Settings:
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        jwt_secret="test-secret",
        app_env="test",
        bcrypt_rounds=4,
        log_level="WARNING",
        web_dist=str(tmp_path / "dist"),
    )


@pytest_asyncio.fixture
async def database(test_settings) -> AsyncGenerator[Database, None]:
    db = Database(test_settings)
    await db.create_all()
    yield db
    await db.dispose()


@pytest.fixture
def app(test_settings, database):
    return create_app(test_settings, database)


@pytest_asyncio.fixture
async def make_client(app):
    """
    Factory for HTTPX AsyncClients routed straight into the app.

    Each client keeps its own cookies, so two clients act as two users.
    """
    clients = []

    def factory(target=None) -> AsyncClient:
        transport = ASGITransport(app=target or app)
        client = AsyncClient(transport=transport, base_url="http://test")
        clients.append(client)
        return client

    yield factory

    for client in clients:
        await client.aclose()


@pytest_asyncio.fixture
async def test_client(make_client) -> AsyncClient:
    return make_client()


async def register_user(client: AsyncClient, username: str, email: str = None):
    """Register `username` through the API; the client keeps the session cookie."""
    response = await client.post(
        "/api/auth/register",
        json={
            "email": email or f"{username}@example.com",
            "username": username,
            "password": TEST_PASSWORD,
        },
    )
    assert response.status_code == 200, response.text
    return response.json()


@pytest.fixture
def mock_db_session():
    """
    An AsyncMock that simulates AsyncSession behavior.

    Usage:
        mock_db_session.execute.return_value = result_with(wrap)
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.get = AsyncMock()
    session.add = MagicMock()
    return session


def result_with(value=None, rowcount: int = 0) -> MagicMock:
    """A synchronous stand-in for the Result returned by AsyncSession.execute."""
    result = MagicMock()
    result.scalar_one_or_none.return_value = value
    result.rowcount = rowcount
    return result
