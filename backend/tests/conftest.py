"""
DevConnector Backend: Test Configuration (conftest.py)
=======================================================

What:  Shared pytest fixtures for the whole suite.
How:   Every test that needs storage gets a brand-new in-memory SQLite
       database (aiosqlite + StaticPool) with all tables created, and its
       own application built by `create_app()`.

Fixture Hierarchy:
    test_settings   Settings pointing at sqlite+aiosqlite://
    ├── database    Database with tables created (repository tests)
    └── app         Fully wired FastAPI app on a fresh database
        └── client  httpx AsyncClient over ASGITransport

    mock_users / mock_posts / mock_profiles
                    AsyncMock repositories for service unit tests
"""

import os
from typing import Dict
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# Before any devconnector import: the module-level app reads these
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["JWT_SECRET"] = "test-secret-not-real"
os.environ["LOG_LEVEL"] = "WARNING"

from devconnector.config import Settings  # noqa: E402
from devconnector.database import Database  # noqa: E402
from devconnector.main import create_app  # noqa: E402


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        database_url="sqlite+aiosqlite://",
        jwt_secret="test-secret-not-real",
        log_level="WARNING",
    )


@pytest_asyncio.fixture
async def database(test_settings):
    db = Database(test_settings)
    await db.create_all()
    yield db
    await db.dispose()


@pytest_asyncio.fixture
async def app(test_settings):
    application = create_app(test_settings)
    await application.state.database.create_all()
    yield application
    await application.state.database.dispose()


@pytest_asyncio.fixture
async def client(app):
    """
    HTTP client talking straight to the ASGI app (no server, no lifespan).

    Usage:
        async def test_health(client):
            response = await client.get("/health")
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as http_client:
        yield http_client


@pytest.fixture
def mock_users():
    return AsyncMock()


@pytest.fixture
def mock_posts():
    return AsyncMock()


@pytest.fixture
def mock_profiles():
    return AsyncMock()


# ══════════════════════════════════════════════════════════════════════════
# Helpers
# ══════════════════════════════════════════════════════════════════════════


def auth_headers(token: str) -> Dict[str, str]:
    return {"x-auth-token": token}


async def register(
    client: AsyncClient,
    name: str = "Jane Doe",
    email: str = "jane@mail.com",
    password: str = "secret123",
) -> str:
    """Register a user through the API and return their token."""
    response = await client.post(
        "/api/users",
        json={"name": name, "email": email, "password": password},
    )
    assert response.status_code == 200, response.text
    return response.json()["token"]


async def current_user_id(client: AsyncClient, token: str) -> str:
    response = await client.get("/api/auth", headers=auth_headers(token))
    assert response.status_code == 200, response.text
    return response.json()["id"]
