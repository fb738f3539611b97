"""
DevConnector Backend - Test Configuration (conftest.py)
=======================================================

What:  Shared pytest fixtures for the entire test suite.

Fixture Hierarchy:
    Function-scoped:
    ├── mock_db_session: AsyncMock session (service unit tests, no real DB)
    ├── make_user / make_profile / make_post: transient ORM instances
    ├── test_settings: Settings bound to in-memory SQLite
    ├── test_app: create_app(test_settings) with tables created
    ├── test_client: HTTPX AsyncClient over ASGITransport
    └── register: helper that registers a user and returns auth headers
"""

import os
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

# Override settings BEFORE any app imports: app.main builds an app at import
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["JWT_SECRET"] = "test-secret-not-real"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from app.config import Settings
from app.models.post import Post
from app.models.profile import Profile
from app.models.user import User


# ══════════════════════════════════════════════════════════════════════════
# Unit-test fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_db_session():
    """
    Mock async database session.

    Usage:
        mock_result = MagicMock()
        mock_result.scalar_one_or_none.return_value = profile
        mock_db_session.execute.return_value = mock_result
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.get = AsyncMock()
    session.delete = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def make_user():
    def _make(name="Jane Doe", email=None):
        return User(
            id=str(uuid4()),
            name=name,
            email=email or f"{uuid4().hex[:8]}@example.com",
            password="hashed",
            avatar="//www.gravatar.com/avatar/abc?s=200&r=pg&d=mm",
            date=datetime.now(timezone.utc),
        )
    return _make


@pytest.fixture
def make_profile():
    def _make(user, experience=None, education=None):
        return Profile(
            id=str(uuid4()),
            user_id=user.id,
            user=user,
            status="Developer",
            skills=["python"],
            social={},
            experience=list(experience or []),
            education=list(education or []),
            date=datetime.now(timezone.utc),
        )
    return _make


@pytest.fixture
def make_post():
    def _make(user, likes=None, comments=None, text="Hello world"):
        return Post(
            id=str(uuid4()),
            user_id=user.id,
            text=text,
            name=user.name,
            avatar=user.avatar,
            likes=list(likes or []),
            comments=list(comments or []),
            date=datetime.now(timezone.utc),
        )
    return _make


@pytest.fixture
def scalar_result():
    """Builds MagicMocks shaped like the Result returned by session.execute()."""
    def _result(value):
        result = MagicMock()
        result.scalar_one_or_none.return_value = value
        result.scalars.return_value.all.return_value = value if isinstance(value, list) else []
        return result
    return _result


# ══════════════════════════════════════════════════════════════════════════
# End-to-end fixtures (in-memory SQLite)
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def test_settings():
    return Settings(
        database_url="sqlite+aiosqlite:///:memory:",
        jwt_secret="test-secret-not-real",
        log_level="WARNING",
        rate_limit_requests=10_000,
    )


@pytest_asyncio.fixture
async def test_app(test_settings):
    """A fresh app with its own empty database."""
    from app.main import create_app

    application = create_app(test_settings)
    await application.state.database.create_all()
    yield application
    await application.state.database.dispose()


@pytest_asyncio.fixture
async def test_client(test_app):
    """
    HTTPX AsyncClient routed straight into the app (no server, no lifespan).

    Usage:
        async def test_root(test_client):
            response = await test_client.get("/")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def register(test_client):
    """Register a user and return the Authorization headers for them."""
    async def _register(name="Jane Doe", email=None, password="secret123"):
        response = await test_client.post(
            "/api/users",
            json={
                "name": name,
                "email": email or f"{uuid4().hex[:8]}@example.com",
                "password": password,
            },
        )
        assert response.status_code == 200, response.text
        return {"Authorization": f"Bearer {response.json()['token']}"}
    return _register
