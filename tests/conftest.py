"""Pytest configuration and fixtures."""

import os

# Settings are read once at import time; configure the test environment first.
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("PASSWORD_HASH_ROUNDS", "4")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")
os.environ.setdefault("ALLOWED_HOSTS", '["test", "testserver", "localhost"]')

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from cinecollection.core.database import Base, get_db_session
from cinecollection.main import app
from cinecollection.services.auth_service import AuthService

# Test database URL (using SQLite for tests)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture
async def db_session():
    """Create a fresh in-memory database and session per test."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session

    await engine.dispose()


@pytest_asyncio.fixture
async def client(db_session):
    """Create a test client with database dependency override."""

    async def get_test_db():
        yield db_session

    app.dependency_overrides[get_db_session] = get_test_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
def auth_service(db_session):
    return AuthService(db_session)


@pytest_asyncio.fixture
async def alice(auth_service):
    """Registered user A: (identity, token)."""
    result = await auth_service.register("alice@example.com", "correct-horse", "Alice")
    return AuthService.validate_token(result.token), result.token


@pytest_asyncio.fixture
async def bob(auth_service):
    """Registered user B: (identity, token)."""
    result = await auth_service.register("bob@example.com", "battery-staple", "Bob")
    return AuthService.validate_token(result.token), result.token


@pytest.fixture
def auth_headers(alice):
    """Authorization header for user A."""
    _, token = alice
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def sample_entry_data():
    """Sample entry payload as the client sends it."""
    return {
        "title": "Inception",
        "type": "Movie",
        "director": "Christopher Nolan",
        "budget": "$160M",
        "location": "Los Angeles, Paris",
        "duration": "148 min",
        "yearTime": "2010",
        "posterUrl": "https://example.com/inception.jpg",
    }
