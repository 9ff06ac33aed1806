"""Pytest configuration and fixtures.

Database handling:
- Every test that needs the database gets a fresh in-memory SQLite database
  (sqlite+aiosqlite), so no external services are required.
- The app's get_db dependency is overridden with a session factory bound to
  that database, mirroring get_db's commit/rollback behaviour.

Argon2 parameters are turned down to the minimum so hashing is fast.
"""

import os
from collections.abc import AsyncGenerator, Callable
from datetime import UTC, datetime

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

# Set test environment variables before importing app modules
TEST_JWT_SECRET = "test-jwt-secret-for-feedback-collector-tests"
os.environ["JWT_SECRET_KEY"] = TEST_JWT_SECRET
os.environ["PASSWORD_HASH_TIME_COST"] = "1"
os.environ["PASSWORD_HASH_MEMORY_COST"] = "8"
os.environ["PASSWORD_HASH_PARALLELISM"] = "1"

TEST_EMAIL = "a@x.com"
TEST_PASSWORD = "secret1"


class FakeClock:
    """Settable clock for TokenService."""

    def __init__(self, now: datetime | None = None):
        self.now = now or datetime.now(UTC)

    def __call__(self) -> datetime:
        return self.now


# --- Component Fixtures ---


@pytest.fixture
def test_settings():
    """Settings with a known secret and the cheapest Argon2 parameters."""
    from feedback_collector.core.config import Settings

    return Settings(
        jwt_secret_key=TEST_JWT_SECRET,
        password_hash_time_cost=1,
        password_hash_memory_cost=8,
        password_hash_parallelism=1,
        cors_origins="http://localhost:3000",
    )


@pytest.fixture
def credential_store(test_settings):
    from feedback_collector.services.credentials import CredentialStore, HashingConfig

    return CredentialStore(HashingConfig.from_settings(test_settings))


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def token_service(test_settings, fake_clock):
    from feedback_collector.services.tokens import TokenConfig, TokenService

    return TokenService(TokenConfig.from_settings(test_settings), clock=fake_clock)


# --- Database Fixtures ---


@pytest_asyncio.fixture
async def db_engine():
    """Create an in-memory SQLite database with all tables."""
    from feedback_collector.core.database import Base
    from feedback_collector.models import Account, Feedback, Room  # noqa: F401

    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        echo=False,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_maker(db_engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_maker) -> AsyncGenerator[AsyncSession, None]:
    """Create a database session for testing."""
    async with session_maker() as session:
        yield session
        await session.rollback()


@pytest_asyncio.fixture
async def file_session_maker(tmp_path) -> AsyncGenerator[async_sessionmaker[AsyncSession], None]:
    """Session factory over a file-backed SQLite database with foreign keys enforced.

    Unlike the in-memory engine, every session gets its own connection, so
    sessions can run truly concurrently against the same database.
    """
    from feedback_collector.core.database import Base
    from feedback_collector.models import Account, Feedback, Room  # noqa: F401

    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")

    @event.listens_for(engine.sync_engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


@pytest_asyncio.fixture
async def async_client(test_settings, session_maker) -> AsyncGenerator[AsyncClient, None]:
    """Create an async test client with the database dependency overridden."""
    from feedback_collector.core.database import get_db
    from feedback_collector.main import create_app

    app = create_app(test_settings)

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with session_maker() as session:
            try:
                yield session
                await session.commit()
            except BaseException:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


# --- Test Factories ---


@pytest.fixture
def account_factory(db_session, credential_store) -> Callable:
    """Factory for creating accounts directly through the service."""
    from feedback_collector.services.accounts import AccountService

    async def _create_account(email: str = TEST_EMAIL, password: str = TEST_PASSWORD):
        return await AccountService(db_session, credential_store).register(email, password)

    return _create_account


@pytest.fixture
def room_factory(db_session, credential_store, account_factory) -> Callable:
    """Factory for creating rooms, with an owner created on demand."""
    from feedback_collector.services.rooms import RoomService

    async def _create_room(owner=None, name: str = "Retro", password: str | None = None):
        if owner is None:
            owner = await account_factory(email="owner@x.com")
        return await RoomService(db_session, credential_store).create(owner.id, name, password)

    return _create_room


# --- HTTP Helpers ---


@pytest_asyncio.fixture
async def registered(async_client) -> dict:
    """Register the default test account over HTTP and return the response body."""
    response = await async_client.post(
        "/auth/register",
        json={"email": TEST_EMAIL, "password": TEST_PASSWORD},
    )
    assert response.status_code == 201
    return response.json()


@pytest.fixture
def auth_headers(registered) -> dict[str, str]:
    """Headers with the registered account's bearer token."""
    return {"Authorization": f"Bearer {registered['token']}"}


def pytest_collection_modifyitems(config, items):
    """Mark tests that touch the database or the app as integration, the rest as unit."""
    integration_fixtures = {"db_session", "db_engine", "async_client", "file_session_maker"}

    for item in items:
        if any(mark.name in ("unit", "integration") for mark in item.iter_markers()):
            continue
        if integration_fixtures & set(getattr(item, "fixturenames", ())):
            item.add_marker(pytest.mark.integration)
        else:
            item.add_marker(pytest.mark.unit)
