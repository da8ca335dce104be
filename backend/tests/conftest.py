"""Shared pytest fixtures configured to use SQLite in-memory for unit tests."""

import logging
import os
from uuid import uuid4

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

# the app lifespan must not touch the configured Postgres
os.environ.setdefault("MARKNOTE_SKIP_LIFESPAN_DB", "1")

from marknote.core.models import BaseModel, Note, User  # noqa: E402
from marknote.database import get_db_session  # noqa: E402
from marknote.main import app  # noqa: E402
from marknote.security.jwt import create_access_token  # noqa: E402
from marknote.security.password import hash_password  # noqa: E402

# Silence verbose DEBUG logs from aiosqlite to keep test output readable
logging.getLogger("aiosqlite").setLevel(logging.WARNING)

TEST_DB_URL = "sqlite+aiosqlite:///:memory:"


class FakeRedisClient:
    """In-memory stand-in for ``RedisClient`` with the same coroutine API."""

    def __init__(self):
        self.storage = {}
        self.counters = {}

    async def add_to_blacklist(self, token_jti, expire=900):
        self.storage[f"blacklist:{token_jti}"] = expire
        return True

    async def is_token_blacklisted(self, token_jti):
        return f"blacklist:{token_jti}" in self.storage

    async def increment_rate_limit(self, key, expire=60):
        self.counters[key] = self.counters.get(key, 0) + 1
        return self.counters[key]


@pytest.fixture
async def test_engine():
    """Fresh SQLite in-memory engine per test."""
    engine = create_async_engine(
        TEST_DB_URL,
        echo=False,
        poolclass=StaticPool,  # keep the same memory DB across connections
        connect_args={"check_same_thread": False},
    )

    # SQLite needs this for ON DELETE CASCADE
    @event.listens_for(engine.sync_engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):  # noqa: ANN001
        cursor = dbapi_connection.cursor()
        try:
            cursor.execute("PRAGMA foreign_keys=ON")
        finally:
            cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(BaseModel.metadata.create_all)

    try:
        yield engine
    finally:
        await engine.dispose()


@pytest.fixture
async def test_session(test_engine):
    """Database session bound to the per-test engine."""
    session_maker = async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False
    )
    async with session_maker() as session:
        try:
            yield session
        finally:
            await session.rollback()


@pytest.fixture
def fake_redis(monkeypatch):
    """Route every Redis access through an in-memory fake."""
    fake = FakeRedisClient()
    import marknote.core.services.public_note_service as public_module
    import marknote.security.jwt as jwt_module

    monkeypatch.setattr(jwt_module, "get_redis_client", lambda: fake)
    monkeypatch.setattr(public_module, "get_redis_client", lambda: fake)
    return fake


@pytest.fixture
def test_app(test_session, fake_redis):
    """App with the DB session dependency pointed at the test database."""

    async def _override_get_db():
        yield test_session

    app.dependency_overrides[get_db_session] = _override_get_db
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
async def async_client(test_app):
    """HTTP client talking to the app in-process."""
    transport = ASGITransport(app=test_app, client=("203.0.113.7", 50000))
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def test_user_data():
    return {
        "email": f"user_{uuid4().hex[:8]}@example.com",
        "password": "secret123",
    }


@pytest.fixture
async def test_user(test_session, test_user_data):
    """Create a test user in the database."""
    user = User(
        email=test_user_data["email"],
        password_hash=hash_password(test_user_data["password"]),
        is_active=True,
    )
    test_session.add(user)
    await test_session.commit()
    await test_session.refresh(user)

    user.plain_password = test_user_data["password"]
    return user


@pytest.fixture
def auth_headers(test_user):
    """Authentication headers with a valid JWT for ``test_user``."""
    access_token = create_access_token({"sub": str(test_user.id)})
    return {"Authorization": f"Bearer {access_token}"}


@pytest.fixture
async def test_note(test_session, test_user):
    """A private note owned by ``test_user``."""
    note = Note(
        title="Groceries",
        content="- milk\n- eggs\n- bread",
        owner_id=test_user.id,
    )
    test_session.add(note)
    await test_session.commit()
    await test_session.refresh(note)
    return note
