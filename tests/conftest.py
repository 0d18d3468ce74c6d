"""Test fixtures — a fresh in-memory database per test, real auth.

Learn: Testing pattern for async SQLAlchemy + FastAPI:

1. Each test gets its own in-memory SQLite engine (aiosqlite). StaticPool
   keeps a single connection alive so every session sees the same DB.
2. PRAGMA foreign_keys=ON so ON DELETE CASCADE behaves like Postgres.
3. The app's get_db dependency is overridden to hand out sessions from
   that engine, one per request — the same shape as production.

Auth is NOT mocked: tests register users and send real bearer tokens,
because the token pipeline is what most of these tests are about.
"""

import uuid

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from linkedcommunity.config import Settings
from linkedcommunity.db.engine import build_session_factory, get_db
from linkedcommunity.db.models import Base
from linkedcommunity.main import create_app

TEST_DB_URL = "sqlite+aiosqlite://"
TEST_SECRET = "test-secret-for-linkedcommunity-suite-0123456789"


@pytest.fixture()
def settings():
    return Settings(
        _env_file=None,
        jwt_secret=TEST_SECRET,
        database_url=TEST_DB_URL,
        bcrypt_rounds=4,
    )


@pytest_asyncio.fixture()
async def engine():
    engine = create_async_engine(
        TEST_DB_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    @event.listens_for(engine.sync_engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    try:
        yield engine
    finally:
        await engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return build_session_factory(engine)


@pytest_asyncio.fixture()
async def db_session(session_factory):
    """Direct session for service-level tests and DB assertions."""
    async with session_factory() as session:
        yield session


@pytest.fixture()
def app(settings, session_factory):
    app = create_app(settings)

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    yield app
    app.dependency_overrides.clear()


@pytest_asyncio.fixture()
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture()
def make_user(client):
    """Register a user through the API. Returns (user_json, auth_headers)."""

    async def _make(name="Ada Lovelace", email=None, password="secret123", bio=None):
        email = email or f"user-{uuid.uuid4().hex[:8]}@example.com"
        body = {"name": name, "email": email, "password": password}
        if bio is not None:
            body["bio"] = bio
        r = await client.post("/api/auth/register", json=body)
        assert r.status_code == 201, r.text
        data = r.json()
        return data["user"], {"Authorization": f"Bearer {data['token']}"}

    return _make
