"""Test fixtures: a fresh in-memory store per test.

Learn: Testing pattern for async SQLAlchemy + FastAPI:

1. Each test gets its own Settings pointing at sqlite+aiosqlite:// (in memory).
2. Database.from_settings uses a StaticPool for SQLite, so every session
   shares the one connection that holds the in-memory schema.
3. create_app(settings, database) builds an isolated app; httpx drives it
   through ASGITransport without a real server.

When the test ends the engine is disposed and the data vanishes.
"""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from keyportal.config import Settings
from keyportal.db.engine import Database
from keyportal.main import create_app

ADMIN_TOKEN = "test-admin-token-0123456789"
TEST_DB_URL = "sqlite+aiosqlite://"


@pytest.fixture()
def settings():
    return Settings(
        database_url=TEST_DB_URL,
        admin_token=ADMIN_TOKEN,
        environment="test",
        api_prefix="/api",
    )


@pytest_asyncio.fixture()
async def database(settings):
    db = Database.from_settings(settings)
    await db.create_all()
    try:
        yield db
    finally:
        await db.dispose()


@pytest_asyncio.fixture()
async def db_session(database):
    """Session on the test store, for service-level tests and assertions."""
    async with database.session_factory() as session:
        yield session


@pytest.fixture()
def app(settings, database):
    return create_app(settings, database=database)


@pytest_asyncio.fixture()
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture()
def admin_headers():
    return {"Authorization": f"Bearer {ADMIN_TOKEN}"}
