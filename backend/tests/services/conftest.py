"""Service test fixtures: in-memory fakes, async DB, and FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use test DB session
    - db_manager patched so the readiness probe sees the test engine

Design Decisions:
    - SQLite in-memory: fast, no external dependency; the unique email index behaves
      the same as on PostgreSQL for these tests
    - Real bcrypt through passlib at the minimum cost factor, so route tests exercise
      the production hasher
"""

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

from accounts_api.db.base import Base
from accounts_api.infrastructure.database import get_db, DatabaseSessionManager
from accounts_api.infrastructure.password_hasher import BcryptPasswordHasher
from accounts_api.services.account_service import AccountService
import accounts_api.models  # noqa: F401
import accounts_api.infrastructure.database as db_module
from accounts_api.main import app

from tests.services.fakes import FakeHasher, FakeUserStore


@pytest.fixture
def fake_store():
    return FakeUserStore()


@pytest.fixture
def fake_hasher():
    return FakeHasher()


@pytest.fixture
def service(fake_store, fake_hasher):
    return AccountService(fake_store, fake_hasher)


@pytest.fixture
def bcrypt_hasher():
    return BcryptPasswordHasher(rounds=4)


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    # Readiness probe reads db_manager directly
    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture
async def created_user(client):
    """Create a user through the API; returns its public view plus password."""
    res = await client.post("/users", json={
        "name": "Alice",
        "email": "alice@example.com",
        "password": "secret1",
        "password_confirm": "secret1",
    })
    assert res.status_code == 200
    listing = await client.get("/users")
    user = next(u for u in listing.json() if u["email"] == "alice@example.com")
    return {**user, "password": "secret1"}
