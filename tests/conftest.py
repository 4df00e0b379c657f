"""
Test fixtures for the Accounts API test suite.

This module provides shared fixtures used across all test files:

  - db_engine / db_session: Fresh in-memory SQLite database for each test
  - account_factory: Inserts an Account row directly (no cascade, no checks)
  - client: Async HTTP test client (anonymous)
  - admin_client: Test client sending an ADMIN's Basic credentials
  - client_client: Test client sending a CLIENT's Basic credentials
  - other_client_client: A second CLIENT, for cross-owner tests

Key design decisions:
  - In-memory SQLite (sqlite+aiosqlite://) is used for speed and isolation.
    Each test gets a completely fresh database.
  - We override FastAPI's get_db dependency to inject sessions bound to the
    test engine, so the application code runs exactly as in production.
  - Caller fixtures register through the real /auth/register endpoint and
    each get their own AsyncClient, so several identities can be used in
    the same test without clobbering each other's credentials.
"""

from contextlib import asynccontextmanager

import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker

from app.database import Base, get_db
from app.main import app
from app.models.account import Account, Role
from app.security import hash_password


# In-memory SQLite for fast, isolated tests
TEST_DATABASE_URL = "sqlite+aiosqlite://"

ADMIN_SIGNUP = {
    "first_name": "Admin",
    "last_name": "User",
    "email": "admin@example.com",
    "password": "AdminPass1",
    "role": "ADMIN",
}

CLIENT_SIGNUP = {
    "first_name": "Ana",
    "last_name": "Ruiz",
    "email": "ana@example.com",
    "password": "secret1",
    "role": "CLIENT",
    "address": "Calle 1",
    "phone": "555",
    "document": "CI123",
}

OTHER_CLIENT_SIGNUP = {
    "first_name": "Bruno",
    "last_name": "Diaz",
    "email": "bruno@example.com",
    "password": "secret2",
    "role": "CLIENT",
}


@pytest_asyncio.fixture
async def db_engine():
    """Create a fresh async engine with all tables for each test."""
    engine = create_async_engine(TEST_DATABASE_URL)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(db_engine):
    """Provide an async session bound to the test engine."""
    async_session = async_sessionmaker(
        db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
    async with async_session() as session:
        yield session


@pytest_asyncio.fixture
async def account_factory(db_session):
    """
    Insert accounts straight into the database.

    Bypasses account_service.register, so no profile is cascaded. Useful
    for setting up profile-service scenarios by hand.
    """

    async def make(email: str, role: Role = Role.CLIENT, password: str = "secret1") -> Account:
        account = Account(
            first_name="Test",
            last_name="User",
            email=email,
            hashed_password=hash_password(password),
            role=role,
        )
        db_session.add(account)
        await db_session.flush()
        return account

    return make


@pytest_asyncio.fixture
async def client(db_engine):
    """
    Async HTTP test client with the test database injected.

    This overrides the get_db dependency so all requests hit the
    in-memory test database instead of the real one.
    """
    async_session = async_sessionmaker(
        db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async def override_get_db():
        async with async_session() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac

    app.dependency_overrides.clear()


@asynccontextmanager
async def _client_as(email: str, password: str):
    """A separate AsyncClient that sends the given Basic credentials."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
        auth=(email, password),
    ) as ac:
        yield ac


@pytest_asyncio.fixture
async def admin_account(client):
    response = await client.post("/auth/register", json=ADMIN_SIGNUP)
    assert response.status_code == 201, f"Register failed: {response.text}"
    return response.json()


@pytest_asyncio.fixture
async def client_account(client):
    response = await client.post("/auth/register", json=CLIENT_SIGNUP)
    assert response.status_code == 201, f"Register failed: {response.text}"
    return response.json()


@pytest_asyncio.fixture
async def other_client_account(client):
    response = await client.post("/auth/register", json=OTHER_CLIENT_SIGNUP)
    assert response.status_code == 201, f"Register failed: {response.text}"
    return response.json()


@pytest_asyncio.fixture
async def admin_client(admin_account):
    async with _client_as(ADMIN_SIGNUP["email"], ADMIN_SIGNUP["password"]) as ac:
        yield ac


@pytest_asyncio.fixture
async def client_client(client_account):
    async with _client_as(CLIENT_SIGNUP["email"], CLIENT_SIGNUP["password"]) as ac:
        yield ac


@pytest_asyncio.fixture
async def other_client_client(other_client_account):
    async with _client_as(OTHER_CLIENT_SIGNUP["email"], OTHER_CLIENT_SIGNUP["password"]) as ac:
        yield ac
