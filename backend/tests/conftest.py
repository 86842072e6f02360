"""
SocialHub Backend — Test Configuration (conftest.py)
=====================================================

What:  Shared pytest fixtures for the entire test suite.
How:   Each test gets a private in-memory SQLite database (aiosqlite,
       StaticPool so every session shares the one connection) with the
       schema created from Base.metadata.

Fixture Hierarchy (all function-scoped):
    db_engine ─┬─ session_factory ─┬─ db_session      service/repository tests
               │                   └─ app ── client    HTTP tests
               └─ (disposed after the test)
    hasher:           4-round bcrypt PasswordHasher
    token_service:    TokenService with the test secret
    create_user:      inserts and commits an account
    auth_headers:     Authorization header for an account
    mock_db_session:  AsyncMock session for failure injection
"""

import os

# Override settings BEFORE any socialhub import
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["JWT_SECRET"] = "test-secret-key-that-is-at-least-32-bytes-long"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["LOG_LEVEL"] = "WARNING"

from typing import Optional
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import socialhub.models  # noqa: F401
from socialhub.database import Base, enable_sqlite_savepoints
from socialhub.models.user import User
from socialhub.repositories.user_repository import UserRepository
from socialhub.security.passwords import PasswordHasher, get_password_hasher
from socialhub.security.tokens import TokenService

DEFAULT_PASSWORD = "password123"


# ══════════════════════════════════════════════════════════════════════════
# Database
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def db_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_savepoints(engine)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    """
    A session for calling services and repositories directly.

    Services only flush; rows persist past the test body only where a
    test (or create_user) commits.
    """
    async with session_factory() as session:
        yield session


@pytest.fixture
def mock_db_session():
    """AsyncSession stand-in for injecting driver failures."""
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.get = AsyncMock()
    session.add = MagicMock()
    return session


# ══════════════════════════════════════════════════════════════════════════
# Security collaborators
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def hasher():
    return PasswordHasher(rounds=4)


@pytest.fixture
def token_service():
    return TokenService()


@pytest.fixture
def create_user(db_session, hasher):
    """
    Factory fixture: `await create_user("alice")` inserts and commits an
    account with email alice@email.com and DEFAULT_PASSWORD.
    """

    async def _create(
        username: str,
        email: Optional[str] = None,
        password: str = DEFAULT_PASSWORD,
        first_name: str = "Test",
        last_name: str = "User",
    ) -> User:
        result = await UserRepository(db_session).create(
            username=username,
            email=email or f"{username}@email.com",
            password_hash=hasher.hash(password),
            first_name=first_name,
            last_name=last_name,
        )
        assert not result.conflict, f"fixture user {username} already exists"
        await db_session.commit()
        return result.entity

    return _create


# ══════════════════════════════════════════════════════════════════════════
# HTTP
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def app(session_factory, hasher):
    """A fresh application wired to the per-test database."""
    from socialhub.main import create_app

    application = create_app()
    application.state.session_factory = session_factory
    application.dependency_overrides[get_password_hasher] = lambda: hasher
    return application


@pytest_asyncio.fixture
async def client(app):
    """
    HTTPX AsyncClient talking to the app through ASGITransport.

    Usage:
        async def test_health(client):
            response = await client.get("/health")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def auth_headers(token_service):
    """`auth_headers(user)` → Authorization header with a fresh token for `user`."""

    def _headers(user: User) -> dict:
        return {"Authorization": f"Bearer {token_service.issue(user.username)}"}

    return _headers
