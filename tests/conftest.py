"""Shared test fixtures: async SQLite in-memory DB + test client."""

from collections.abc import AsyncGenerator
from datetime import datetime, timedelta, timezone

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from tenantauth.core.config import Settings
from tenantauth.core.security import CredentialHasher, TokenIssuer
from tenantauth.main import create_app
from tenantauth.services.authentication import AuthenticationService

TEST_SECRET = "test-secret-key-with-more-than-32-characters"


class FrozenClock:
    """Manually advanced clock for token expiry tests."""

    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta: timedelta) -> None:
        self.now += delta


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        database_url="sqlite+aiosqlite://",
        jwt_secret_key=TEST_SECRET,
        # Cheap hashing keeps the suite fast
        password_hash_rounds=1,
        password_hash_memory_cost=1024,
    )


@pytest.fixture
async def app(settings) -> AsyncGenerator[FastAPI, None]:
    """Fresh app + empty in-memory database per test."""
    application = create_app(settings)
    await application.state.database.init_db()
    yield application
    await application.state.database.dispose()


@pytest.fixture
async def session(app) -> AsyncGenerator[AsyncSession, None]:
    async with app.state.database.session_factory() as sess:
        yield sess
        await sess.rollback()


@pytest.fixture
def hasher(app) -> CredentialHasher:
    return app.state.hasher


@pytest.fixture
def clock() -> FrozenClock:
    return FrozenClock(datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def token_issuer(settings, clock) -> TokenIssuer:
    return TokenIssuer(settings.jwt_secret_key, clock=clock)


@pytest.fixture
def service(session, hasher, token_issuer) -> AuthenticationService:
    return AuthenticationService(session, hasher, token_issuer)


@pytest.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """HTTPX async test client bound to the app."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
