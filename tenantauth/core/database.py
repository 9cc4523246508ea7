"""Async database engine and session factory."""

from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy import text
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel

# Import all models so SQLModel.metadata picks them up
import tenantauth.models  # noqa: F401
from tenantauth.core.config import Settings
from tenantauth.core.errors import PersistenceError


class Database:
    """Engine + session factory built once at startup from explicit settings."""

    def __init__(self, settings: Settings) -> None:
        options: dict = {"echo": False}
        # SQLite (tests) runs on a static single-connection pool
        if not settings.database_url.startswith("sqlite"):
            options.update(
                pool_size=settings.db_pool_size,
                max_overflow=settings.db_max_overflow,
                pool_timeout=settings.db_pool_timeout,
            )
        self.engine = create_async_engine(settings.database_url, **options)
        self.session_factory = sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    async def init_db(self) -> None:
        """Create all tables. Use Alembic migrations in production."""
        async with self.engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.create_all)

    async def ping(self) -> bool:
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except (SQLAlchemyError, OSError):
            return False
        return True

    async def dispose(self) -> None:
        await self.engine.dispose()


@contextmanager
def store_errors() -> Iterator[None]:
    """Re-raise driver failures that nothing else classified as PersistenceError."""
    try:
        yield
    except SQLAlchemyError as exc:
        raise PersistenceError() from exc


def violates_unique(exc: IntegrityError, constraint: str, *columns: str) -> bool:
    """True if ``exc`` is a unique violation of ``constraint`` on ``columns``.

    PostgreSQL names the constraint in its message; SQLite lists the columns
    instead (``UNIQUE constraint failed: users.tenant_id, users.email``).
    """
    message = str(exc.orig)
    if constraint in message:
        return True
    return f"UNIQUE constraint failed: {', '.join(columns)}" in message
