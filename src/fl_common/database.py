"""Database engine factory and per-request session dependency.

The engine and session factory are built once in the app lifespan and kept
on ``app.state``; nothing here is created at import time.
"""

from collections.abc import AsyncGenerator

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from config.settings import Settings


def create_engine(settings: Settings) -> AsyncEngine:
    return create_async_engine(
        settings.DATABASE_URL,
        echo=settings.DEBUG,
        pool_size=10,
        max_overflow=5,
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency: yields an AsyncSession, auto-closes after request."""
    session_factory: async_sessionmaker[AsyncSession] = request.app.state.session_factory
    async with session_factory() as session:
        yield session


_ADVISORY_XACT_LOCK_SQL = text("SELECT pg_advisory_xact_lock(hashtext(:key))")


async def advisory_xact_lock(db: AsyncSession, key: str) -> None:
    """Serialize writers on ``key`` until the current transaction ends.

    Used where there may be no row to lock yet (first settle of a match,
    first season of a group), so ``FOR UPDATE`` alone cannot serialize.
    """
    await db.execute(_ADVISORY_XACT_LOCK_SQL, {"key": key})
