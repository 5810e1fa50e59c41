"""Shared test fixtures."""

from collections.abc import AsyncGenerator
from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient

from src.fl_common.database import get_db_session
from src.main import app


@pytest.fixture
def db_session() -> AsyncMock:
    """Stand-in AsyncSession; services only await commit/rollback on it."""
    return AsyncMock()


@pytest.fixture
async def client(db_session: AsyncMock) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client for testing FastAPI endpoints.

    ASGITransport does not run the lifespan, so no engine or Redis client
    exists; the DB dependency is overridden with ``db_session``.
    """

    async def _override() -> AsyncGenerator[AsyncMock, None]:
        yield db_session

    app.dependency_overrides[get_db_session] = _override
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
