"""Pytest configuration and shared fixtures.

Organization:
    - Settings Fixtures: pagination settings independent of the environment
    - Database Fixtures: in-memory SQLite engine, session and seeded assets
    - Row Source Fixtures: AsyncMock row sources for unit tests
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
from datetime import UTC, datetime
from typing import TYPE_CHECKING
from unittest.mock import AsyncMock

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker

from connection_service.core.pagination.schemas import QueryResult
from connection_service.core.settings import PaginationSettings, get_pagination_settings
from tests.fixtures.assets import ASSET_ROWS, Asset, Base

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncEngine


# ============================================================================
# Settings Fixtures
# ============================================================================


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    """Drop cached settings so environment changes in a test are picked up."""
    get_pagination_settings.cache_clear()
    yield
    get_pagination_settings.cache_clear()


@pytest.fixture
def pagination_settings() -> PaginationSettings:
    """Pagination settings with the documented defaults."""
    return PaginationSettings(default_limit=100, max_limit=2000)


# ============================================================================
# Database Fixtures
# ============================================================================


@pytest.fixture
async def db_engine() -> AsyncGenerator[AsyncEngine]:
    """Create an in-memory SQLite engine with the test schema."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", echo=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
async def db_session(db_engine: AsyncEngine) -> AsyncGenerator[AsyncSession]:
    """Create a database session; changes are rolled back after the test."""
    async_session = sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)

    async with async_session() as session:
        yield session
        await session.rollback()


@pytest.fixture
async def seeded_session(db_session: AsyncSession) -> AsyncSession:
    """Session whose ``assets`` table holds ``ASSET_ROWS``."""
    created = datetime(2024, 1, 1, tzinfo=UTC)
    db_session.add_all(Asset(**row, created_at=created) for row in ASSET_ROWS)
    await db_session.flush()
    return db_session


# ============================================================================
# Row Source Fixtures
# ============================================================================


@pytest.fixture
def row_source() -> AsyncMock:
    """Row source mock returning an empty page and a count of 0."""
    source = AsyncMock()
    source.fetch_page.return_value = QueryResult(rows=[], count=0)
    source.count.return_value = 0
    return source
