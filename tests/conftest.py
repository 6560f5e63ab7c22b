"""Pytest configuration and shared fixtures."""

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from statstore.adapters.clock.system_clock import FixedClock
from statstore.adapters.persistence.database import create_schema

FIXED_NOW = 1_700_000_000


@pytest.fixture
def clock():
    return FixedClock(FIXED_NOW)


@pytest_asyncio.fixture
async def sqlite_engine(tmp_path):
    """File-backed SQLite so separate connections share one database."""
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'stats.db'}",
        poolclass=NullPool,
        connect_args={"timeout": 30},
    )
    await create_schema(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(sqlite_engine):
    return async_sessionmaker(sqlite_engine, expire_on_commit=False)


@pytest_asyncio.fixture
async def session(session_factory):
    async with session_factory() as s:
        yield s
        await s.rollback()
