"""Tests for the settings-driven engine and session helpers."""

import pytest

from statstore.adapters.persistence import database
from statstore.adapters.persistence.database import (
    create_schema,
    get_engine,
    get_session_factory,
    session_scope,
)
from statstore.config import settings
from statstore.factory import build_counter_store


@pytest.fixture
def sqlite_settings(tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "database_url", f"sqlite+aiosqlite:///{tmp_path / 'cfg.db'}")
    get_engine.cache_clear()
    get_session_factory.cache_clear()
    yield settings
    get_engine.cache_clear()
    get_session_factory.cache_clear()


@pytest.mark.asyncio
async def test_default_engine_follows_settings(sqlite_settings):
    engine = get_engine()
    try:
        assert engine.dialect.name == "sqlite"
        assert get_engine() is engine

        await create_schema()
        async with session_scope() as s:
            await build_counter_store(s).increment("boots")
        async with session_scope() as s:
            assert await build_counter_store(s).fetch_value("boots") == 1
    finally:
        await engine.dispose()


def test_base_registers_counter_table():
    from statstore.adapters.persistence import models  # noqa: F401

    assert "counter_entries" in database.Base.metadata.tables
