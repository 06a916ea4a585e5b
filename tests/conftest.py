"""Pytest fixtures for the cycling results tests."""

from unittest.mock import AsyncMock

import pytest
import pytest_asyncio

from cycling_results.adapters.database.manager import DatabaseManager
from cycling_results.config import Config

from factories import StoreSeeder


@pytest.fixture
def test_config(tmp_path, monkeypatch):
    """Configuration pointing at a throwaway SQLite file.

    A file rather than ``:memory:`` because every session opens its own
    connection.
    """
    monkeypatch.setenv("DATABASE_URL", f"sqlite+aiosqlite:///{tmp_path / 'cycling_results.db'}")
    monkeypatch.setenv("ENVIRONMENT", "CI")
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    return Config.from_env()


@pytest_asyncio.fixture
async def database_manager(test_config):
    """Initialized manager over an empty schema."""
    manager = DatabaseManager(test_config)
    await manager.initialize()
    await manager.create_tables()

    yield manager

    await manager.drop_tables()
    await manager.close()


@pytest_asyncio.fixture
async def seeded_database(database_manager):
    """Manager over a schema seeded by StoreSeeder."""
    async with database_manager.get_session() as session:
        await StoreSeeder.seed(session)
    return database_manager


@pytest.fixture
def mock_database():
    """Stand-in DatabaseManager whose query methods are AsyncMocks."""
    return AsyncMock(spec=DatabaseManager)
