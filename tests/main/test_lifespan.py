"""Startup and shutdown wiring."""

from unittest.mock import AsyncMock

import pytest
from asgi_lifespan import LifespanManager
from pytest_mock.plugin import MockerFixture

from catalog.main import app
from catalog.managers.cache_manager import CacheManager


@pytest.fixture
def database(mocker: MockerFixture) -> dict[str, AsyncMock]:
    return {
        "init_db": mocker.patch("catalog.middleware.middleware.init_db", AsyncMock()),
        "close_db": mocker.patch("catalog.middleware.middleware.close_db", AsyncMock()),
    }


@pytest.mark.asyncio
async def test_lifespan_starts_in_memory_cache(database: dict[str, AsyncMock]) -> None:
    async with LifespanManager(app):
        manager = app.state.cache_manager
        assert isinstance(manager, CacheManager)
        assert manager.backend == "in-memory"
        assert await manager.ping() is True
        database["init_db"].assert_awaited_once()

    database["close_db"].assert_awaited_once()

