"""Pytest configuration and fixtures for cache tests."""

from collections.abc import AsyncGenerator

import pytest

from catalog.clients import MemoryClient
from catalog.configs import CacheConfig
from catalog.managers.cache_manager import CacheManager


@pytest.fixture
def cache_config() -> CacheConfig:
    return CacheConfig(key_prefix="test", operation_timeout=0.2, invalidation_timeout=0.5)


@pytest.fixture
def memory_client() -> MemoryClient:
    """
    Create an in-memory cache client for testing.

    Use this fixture for testing cache operations without Redis dependency.
    """
    return MemoryClient()


@pytest.fixture
async def cache_manager(
    cache_config: CacheConfig,
    memory_client: MemoryClient,
) -> AsyncGenerator[CacheManager]:
    """
    Create cache manager backed by the in-memory client.

    Initializes the manager and shuts it down on teardown.
    """
    manager = CacheManager(cache_config, memory_client=memory_client, redis_enabled=False)
    try:
        await manager.initialize()
        yield manager
    finally:
        await manager.shutdown()
