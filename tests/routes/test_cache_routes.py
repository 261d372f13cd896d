"""Tests for the cache administration endpoints."""

from unittest.mock import AsyncMock

import pytest
from httpx import AsyncClient
from redis.exceptions import ConnectionError as RedisConnectionError

from catalog.managers.cache_manager import CacheManager


@pytest.mark.asyncio
async def test_stats(client: AsyncClient, cache: CacheManager) -> None:
    await cache.set("k", 1)
    await cache.get("k", int)

    response = await client.get("/cache/stats")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "success"
    assert body["data"]["hits"] == 1
    assert body["data"]["sets"] == 1


@pytest.mark.asyncio
async def test_ping(client: AsyncClient) -> None:
    response = await client.get("/cache/ping")

    assert response.status_code == 200
    assert "in-memory" in response.json()["message"]


@pytest.mark.asyncio
async def test_ping_unreachable(client: AsyncClient, cache: CacheManager) -> None:
    cache._client = AsyncMock()
    cache._client.ping.side_effect = ConnectionError("down")

    response = await client.get("/cache/ping")

    assert response.status_code == 503
    assert response.json()["error_code"] == 503


@pytest.mark.asyncio
async def test_reset_stats(client: AsyncClient, cache: CacheManager) -> None:
    await cache.get("absent", int)

    response = await client.post("/cache/reset-stats")

    assert response.status_code == 200
    assert cache.statistics.misses == 0


@pytest.mark.asyncio
async def test_clear(client: AsyncClient, cache: CacheManager) -> None:
    await cache.set("a", 1)
    await cache.set("b", 2)

    response = await client.delete("/cache/clear")

    assert response.status_code == 200
    assert response.json()["deleted"] == 2
    assert await cache.exists("a") is False


@pytest.mark.asyncio
async def test_enable_redis_unreachable(client: AsyncClient, cache: CacheManager) -> None:
    cache.redis_client = AsyncMock()
    cache.redis_client.connect.side_effect = RedisConnectionError("refused")

    response = await client.post("/cache/redis/enable")

    assert response.status_code == 503
    assert response.json()["status"] == "error"
    assert cache.backend == "in-memory"


@pytest.mark.asyncio
async def test_disable_redis_when_already_in_memory(client: AsyncClient) -> None:
    response = await client.post("/cache/redis/disable")

    assert response.status_code == 200
    assert response.json()["status"] == "unchanged"
