"""Redis transport for the cache manager."""

from collections.abc import AsyncGenerator, Awaitable
from logging import getLogger
from typing import Any

from redis.asyncio import ConnectionPool, Redis
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import RedisError

from catalog.configs import file_logger, pool_kwargs
from catalog.decorators.with_retry import with_retry

logger = file_logger(getLogger(__name__))


class RedisClient:
    """Async Redis wrapper with connection pooling and uniform error mapping.

    Every command failure surfaces as ``redis.exceptions.ConnectionError`` so
    callers only have one transport error type to handle.
    """

    def __init__(self, config: dict[str, Any] | None = None) -> None:
        self.config = dict(pool_kwargs if config is None else config)
        self._pool: ConnectionPool | None = None
        self._redis: Redis | None = None

    @property
    def address(self) -> str:
        return f"{self.config.get('host')}:{self.config.get('port')}"

    @with_retry(max_retries=3, base_delay=0.2, max_delay=1.0)
    async def connect(self) -> None:
        """Open the pool and verify it with PING."""
        self._pool = ConnectionPool(**self.config)
        self._redis = Redis(connection_pool=self._pool)
        try:
            ok = await self._await(self._redis.ping())
        except RedisError as e:
            await self.disconnect()
            mssg = f"Cannot connect to Redis at {self.address}"
            raise RedisConnectionError(mssg) from e
        if not ok:
            await self.disconnect()
            mssg = f"Redis at {self.address} did not answer PING"
            raise RedisConnectionError(mssg)
        logger.info("Connected to Redis at %s.", self.address)

    async def disconnect(self) -> None:
        if self._redis is not None:
            await self._redis.aclose()
            self._redis = None
        if self._pool is not None:
            await self._pool.aclose()
            self._pool = None

    @property
    def client(self) -> Redis:
        if self._redis is None:
            mssg = "Redis client not initialized. Call connect() first."
            raise RuntimeError(mssg)
        return self._redis

    @staticmethod
    async def _await[T](result: Awaitable[T] | T) -> T:
        # redis-py types some commands as sync-or-async
        if isinstance(result, Awaitable):
            return await result
        return result

    async def _run[T](self, op: str, call: Awaitable[T] | T) -> T:
        try:
            return await self._await(call)
        except RedisError as e:
            logger.warning("Redis %s failed: %s", op, e)
            mssg = f"Redis {op} failed: {e}"
            raise RedisConnectionError(mssg) from e

    async def get(self, key: str) -> str | None:
        return await self._run("GET", self.client.get(key))

    async def set(self, key: str, value: str, ex: int | None = None) -> bool:
        return bool(await self._run("SET", self.client.set(key, value, ex=ex)))

    async def delete(self, *keys: str) -> int:
        if not keys:
            return 0
        return await self._run("DEL", self.client.delete(*keys))

    async def exists(self, *keys: str) -> int:
        return await self._run("EXISTS", self.client.exists(*keys))

    async def ttl(self, key: str) -> int:
        return await self._run("TTL", self.client.ttl(key))

    async def ping(self) -> bool:
        return bool(await self._run("PING", self.client.ping()))

    async def info(self) -> dict[str, Any]:
        info = await self._run("INFO", self.client.info())
        return info if isinstance(info, dict) else {}

    async def flush_all(self) -> bool:
        """Flush the selected database."""
        return bool(await self._run("FLUSHDB", self.client.flushdb()))

    async def scan_iter(self, pattern: str, count: int = 100) -> AsyncGenerator[str]:
        """Yield keys matching ``pattern`` using cursor-based SCAN."""
        cursor = 0
        while True:
            cursor, keys = await self._run(
                "SCAN",
                self.client.scan(cursor, match=pattern, count=count),
            )
            for key in keys:
                yield key.decode("utf-8") if isinstance(key, bytes) else key
            if cursor == 0:
                break

    async def delete_pattern(self, pattern: str, batch_size: int = 1000) -> int:
        """
        Delete every key matching ``pattern``.

        Keys are collected with SCAN and removed with DEL in batches so a large
        namespace never blocks the server with a single huge command.
        """
        removed = 0
        batch: list[str] = []
        async for key in self.scan_iter(pattern, count=batch_size):
            batch.append(key)
            if len(batch) >= batch_size:
                removed += await self.delete(*batch)
                batch.clear()
        if batch:
            removed += await self.delete(*batch)
        return removed
