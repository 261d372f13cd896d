"""Cache store adapter with graceful degradation and in-memory fallback."""

from asyncio import Lock as AsyncLock
from asyncio import timeout
from collections import OrderedDict
from collections.abc import Awaitable, Callable
from functools import lru_cache
from logging import DEBUG, getLogger
from threading import Lock as ThreadLock
from typing import Any

from pydantic import TypeAdapter, ValidationError
from redis.exceptions import RedisError
from starlette import status

from catalog.clients.memory_client import MemoryClient
from catalog.clients.protocols import CacheClientProtocol
from catalog.clients.redis_client import RedisClient
from catalog.configs import CacheConfig, file_logger, settings
from catalog.data.statistics import CacheStatistics
from catalog.errors import BASE_EXCEPTION, CacheExceptionError
from catalog.managers.cache_types import CacheFactory, CacheLookup
from catalog.schemas.cache import Backend, CacheActionResponse
from catalog.utils.cache_serializer import decode, encode

logger = file_logger(getLogger(__name__))

# Everything a transport may raise that must degrade instead of propagate.
# CancelledError is a BaseException and always propagates.
TRANSPORT_ERRORS = (RedisError, *BASE_EXCEPTION)


@lru_cache(maxsize=256)
def _adapter(response_type: Any) -> TypeAdapter[Any]:
    return TypeAdapter(response_type)


class CacheManager:
    """
    Read-through cache adapter used by the query and command handlers.

    No method here raises on a cache failure. Transport errors, timeouts and
    undecodable payloads are logged, counted, and reported as a miss, ``False``
    or a no-op, so the caller always falls through to the repository.

    Features:
        - Bounded transport calls (``CACHE_OPERATION_TIMEOUT``)
        - Automatic fallback to the in-memory client when Redis is lost
        - Per-key single-flight for ``get_or_set`` with an LRU-bounded lock table
        - Compression for large values
        - Statistics tracking
    """

    def __init__(
        self,
        config: CacheConfig | None = None,
        *,
        redis_client: RedisClient | None = None,
        memory_client: MemoryClient | None = None,
        client: CacheClientProtocol | None = None,
        redis_enabled: bool | None = None,
    ) -> None:
        self.cache_config = config or CacheConfig()
        self.redis_client = redis_client or RedisClient()
        self.memory_client = memory_client or MemoryClient()
        self._client: CacheClientProtocol = client or self.memory_client
        self.redis_enabled = settings.REDIS_ENABLED if redis_enabled is None else redis_enabled
        self.is_redis_available = False
        self.statistics = CacheStatistics()

        self._locks: OrderedDict[str, AsyncLock] = OrderedDict()
        self._locks_lock = ThreadLock()

    @property
    def backend(self) -> Backend:
        return "redis" if self.is_redis_available else "in-memory"

    async def initialize(self) -> None:
        """Connect to Redis when enabled, otherwise (or on failure) use memory."""
        await self.memory_client.start_lifecycle()
        if not self.redis_enabled:
            logger.info("Redis disabled. Using in-memory cache.")
            self._client = self.memory_client
            return
        try:
            await self.redis_client.connect()
        except TRANSPORT_ERRORS as e:
            logger.warning(f"Redis connection failed: {e}. Falling back to in-memory cache.")
            self._client = self.memory_client
            self.statistics.record_fallback()
            return
        self._client = self.redis_client
        self.is_redis_available = True
        logger.info("Cache manager initialized with Redis backend.")

    async def shutdown(self) -> None:
        if self.is_redis_available:
            await self.redis_client.disconnect()
            self.is_redis_available = False
        await self.memory_client.close()
        logger.info("Cache manager shut down.")

    def _build_key(self, key: str) -> str:
        return f"{self.cache_config.key_prefix}:{key}"

    async def _guard[R](
        self,
        op: str,
        target: str,
        call: Callable[[CacheClientProtocol], Awaitable[R]],
        default: R,
        *,
        limit: float | None = None,
    ) -> R:
        seconds = self.cache_config.operation_timeout if limit is None else limit
        client = self._client
        try:
            async with timeout(seconds):
                return await call(client)
        except TimeoutError:
            self.statistics.record_timeout()
            logger.warning("Cache %s timed out after %.2fs for %s", op, seconds, target)
        except RedisError as e:
            self.statistics.record_error()
            logger.warning("Cache %s failed for %s: %s", op, target, e)
            if client is self.redis_client:
                await self._fallback_to_memory()
        except BASE_EXCEPTION as e:
            self.statistics.record_error()
            logger.warning("Cache %s failed for %s: %s", op, target, e)
        return default

    async def get[T](self, key: str, response_type: type[T] | Any) -> CacheLookup[T]:
        """
        Look up ``key`` and validate the stored value as ``response_type``.

        Args:
            key: Unprefixed cache key.
            response_type: Type the cached JSON is validated against.

        Returns:
            A hit carrying the value, or a miss when the key is absent, the
            payload cannot be decoded or validated, or the transport failed.
        """
        full_key = self._build_key(key)
        raw = await self._guard("get", full_key, lambda c: c.get(full_key), None)
        if raw is None:
            self.statistics.record_miss()
            if logger.isEnabledFor(DEBUG):
                logger.debug("Cache miss: %s", full_key)
            return CacheLookup.missing()

        try:
            value = _adapter(response_type).validate_python(decode(raw))
        except (CacheExceptionError, ValidationError) as e:
            self.statistics.record_error()
            self.statistics.record_miss()
            logger.warning("Discarding unreadable cache entry %s: %s", full_key, e)
            return CacheLookup.missing()

        self.statistics.record_hit()
        if logger.isEnabledFor(DEBUG):
            logger.debug("Cache hit: %s", full_key)
        return CacheLookup.found(value)

    async def set(self, key: str, value: object, ttl: int | None = None) -> bool:
        """Store ``value`` for ``ttl`` seconds (default TTL, capped at max TTL)."""
        full_key = self._build_key(key)
        try:
            payload = encode(
                value,
                compression=self.cache_config.compression_enabled,
                threshold=self.cache_config.compression_threshold,
            )
        except CacheExceptionError as e:
            self.statistics.record_error()
            logger.warning("Cannot cache %s: %s", full_key, e)
            return False

        ex = ttl if ttl is not None else self.cache_config.default_ttl
        ex = min(ex, self.cache_config.max_ttl)
        stored = await self._guard("set", full_key, lambda c: c.set(full_key, payload, ex=ex), False)
        if stored:
            self.statistics.record_set()
        return bool(stored)

    async def remove(self, key: str) -> bool:
        """Delete a single key. ``False`` only when the cache could not be reached."""
        full_key = self._build_key(key)
        deleted = await self._guard("delete", full_key, lambda c: c.delete(full_key), None)
        if deleted is None:
            return False
        if deleted:
            self.statistics.record_delete(deleted)
        return True

    async def remove_by_pattern(self, pattern: str) -> bool:
        """
        Delete every key matching the glob ``pattern`` (e.g. ``"products:*"``).

        Returns:
            True when the deletion ran to completion, False when it failed or
            timed out (the write that triggered it still stands).
        """
        full_pattern = self._build_key(pattern)
        deleted = await self._guard(
            "invalidate",
            full_pattern,
            lambda c: c.delete_pattern(full_pattern, self.cache_config.scan_batch_size),
            None,
            limit=self.cache_config.invalidation_timeout,
        )
        if deleted is None:
            return False
        self.statistics.record_invalidation()
        if deleted:
            self.statistics.record_delete(deleted)
        logger.info("Invalidated %d cache keys matching '%s'.", deleted, full_pattern)
        return True

    async def exists(self, key: str) -> bool:
        full_key = self._build_key(key)
        return bool(await self._guard("exists", full_key, lambda c: c.exists(full_key), 0))

    async def ttl(self, key: str) -> int:
        """Remaining TTL of ``key``: -2 when absent or unreachable, -1 without expiry."""
        full_key = self._build_key(key)
        return await self._guard("ttl", full_key, lambda c: c.ttl(full_key), -2)

    def _get_or_create_lock(self, key: str) -> AsyncLock:
        with self._locks_lock:
            if key in self._locks:
                self._locks.move_to_end(key)
                return self._locks[key]
            while len(self._locks) >= self.cache_config.max_locks:
                self._locks.popitem(last=False)
            lock = AsyncLock()
            self._locks[key] = lock
            return lock

    async def get_or_set[T](
        self,
        key: str,
        factory: CacheFactory[T],
        response_type: type[T] | Any,
        ttl: int | None = None,
    ) -> T:
        """
        Return the cached value for ``key`` or compute, store and return it.

        ``factory`` runs at most once per call and its exceptions propagate
        unchanged; only cache failures are absorbed. With single-flight on,
        concurrent callers for the same key wait for the first one to fill it.
        """
        lookup = await self.get(key, response_type)
        if lookup.hit:
            return lookup.value  # type: ignore[return-value]

        if not self.cache_config.single_flight:
            value = await factory()
            await self.set(key, value, ttl)
            return value

        async with self._get_or_create_lock(self._build_key(key)):
            lookup = await self.get(key, response_type)
            if lookup.hit:
                return lookup.value  # type: ignore[return-value]
            value = await factory()
            await self.set(key, value, ttl)
            return value

    async def _fallback_to_memory(self) -> None:
        """Switch to the in-memory client after Redis failed at runtime."""
        if not self.is_redis_available:
            return
        logger.warning("Redis connection lost. Falling back to in-memory cache.")
        self._client = self.memory_client
        self.is_redis_available = False
        self.statistics.record_fallback()
        if not self.memory_client.is_connected:
            await self.memory_client.start_lifecycle()

    async def disable_redis(self) -> CacheActionResponse:
        if not self.is_redis_available:
            return CacheActionResponse(
                status="unchanged",
                message="Redis is already disabled. Using in-memory cache.",
                backend="in-memory",
            )

        await self.redis_client.disconnect()
        self._client = self.memory_client
        self.is_redis_available = False
        if not self.memory_client.is_connected:
            await self.memory_client.start_lifecycle()

        logger.info("Redis disabled. Switched to in-memory cache.")
        return CacheActionResponse(
            status="success",
            message="Redis disabled successfully. Using in-memory cache.",
            backend="in-memory",
        )

    async def enable_redis(self) -> CacheActionResponse:
        if self.is_redis_available:
            return CacheActionResponse(
                status="unchanged",
                message="Redis is already enabled.",
                backend="redis",
            )

        try:
            await self.redis_client.connect()
        except TRANSPORT_ERRORS as e:
            logger.warning(f"Failed to enable Redis: {e}")
            return CacheActionResponse(
                status="error",
                message=f"Failed to connect to Redis: {e}",
                backend="in-memory",
                error_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            )

        self._client = self.redis_client
        self.is_redis_available = True
        logger.info("Redis enabled. Switched from in-memory cache.")
        return CacheActionResponse(
            status="success",
            message="Redis enabled successfully.",
            backend="redis",
        )

    async def clear(self) -> int:
        """Delete every key under the configured prefix; returns how many went."""
        pattern = self._build_key("*")
        deleted = await self._guard(
            "clear",
            pattern,
            lambda c: c.delete_pattern(pattern, self.cache_config.scan_batch_size),
            0,
            limit=self.cache_config.invalidation_timeout,
        )
        logger.info("Cleared %d cache keys.", deleted)
        return deleted

    async def ping(self) -> bool:
        return bool(await self._guard("ping", self.backend, lambda c: c.ping(), False))

    async def health_check(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "backend": self.backend,
            "statistics": self.get_statistics(),
        }
        healthy = await self.ping()
        result["status"] = "healthy" if healthy else "unhealthy"
        if healthy:
            result["info"] = await self._guard("info", self.backend, lambda c: c.info(), {})
        return result

    def get_statistics(self) -> dict[str, int | float | str]:
        return self.statistics.to_dict()

    def reset_statistics(self) -> None:
        self.statistics.reset()
        logger.info("Cache statistics reset.")
