"""Protocol shared by the Redis and in-process cache transports."""

from collections.abc import AsyncIterator, Awaitable
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class CacheClientProtocol(Protocol):
    """
    Minimal transport surface the cache manager relies on.

    ``RedisClient`` and ``MemoryClient`` both satisfy it, so the manager can
    swap one for the other at runtime without touching call sites.
    """

    def get(self, key: str) -> Awaitable[str | None]:
        """Return the raw stored text, or None when absent."""
        ...

    def set(self, key: str, value: str, ex: int | None = None) -> Awaitable[bool]:
        """Store ``value`` with an optional TTL in seconds."""
        ...

    def delete(self, *keys: str) -> Awaitable[int]:
        """Remove keys and return how many existed."""
        ...

    def delete_pattern(self, pattern: str, batch_size: int = 1000) -> Awaitable[int]:
        """Remove every key matching a glob ``pattern``."""
        ...

    def exists(self, *keys: str) -> Awaitable[int]:
        """Count how many of ``keys`` are present."""
        ...

    def ttl(self, key: str) -> Awaitable[int]:
        """Remaining lifetime in seconds; -2 when missing, -1 without expiry."""
        ...

    def scan_iter(self, pattern: str, count: int = 100) -> AsyncIterator[str]:
        """Iterate over keys matching a glob ``pattern``."""
        ...

    def ping(self) -> Awaitable[bool]:
        """Check the transport is reachable."""
        ...

    def info(self) -> Awaitable[dict[str, Any]]:
        """Return transport diagnostics."""
        ...

    def flush_all(self) -> Awaitable[bool]:
        """Drop every entry."""
        ...
