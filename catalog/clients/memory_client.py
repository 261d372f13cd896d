"""In-process cache transport used when Redis is disabled or unreachable."""

from asyncio import CancelledError, Lock, Task, create_task
from asyncio import sleep as asyncio_sleep
from collections import OrderedDict
from collections.abc import AsyncGenerator
from contextlib import suppress
from fnmatch import fnmatchcase
from logging import DEBUG, getLogger
from time import monotonic
from typing import NamedTuple

from catalog.configs import file_logger

logger = file_logger(getLogger(__name__))


class _Entry(NamedTuple):
    value: str
    expires_at: float | None

    def expired(self, now: float) -> bool:
        return self.expires_at is not None and now >= self.expires_at


class MemoryClient:
    """
    Async LRU store with per-key expiry and glob pattern deletion.

    Mirrors the subset of ``RedisClient`` the cache manager uses, so either
    transport can serve the same keys. Expired entries are dropped lazily on
    access and periodically by a background sweep.
    """

    DEFAULT_MAX_ENTRIES: int = 50_000
    DEFAULT_SWEEP_INTERVAL: float = 60.0

    def __init__(
        self,
        max_entries: int = DEFAULT_MAX_ENTRIES,
        sweep_interval: float = DEFAULT_SWEEP_INTERVAL,
    ) -> None:
        self._entries: OrderedDict[str, _Entry] = OrderedDict()
        self._max_entries = max_entries
        self._sweep_interval = sweep_interval
        self._sweeper: Task[None] | None = None
        self._lock = Lock()
        self.is_connected: bool = True
        self.evictions: int = 0

    def __len__(self) -> int:
        return len(self._entries)

    async def start_lifecycle(self) -> None:
        """Start the background expiry sweep."""
        async with self._lock:
            self.is_connected = True
            if self._sweeper is None:
                self._sweeper = create_task(self._sweep_loop())
                logger.info("Memory cache expiry sweep started.")

    async def close(self) -> None:
        """Stop the sweep task and mark the client as disconnected."""
        async with self._lock:
            self.is_connected = False
            sweeper, self._sweeper = self._sweeper, None
        if sweeper is not None:
            sweeper.cancel()
            with suppress(CancelledError):
                await sweeper

    async def _sweep_loop(self) -> None:
        while self.is_connected:
            await asyncio_sleep(self._sweep_interval)
            try:
                removed = await self.sweep()
            except RuntimeError:
                logger.exception("Memory cache sweep failed")
                continue
            if removed and logger.isEnabledFor(DEBUG):
                logger.debug("Memory cache sweep removed %d expired keys.", removed)

    async def sweep(self) -> int:
        """Drop every expired entry and return how many were removed."""
        now = monotonic()
        async with self._lock:
            stale = [k for k, entry in self._entries.items() if entry.expired(now)]
            for key in stale:
                del self._entries[key]
        return len(stale)

    def _live(self, key: str) -> _Entry | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if entry.expired(monotonic()):
            del self._entries[key]
            return None
        return entry

    async def get(self, key: str) -> str | None:
        async with self._lock:
            entry = self._live(key)
            if entry is None:
                return None
            self._entries.move_to_end(key)
            return entry.value

    async def set(self, key: str, value: str, ex: int | None = None) -> bool:
        """
        Store ``value`` for ``ex`` seconds, or without expiry when ``ex`` is None.

        A non-positive ``ex`` expires the key on arrival, like Redis ``SET``
        with an ``EXAT`` in the past: the old value is removed, nothing is kept.
        """
        async with self._lock:
            if ex is not None and ex <= 0:
                self._entries.pop(key, None)
                return True
            expires_at = None if ex is None else monotonic() + ex
            self._entries[key] = _Entry(value, expires_at)
            self._entries.move_to_end(key)
            while len(self._entries) > self._max_entries:
                self._entries.popitem(last=False)
                self.evictions += 1
        return True

    async def delete(self, *keys: str) -> int:
        async with self._lock:
            return sum(1 for key in keys if self._entries.pop(key, None) is not None)

    async def delete_pattern(self, pattern: str, batch_size: int = 1000) -> int:  # noqa: ARG002
        """Remove every key matching ``pattern`` in a single locked pass."""
        async with self._lock:
            matched = [k for k in self._entries if fnmatchcase(k, pattern)]
            for key in matched:
                del self._entries[key]
        return len(matched)

    async def exists(self, *keys: str) -> int:
        async with self._lock:
            return sum(1 for key in keys if self._live(key) is not None)

    async def ttl(self, key: str) -> int:
        """Remaining lifetime in seconds; -2 when missing, -1 when it never expires."""
        async with self._lock:
            entry = self._live(key)
            if entry is None:
                return -2
            if entry.expires_at is None:
                return -1
            return max(0, int(entry.expires_at - monotonic()))

    async def scan_iter(self, pattern: str, count: int = 100) -> AsyncGenerator[str]:  # noqa: ARG002
        async with self._lock:
            snapshot = list(self._entries)
        for key in snapshot:
            if fnmatchcase(key, pattern):
                yield key

    async def flush_all(self) -> bool:
        async with self._lock:
            self._entries.clear()
        return True

    async def ping(self) -> bool:
        return self.is_connected

    async def info(self) -> dict[str, str | int]:
        async with self._lock:
            return {
                "server": "In-Memory Cache",
                "total_keys": len(self._entries),
                "max_entries": self._max_entries,
                "evictions": self.evictions,
            }
