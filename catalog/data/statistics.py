"""Cache statistics tracker."""

from dataclasses import dataclass, field, fields
from threading import Lock

from catalog.utils.helpers import today_str

COUNTERS = (
    "hits",
    "misses",
    "sets",
    "deletes",
    "invalidations",
    "errors",
    "timeouts",
    "fallbacks",
)


@dataclass
class CacheStatistics:
    """Counters updated by the cache manager; safe to share across tasks."""

    hits: int = 0
    misses: int = 0
    sets: int = 0
    deletes: int = 0
    invalidations: int = 0
    errors: int = 0
    timeouts: int = 0
    fallbacks: int = 0
    created_at: str = field(default_factory=today_str)
    last_updated_at: str = field(default_factory=today_str)
    _lock: Lock = field(default_factory=Lock, init=False, repr=False, compare=False)

    def _bump(self, counter: str, amount: int = 1) -> None:
        with self._lock:
            setattr(self, counter, getattr(self, counter) + amount)
            self.last_updated_at = today_str()

    def record_hit(self) -> None:
        self._bump("hits")

    def record_miss(self) -> None:
        self._bump("misses")

    def record_set(self) -> None:
        self._bump("sets")

    def record_delete(self, count: int = 1) -> None:
        self._bump("deletes", count)

    def record_invalidation(self) -> None:
        self._bump("invalidations")

    def record_error(self) -> None:
        self._bump("errors")

    def record_timeout(self) -> None:
        """A timeout is also an error."""
        with self._lock:
            self.timeouts += 1
            self.errors += 1
            self.last_updated_at = today_str()

    def record_fallback(self) -> None:
        self._bump("fallbacks")

    @property
    def total_requests(self) -> int:
        return self.hits + self.misses

    @property
    def hit_rate(self) -> float:
        """Hit rate as a percentage (0-100)."""
        total = self.total_requests
        return self.hits / total * 100 if total else 0.0

    def reset(self) -> None:
        with self._lock:
            for name in COUNTERS:
                setattr(self, name, 0)
            self.created_at = self.last_updated_at = today_str()

    def to_dict(self) -> dict[str, int | float | str]:
        with self._lock:
            data: dict[str, int | float | str] = {
                f.name: getattr(self, f.name) for f in fields(self) if not f.name.startswith("_")
            }
        data["hit_rate"] = f"{self.hit_rate:.2f}%"
        data["total_requests"] = self.total_requests
        return data
