"""
Request metrics and host statistics for the ``/metrics`` endpoint.

Per-endpoint counters and latency samples are kept in memory; host figures
come from psutil and are collected off the event loop.
"""

from asyncio import to_thread
from collections import defaultdict, deque
from dataclasses import dataclass, field
from logging import getLogger
from threading import Lock
from time import perf_counter
from types import TracebackType
from typing import Any, Self

from psutil import cpu_percent, disk_usage, virtual_memory

from catalog.configs import file_logger

logger = file_logger(getLogger(__name__))

_BYTES_PER_MB = 1024 * 1024
_LATENCY_SAMPLES = 500
_CPU_SAMPLE_INTERVAL = 0.1


@dataclass(slots=True)
class EndpointStats:
    requests: int = 0
    errors: int = 0
    latencies: deque[float] = field(default_factory=lambda: deque(maxlen=_LATENCY_SAMPLES))

    def observe(self, duration: float, *, failed: bool) -> None:
        self.requests += 1
        self.errors += int(failed)
        self.latencies.append(duration)

    def summary(self) -> dict[str, Any]:
        samples = sorted(self.latencies)
        if not samples:
            return {"requests": self.requests, "errors": self.errors}
        return {
            "requests": self.requests,
            "errors": self.errors,
            "avg_ms": round(sum(samples) / len(samples) * 1000, 2),
            "p95_ms": round(samples[min(len(samples) - 1, int(len(samples) * 0.95))] * 1000, 2),
            "max_ms": round(samples[-1] * 1000, 2),
        }


class MetricsManager:
    """Thread-safe per-endpoint request statistics."""

    __slots__ = ("_endpoints", "_lock")

    def __init__(self) -> None:
        self._lock = Lock()
        self._endpoints: dict[str, EndpointStats] = defaultdict(EndpointStats)

    def observe(self, endpoint: str, duration: float, *, failed: bool = False) -> None:
        with self._lock:
            self._endpoints[endpoint].observe(duration, failed=failed)

    def get_metrics(self) -> dict[str, Any]:
        with self._lock:
            return {name: stats.summary() for name, stats in self._endpoints.items()}

    def reset_metrics(self) -> None:
        with self._lock:
            self._endpoints.clear()
        logger.info("Metrics reset")


metrics_manager = MetricsManager()


class RequestTimer:
    """
    Async context manager recording one call's duration against an endpoint.

    The call counts as failed when it raises or when ``failed`` is set inside
    the block.
    """

    __slots__ = ("_endpoint", "_metrics", "_start", "failed")

    def __init__(self, endpoint: str, metrics: MetricsManager | None = None) -> None:
        self._endpoint = endpoint
        self._metrics = metrics or metrics_manager
        self._start = 0.0
        self.failed = False

    async def __aenter__(self) -> Self:
        self._start = perf_counter()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self._metrics.observe(
            self._endpoint,
            perf_counter() - self._start,
            failed=self.failed or exc_type is not None,
        )


def _collect_system_metrics() -> dict[str, Any]:
    memory = virtual_memory()
    return {
        "cpu_percent": cpu_percent(interval=_CPU_SAMPLE_INTERVAL),
        "memory": {
            "percent": memory.percent,
            "used_mb": round(memory.used / _BYTES_PER_MB, 2),
            "total_mb": round(memory.total / _BYTES_PER_MB, 2),
        },
        "disk_percent": disk_usage("/").percent,
    }


async def get_system_metrics() -> dict[str, Any]:
    """Host CPU, memory and disk usage; an ``error`` entry if psutil fails."""
    try:
        return await to_thread(_collect_system_metrics)
    except OSError as e:
        logger.exception("Failed to get system metrics")
        return {"error": f"Failed to collect system metrics: {e}"}
