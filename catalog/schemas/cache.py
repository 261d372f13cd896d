"""Response bodies of the cache administration and health endpoints."""

from typing import Any, Literal

from pydantic import BaseModel

Backend = Literal["redis", "in-memory"]


class CacheStatistics(BaseModel):
    """Counters since start-up or the last reset."""

    hits: int
    misses: int
    sets: int
    deletes: int
    invalidations: int
    errors: int
    timeouts: int
    fallbacks: int
    hit_rate: str
    total_requests: int
    created_at: str
    last_updated_at: str


class CacheHealthResponse(BaseModel):
    backend: Backend
    status: Literal["healthy", "unhealthy"]
    statistics: CacheStatistics
    info: dict[str, Any] | None = None


class CacheStatsResponse(BaseModel):
    status: Literal["success"] = "success"
    backend: Backend
    data: CacheStatistics


class CacheActionResponse(BaseModel):
    """
    Outcome of an administrative cache action.

    ``unchanged`` means the cache was already in the requested state;
    ``error_code`` mirrors the HTTP status of an ``error``.
    """

    status: Literal["success", "unchanged", "error"]
    message: str
    backend: Backend | None = None
    deleted: int | None = None
    error_code: int | None = None
