"""Type definitions for the caching layer."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

type CacheKey = str
type CacheFactory[T] = Callable[[], Awaitable[T]]


@dataclass(frozen=True, slots=True)
class CacheLookup[T]:
    """
    Outcome of a cache read.

    ``hit`` is authoritative: a cached empty list is still a hit, so callers
    never confuse "cached empty" with "absent".
    """

    hit: bool
    value: T | None = None

    @classmethod
    def found(cls, value: T) -> "CacheLookup[T]":
        return cls(hit=True, value=value)

    @classmethod
    def missing(cls) -> "CacheLookup[Any]":
        return cls(hit=False)
