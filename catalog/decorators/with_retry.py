"""Exponential-backoff retries for transient cache transport failures."""

from collections.abc import Awaitable, Callable
from functools import wraps
from logging import getLogger
from typing import ParamSpec, TypeVar

from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import TimeoutError as RedisTimeoutError
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from catalog.configs import file_logger

logger = file_logger(getLogger(__name__))

P = ParamSpec("P")
T = TypeVar("T")

RETRIABLE_EXCEPTIONS = (RedisConnectionError, RedisTimeoutError, ConnectionError, TimeoutError)


def _retry_logger(name: str, attempts: int) -> Callable[[RetryCallState], None]:
    def report(state: RetryCallState) -> None:
        error = state.outcome.exception() if state.outcome else None
        delay = state.next_action.sleep if state.next_action else 0.0
        logger.warning(
            "%s failed (attempt %d/%d), next try in %.2fs: %s",
            name,
            state.attempt_number,
            attempts,
            delay,
            error,
        )

    return report


def with_retry(
    max_retries: int = 3,
    base_delay: float = 0.1,
    max_delay: float = 2.0,
    retry_on: tuple[type[Exception], ...] = RETRIABLE_EXCEPTIONS,
) -> Callable[[Callable[P, Awaitable[T]]], Callable[P, Awaitable[T]]]:
    """
    Retry an async callable with exponential backoff.

    Only ``retry_on`` exceptions are retried; the last one is re-raised once
    ``max_retries`` attempts (the first call included) are used up.
    """

    def decorator(func: Callable[P, Awaitable[T]]) -> Callable[P, Awaitable[T]]:
        report = _retry_logger(func.__qualname__, max_retries)

        @wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
            retrying = AsyncRetrying(
                stop=stop_after_attempt(max_retries),
                wait=wait_exponential(multiplier=base_delay, min=base_delay, max=max_delay),
                retry=retry_if_exception_type(retry_on),
                before_sleep=report,
                reraise=True,
            )
            async for attempt in retrying:
                with attempt:
                    return await func(*args, **kwargs)
            raise AssertionError("unreachable: tenacity re-raises the last error")

        return wrapper

    return decorator
