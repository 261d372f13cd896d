"""Per-route request metrics for the API handlers."""

from collections.abc import Awaitable, Callable
from functools import wraps
from typing import ParamSpec, TypeVar

from fastapi import Request, Response
from starlette.status import HTTP_400_BAD_REQUEST

from catalog.managers.metrics import MetricsManager, RequestTimer
from catalog.utils.helpers import route_label

P = ParamSpec("P")
R = TypeVar("R")


def _find_request(args: tuple[object, ...], kwargs: dict[str, object]) -> Request | None:
    request = kwargs.get("request")
    if isinstance(request, Request):
        return request
    return next((arg for arg in args if isinstance(arg, Request)), None)


def timed(
    endpoint: str | None = None,
    metrics: MetricsManager | None = None,
) -> Callable[[Callable[P, Awaitable[R]]], Callable[P, Awaitable[R]]]:
    """
    Record duration and outcome of a route handler.

    Metrics are keyed like the request log: by the OpenAPI summary of the
    matched route. A call counts as an error when it raises or answers with
    a 4xx/5xx response, which is how a failed ``Result`` envelope is sent.

    Args:
        endpoint: Fixed metric name, for callables that are not routes.
        metrics: Metrics manager (defaults to the global instance).
    """

    def decorator(func: Callable[P, Awaitable[R]]) -> Callable[P, Awaitable[R]]:
        @wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            name = endpoint
            if name is None:
                request = _find_request(args, kwargs)
                name = route_label(request) if request else func.__name__

            async with RequestTimer(name, metrics) as timer:
                response = await func(*args, **kwargs)
                if isinstance(response, Response) and response.status_code >= HTTP_400_BAD_REQUEST:
                    timer.failed = True
                return response

        return wrapper

    return decorator
