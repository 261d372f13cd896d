"""Small request helpers shared by logging, error handlers and routes."""

from datetime import datetime

from fastapi import Request
from fastapi.routing import APIRoute
from starlette.routing import Match


def host(request: Request) -> str:
    """Client IP address, or ``unknown`` behind transports that hide it."""
    return request.client.host if request.client else "unknown"


def today_str() -> str:
    """Current local time as ``YYYY-MM-DD HH:MM:SS``."""
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def route_label(request: Request) -> str:
    """
    Name a request for the logs.

    Uses the OpenAPI summary of the matching API route (e.g. "Get a product
    by ID") and falls back to ``METHOD path`` for anything else.
    """
    for route in request.app.routes:
        if isinstance(route, APIRoute) and route.summary:
            match, _ = route.matches(request.scope)
            if match == Match.FULL:
                return route.summary
    return f"{request.method} {request.url.path}"
