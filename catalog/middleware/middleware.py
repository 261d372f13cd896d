"""
Application lifespan and HTTP middleware.

Console logging goes through rich; the JSON file handler is attached by
``file_logger`` when ``LOG_TO_FILE`` is on.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from logging import INFO, basicConfig, getLogger
from time import perf_counter

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from pythonjsonlogger.json import JsonFormatter
from rich.logging import RichHandler
from rich.traceback import install
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from catalog.configs import file_logger, settings
from catalog.db import close_db, init_db, seed_categories, transaction
from catalog.managers.cache_manager import CacheManager
from catalog.utils.helpers import host, route_label

basicConfig(
    level=INFO,
    format="%(message)s",
    datefmt="%X",
    handlers=[RichHandler(rich_tracebacks=True)],
)
logger = file_logger(getLogger("catalog"))
for handler in logger.handlers:
    handler.setFormatter(JsonFormatter())

install()

DEV_ORIGINS = ("http://localhost:3000", "http://127.0.0.1:3000")

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "strict-origin-when-cross-origin",
}


async def _prepare_database() -> None:
    await init_db()
    if not settings.SEED_DATA:
        return
    async with transaction() as session:
        await seed_categories(session)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """
    Prepare storage and the cache before serving; release both on exit.

    The cache manager lives on ``app.state.cache_manager`` for the whole
    process. A failing database aborts startup, an unreachable Redis does
    not (the manager falls back to memory).
    """
    logger.info(f"Starting {app.title} ({settings.ENVIRONMENT})")

    try:
        await _prepare_database()
    except Exception:
        logger.exception("Database is not available, aborting startup")
        raise

    cache_manager = CacheManager()
    await cache_manager.initialize()
    app.state.cache_manager = cache_manager
    logger.info(f"Ready, cache backend: {cache_manager.backend}")

    try:
        yield
    finally:
        logger.info(f"Shutting down {app.title}")
        await cache_manager.shutdown()
        await close_db()


def configure_cors(app: FastAPI) -> None:
    origins = [*DEV_ORIGINS]
    if settings.PRODUCTION_FRONTEND_URL:
        origins.append(settings.PRODUCTION_FRONTEND_URL)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )


class LoggingMiddleware(BaseHTTPMiddleware):
    """Logs each request and its outcome; exposes the duration as ``X-Response-Time-Ms``."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        started = perf_counter()
        label = route_label(request)
        logger.info(f"-> {label} from {host(request)}")

        response = await call_next(request)

        elapsed_ms = (perf_counter() - started) * 1000
        response.headers["X-Response-Time-Ms"] = f"{elapsed_ms:.1f}"
        log = logger.warning if response.status_code >= 500 else logger.info
        log(f"<- {label}: {response.status_code} in {elapsed_ms:.1f}ms")
        return response


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        response = await call_next(request)
        response.headers.update(SECURITY_HEADERS)
        return response
