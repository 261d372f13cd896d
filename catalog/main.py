"""Catalog Management API: products and categories behind a read-through cache."""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import ORJSONResponse
from slowapi.errors import RateLimitExceeded

from catalog.configs import API_PREFIX, settings
from catalog.dependencies import CacheDep
from catalog.errors import (
    CacheExceptionError,
    DatabaseError,
    HandlerNotFoundError,
    cache_exception_handler,
    database_exception_handler,
    mediator_exception_handler,
    validation_exception_handler,
)
from catalog.managers.metrics import get_system_metrics, metrics_manager
from catalog.managers.rate_limiter import limiter, rate_limit_exceeded_handler
from catalog.middleware import (
    LoggingMiddleware,
    SecurityHeadersMiddleware,
    configure_cors,
    lifespan,
)
from catalog.routes import cache_router, categories_router, products_router
from catalog.schemas.cache import CacheHealthResponse
from catalog.utils.helpers import today_str

app = FastAPI(
    title=settings.APP_NAME,
    description=(
        "Manage catalog products and categories. Reads are served from Redis "
        "(or an in-process cache when Redis is down); writes invalidate the "
        "affected cache namespace."
    ),
    version="1.0.0",
    lifespan=lifespan,
    default_response_class=ORJSONResponse,
    swagger_ui_parameters={"docExpansion": "none", "operationsSorter": "method"},
)

configure_cors(app)
app.add_middleware(LoggingMiddleware)
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(GZipMiddleware, minimum_size=1000)

for router in (products_router, categories_router, cache_router):
    app.include_router(router)

_ = [
    app.add_exception_handler(exc_type, handler)
    for exc_type, handler in (
        (CacheExceptionError, cache_exception_handler),
        (DatabaseError, database_exception_handler),
        (HandlerNotFoundError, mediator_exception_handler),
        (RateLimitExceeded, rate_limit_exceeded_handler),
        (RequestValidationError, validation_exception_handler),
    )
]

app.state.limiter = limiter


@app.get("/health", tags=["🩺 Health"], summary="Health check endpoint", operation_id="health_check")
@limiter.exempt
async def health_check(request: Request, manager: CacheDep) -> ORJSONResponse:
    """
    Report service and cache health.

    ``status`` is ``ok`` while the cache backend answers and ``degraded``
    otherwise; a degraded service still answers every request from the
    database.
    """
    cache = CacheHealthResponse.model_validate(await manager.health_check())
    return ORJSONResponse(
        {
            "version": app.version,
            "status": "ok" if cache.status == "healthy" else "degraded",
            "timestamp": today_str(),
            "cache": cache.model_dump(),
        },
    )


@app.get("/metrics", tags=["📈 Metrics"], summary="Get metrics", operation_id="get_metrics")
@limiter.limit("5/minute")
async def get_metrics(request: Request, manager: CacheDep) -> ORJSONResponse:
    return ORJSONResponse(
        {
            "timestamp": today_str(),
            "cache_backend": manager.backend,
            "api_metrics": metrics_manager.get_metrics(),
            "cache_metrics": manager.get_statistics(),
            "system_metrics": await get_system_metrics(),
        },
    )


@app.get("/", tags=["🏠 Root"], summary="Root access", operation_id="root_access")
@limiter.limit("5/minute")
async def root(request: Request) -> ORJSONResponse:
    return ORJSONResponse(
        {
            "message": f"Welcome to {settings.APP_NAME}",
            "docs": app.docs_url,
            "resources": {
                "products": f"{API_PREFIX}/products",
                "categories": f"{API_PREFIX}/categories",
            },
        },
    )
