"""Cache administration endpoints."""

from fastapi import APIRouter, Request
from fastapi.responses import ORJSONResponse
from starlette.status import HTTP_200_OK, HTTP_503_SERVICE_UNAVAILABLE

from catalog.decorators import timed
from catalog.dependencies import CacheDep
from catalog.managers.rate_limiter import limiter
from catalog.schemas.cache import CacheActionResponse, CacheStatsResponse

router = APIRouter(prefix="/cache", tags=["🗄️ Cache"])


def action_response(result: CacheActionResponse) -> ORJSONResponse:
    return ORJSONResponse(
        content=result.model_dump(exclude_none=True),
        status_code=result.error_code or HTTP_200_OK,
    )


@router.get(
    "/stats",
    response_model=CacheStatsResponse,
    summary="Get cache statistics",
    response_class=ORJSONResponse,
)
@timed()
@limiter.limit("10/minute")
async def get_cache_stats(request: Request, manager: CacheDep) -> ORJSONResponse:
    """Hit/miss counters, invalidations, errors and fallbacks of the active backend."""
    response = CacheStatsResponse(backend=manager.backend, data=manager.get_statistics())
    return ORJSONResponse(content=response.model_dump())


@router.get(
    "/ping",
    response_model=CacheActionResponse,
    summary="Ping cache backend",
    response_class=ORJSONResponse,
)
@timed()
@limiter.limit("20/minute")
async def ping_cache(request: Request, manager: CacheDep) -> ORJSONResponse:
    if await manager.ping():
        return action_response(
            CacheActionResponse(
                status="success",
                message=f"Cache backend ({manager.backend}) is reachable",
                backend=manager.backend,
            ),
        )
    return action_response(
        CacheActionResponse(
            status="error",
            message="Cache backend is not reachable",
            backend=manager.backend,
            error_code=HTTP_503_SERVICE_UNAVAILABLE,
        ),
    )


@router.post(
    "/reset-stats",
    response_model=CacheActionResponse,
    summary="Reset cache statistics",
    response_class=ORJSONResponse,
)
@timed()
@limiter.limit("5/hour")
async def reset_stats(request: Request, manager: CacheDep) -> ORJSONResponse:
    manager.reset_statistics()
    return action_response(CacheActionResponse(status="success", message="Cache statistics reset"))


@router.delete(
    "/clear",
    response_model=CacheActionResponse,
    summary="Clear all cache entries",
    response_class=ORJSONResponse,
)
@timed()
@limiter.limit("2/hour")
async def clear_cache(request: Request, manager: CacheDep) -> ORJSONResponse:
    """
    Drop every catalog entry under the configured key prefix.

    Reads repopulate the cache from the database afterwards.
    """
    deleted = await manager.clear()
    return action_response(
        CacheActionResponse(
            status="success",
            message=f"Removed {deleted} cache entries",
            backend=manager.backend,
            deleted=deleted,
        ),
    )


@router.post(
    "/redis/disable",
    response_model=CacheActionResponse,
    summary="Disable Redis and switch to in-memory cache",
    response_class=ORJSONResponse,
)
@timed()
@limiter.limit("1/hour")
async def disable_redis(request: Request, manager: CacheDep) -> ORJSONResponse:
    return action_response(await manager.disable_redis())


@router.post(
    "/redis/enable",
    response_model=CacheActionResponse,
    summary="Enable Redis and switch from in-memory cache",
    response_class=ORJSONResponse,
)
@timed()
@limiter.limit("1/hour")
async def enable_redis(request: Request, manager: CacheDep) -> ORJSONResponse:
    """Reconnect to Redis; 503 when it is still unreachable."""
    return action_response(await manager.enable_redis())
