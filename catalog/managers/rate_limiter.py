"""Rate limiting with slowapi."""

from logging import getLogger
from typing import cast

from fastapi import Request
from fastapi.responses import ORJSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
from starlette.status import HTTP_429_TOO_MANY_REQUESTS

from catalog.configs import LimiterConfig, file_logger
from catalog.utils.helpers import host

logger = file_logger(getLogger(__name__))


def get_identifier(request: Request) -> str:
    """Rate-limit bucket: the API key header when present, else the client address."""
    api_key = request.headers.get("X-API-Key")
    if api_key:
        return f"apikey:{api_key}"
    return f"ip:{get_remote_address(request)}"


limiter = Limiter(**LimiterConfig().model_dump(), key_func=get_identifier)


async def rate_limit_exceeded_handler(request: Request, exc: Exception) -> ORJSONResponse:
    http_exc = cast(RateLimitExceeded, exc)
    logger.warning(f"Rate limit exceeded for ip: {host(request)} at {request.url.path}")
    return ORJSONResponse(
        status_code=HTTP_429_TOO_MANY_REQUESTS,
        content={
            "isSuccess": False,
            "data": None,
            "errorMessage": "Rate limit exceeded",
            "errors": [str(http_exc.detail)],
        },
    )
