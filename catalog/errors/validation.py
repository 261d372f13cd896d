"""Request validation error handling for FastAPI."""

from logging import getLogger
from typing import Any, cast

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import ORJSONResponse
from starlette.status import HTTP_422_UNPROCESSABLE_CONTENT

from catalog.configs import file_logger
from catalog.utils.helpers import host

logger = file_logger(getLogger(__name__))


def _format_error(error: dict[str, Any]) -> str:
    # Skip the location kind ("body", "query", "path")
    field = ".".join(str(loc) for loc in error.get("loc", ())[1:])
    message = error.get("msg", "Invalid value")
    return f"{field}: {message}" if field else message


async def validation_exception_handler(request: Request, exc: Exception) -> ORJSONResponse:
    """
    Render request validation errors as a failed result envelope.

    Args:
        request: The incoming request.
        exc: The ``RequestValidationError`` raised by FastAPI.

    Returns:
        422 response shaped like ``Result``.
    """
    errors = [_format_error(e) for e in cast(RequestValidationError, exc).errors()]

    logger.warning(
        f"Validation error for ip: {host(request)} at endpoint {request.url.path}: {errors}",
    )

    return ORJSONResponse(
        status_code=HTTP_422_UNPROCESSABLE_CONTENT,
        content={
            "isSuccess": False,
            "data": None,
            "errorMessage": "Validation failed",
            "errors": errors,
        },
    )
