from collections.abc import Awaitable, Callable
from logging import Logger

from fastapi import Request
from fastapi.responses import ORJSONResponse
from starlette.status import HTTP_500_INTERNAL_SERVER_ERROR

from catalog.utils.helpers import host

# Transport-level failures the cache layer degrades on instead of propagating
BASE_EXCEPTION = (
    OSError,
    MemoryError,
    RuntimeError,
    ConnectionError,
    TimeoutError,
)

ExceptionHandler = Callable[[Request, Exception], Awaitable[ORJSONResponse]]


class BaseAppError(Exception):
    """An error that knows the HTTP status it should be rendered with."""

    def __init__(
        self,
        detail: str = "Internal Server Error",
        status_code: int = HTTP_500_INTERNAL_SERVER_ERROR,
    ) -> None:
        super().__init__(detail)
        self.detail = detail
        self.status_code = status_code

    def __str__(self) -> str:
        return self.detail

    def public_fields(self) -> dict[str, object]:
        """Instance attributes other than status and detail, e.g. ``request_type``."""
        return {
            name: value
            for name, value in vars(self).items()
            if name not in ("status_code", "detail") and not name.startswith("_")
        }


def create_exception_handler(logger: Logger) -> ExceptionHandler:
    """
    Build an exception handler that renders ``BaseAppError`` subclasses.

    The body is ``{"detail": ...}`` plus the error's public fields.

    Args:
        logger: Logger of the module that owns the error family.

    Returns:
        Handler suitable for ``app.add_exception_handler``.
    """

    async def handler(request: Request, exc: Exception) -> ORJSONResponse:
        if isinstance(exc, BaseAppError):
            status_code, content = exc.status_code, {"detail": exc.detail, **exc.public_fields()}
        else:
            status_code, content = HTTP_500_INTERNAL_SERVER_ERROR, {"detail": str(exc)}

        logger.warning(
            f"{request.method} {request.url.path} from {host(request)} failed "
            f"with {status_code}: {content['detail']}",
        )
        return ORJSONResponse(content=content, status_code=status_code)

    return handler
