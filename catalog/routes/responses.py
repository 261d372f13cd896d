"""Mapping from result envelopes to HTTP responses."""

from fastapi.responses import ORJSONResponse
from starlette.status import (
    HTTP_200_OK,
    HTTP_400_BAD_REQUEST,
    HTTP_404_NOT_FOUND,
    HTTP_500_INTERNAL_SERVER_ERROR,
)

from catalog.handlers.base import VALIDATION_FAILED
from catalog.schemas.result import Result


def failure_status(result: Result, *, write: bool) -> int:
    """404 for missing entities; 400 for rejected input or writes; 500 for failed reads."""
    if result.is_not_found:
        return HTTP_404_NOT_FOUND
    if write or result.error_message == VALIDATION_FAILED:
        return HTTP_400_BAD_REQUEST
    return HTTP_500_INTERNAL_SERVER_ERROR


def result_response(
    result: Result,
    *,
    write: bool = False,
    success_status: int = HTTP_200_OK,
    headers: dict[str, str] | None = None,
) -> ORJSONResponse:
    status_code = success_status if result.is_success else failure_status(result, write=write)
    return ORJSONResponse(
        content=result.model_dump(mode="json", by_alias=True),
        status_code=status_code,
        headers=headers if result.is_success else None,
    )
