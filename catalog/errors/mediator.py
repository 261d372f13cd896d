from logging import getLogger

from starlette.status import HTTP_500_INTERNAL_SERVER_ERROR

from catalog.configs import file_logger
from catalog.errors.base import BaseAppError, create_exception_handler

logger = file_logger(getLogger(__name__))


class HandlerNotFoundError(BaseAppError):
    """Raised when a request type has no registered handler."""

    def __init__(self, request_type: type) -> None:
        super().__init__(
            f"No handler registered for {request_type.__name__}",
            HTTP_500_INTERNAL_SERVER_ERROR,
        )
        self.request_type = request_type.__name__


mediator_exception_handler = create_exception_handler(logger)
