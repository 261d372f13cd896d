"""In-process request dispatcher."""

from logging import DEBUG, getLogger
from typing import Any, Protocol, Self

from catalog.configs import file_logger
from catalog.errors.mediator import HandlerNotFoundError
from catalog.schemas.result import Result

logger = file_logger(getLogger(__name__))


class RequestHandler[R](Protocol):
    async def handle(self, request: R) -> Result[Any]: ...


class Mediator:
    """
    Routes each request object to the handler registered for its exact type.

    Built per HTTP request so handlers can hold session-scoped repositories.
    """

    def __init__(self) -> None:
        self._handlers: dict[type, RequestHandler[Any]] = {}

    def register[R](self, request_type: type[R], handler: RequestHandler[R]) -> Self:
        self._handlers[request_type] = handler
        return self

    def handler_for(self, request_type: type) -> RequestHandler[Any]:
        try:
            return self._handlers[request_type]
        except KeyError:
            raise HandlerNotFoundError(request_type) from None

    async def send(self, request: object) -> Result[Any]:
        """
        Dispatch ``request`` to its handler.

        Raises:
            HandlerNotFoundError: If nothing is registered for the request type.
        """
        handler = self.handler_for(type(request))
        if logger.isEnabledFor(DEBUG):
            logger.debug("Dispatching %s to %s", type(request).__name__, type(handler).__name__)
        return await handler.handle(request)
