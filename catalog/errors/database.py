"""Storage failures raised by repositories and the session scope."""

from logging import getLogger

from starlette.status import (
    HTTP_404_NOT_FOUND,
    HTTP_409_CONFLICT,
    HTTP_500_INTERNAL_SERVER_ERROR,
)

from catalog.configs import file_logger
from catalog.errors.base import BaseAppError, create_exception_handler

logger = file_logger(getLogger(__name__))


class DatabaseError(BaseAppError):
    default_detail = "Database Error"
    default_status = HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, detail: str | None = None) -> None:
        super().__init__(detail or self.default_detail, self.default_status)


class DatabaseConnectionError(DatabaseError):
    """The database is unreachable or rejected a statement."""

    default_detail = "Failed to connect to the database"


class DuplicateEntryError(DatabaseError):
    """A unique index rejected the row, e.g. a second category with the same name."""

    default_detail = "A record with this value already exists"
    default_status = HTTP_409_CONFLICT


class RecordNotFoundError(DatabaseError):
    default_detail = "Record not found"
    default_status = HTTP_404_NOT_FOUND


class TransactionError(DatabaseError):
    """Commit of the request-scoped transaction failed."""

    default_detail = "Transaction failed"


database_exception_handler = create_exception_handler(logger)
