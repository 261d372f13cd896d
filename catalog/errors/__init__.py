from catalog.errors.base import BASE_EXCEPTION, BaseAppError, create_exception_handler
from catalog.errors.cache import (
    CacheCompressionError,
    CacheDecompressionError,
    CacheDeserializationError,
    CacheExceptionError,
    CacheKeyError,
    CacheSerializationError,
    cache_exception_handler,
)
from catalog.errors.database import (
    DatabaseConnectionError,
    DatabaseError,
    DuplicateEntryError,
    RecordNotFoundError,
    TransactionError,
    database_exception_handler,
)
from catalog.errors.mediator import HandlerNotFoundError, mediator_exception_handler
from catalog.errors.validation import validation_exception_handler

__all__ = [
    "BASE_EXCEPTION",
    "BaseAppError",
    "CacheCompressionError",
    "CacheDecompressionError",
    "CacheDeserializationError",
    "CacheExceptionError",
    "CacheKeyError",
    "CacheSerializationError",
    "DatabaseConnectionError",
    "DatabaseError",
    "DuplicateEntryError",
    "HandlerNotFoundError",
    "RecordNotFoundError",
    "TransactionError",
    "cache_exception_handler",
    "create_exception_handler",
    "database_exception_handler",
    "mediator_exception_handler",
    "validation_exception_handler",
]
