"""
Exceptions raised while encoding cache payloads or building keys.

``CacheManager`` absorbs the payload errors and reports a miss instead, so
these only reach a client when raised outside the manager.
"""

from logging import getLogger

from catalog.configs import file_logger
from catalog.errors.base import BaseAppError, create_exception_handler

logger = file_logger(getLogger(__name__))


class CacheExceptionError(BaseAppError):
    default_detail = "Cache exception occurred"

    def __init__(self, detail: str | None = None) -> None:
        super().__init__(detail or self.default_detail)


class CacheKeyError(CacheExceptionError):
    """A key could not be built from the given namespace or parts."""

    default_detail = "Invalid cache key"


class CacheSerializationError(CacheExceptionError):
    default_detail = "Cannot serialize value"


class CacheDeserializationError(CacheExceptionError):
    default_detail = "Cannot deserialize value"


class CacheCompressionError(CacheExceptionError):
    default_detail = "Cannot compress data"


class CacheDecompressionError(CacheExceptionError):
    default_detail = "Cannot decompress data"


cache_exception_handler = create_exception_handler(logger)
