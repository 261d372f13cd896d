"""
Serialization and compression for cache payloads.

Values are rendered to JSON with orjson. Pydantic models and other types
orjson does not know are converted through ``pydantic_core.to_jsonable_python``
using field names, so cached DTOs validate back through their models.
Payloads above the configured threshold are gzip-compressed and base64-encoded
behind a marker prefix.
"""

from base64 import b64decode, b64encode
from binascii import Error as BinasciiError
from functools import partial
from gzip import BadGzipFile
from gzip import compress as gzip_compress
from gzip import decompress as gzip_decompress
from logging import getLogger
from typing import Any
from zlib import error as ZlibError

from orjson import OPT_NON_STR_KEYS, JSONDecodeError, JSONEncodeError
from orjson import dumps as orjson_dumps
from orjson import loads as orjson_loads
from pydantic_core import PydanticSerializationError, to_jsonable_python

from catalog.configs import file_logger
from catalog.errors import (
    CacheCompressionError,
    CacheDecompressionError,
    CacheDeserializationError,
    CacheSerializationError,
)

logger = file_logger(getLogger(__name__))

COMPRESSION_MARKER = "\x00GZIP\x00"

_to_jsonable = partial(to_jsonable_python, by_alias=False)


def serialize(value: object) -> str:
    """
    Serialize ``value`` to JSON text.

    Raises:
        CacheSerializationError: If the value cannot be rendered.
    """
    try:
        return orjson_dumps(value, default=_to_jsonable, option=OPT_NON_STR_KEYS).decode("utf-8")
    except (JSONEncodeError, PydanticSerializationError, TypeError, ValueError) as e:
        logger.warning("Serialization failed: %s", e)
        raise CacheSerializationError from e


def deserialize(value: str) -> Any:
    """
    Parse JSON text produced by ``serialize``.

    Raises:
        CacheDeserializationError: If the text is not valid JSON.
    """
    try:
        return orjson_loads(value)
    except (JSONDecodeError, TypeError) as e:
        logger.warning("Deserialization failed: %s", e)
        raise CacheDeserializationError from e


def compress(data: str) -> str:
    """Gzip ``data`` and return it base64-encoded behind the marker."""
    try:
        compressed = gzip_compress(data.encode("utf-8"))
    except (OSError, UnicodeEncodeError) as e:
        raise CacheCompressionError from e
    return COMPRESSION_MARKER + b64encode(compressed).decode("ascii")


def decompress(data: str) -> str:
    """Reverse ``compress``; text without the marker is returned unchanged."""
    if not is_compressed(data):
        return data
    try:
        raw = b64decode(data[len(COMPRESSION_MARKER) :], validate=True)
        return gzip_decompress(raw).decode("utf-8")
    except (BinasciiError, BadGzipFile, ZlibError, EOFError, UnicodeDecodeError) as e:
        raise CacheDecompressionError from e


def is_compressed(data: str) -> bool:
    return data.startswith(COMPRESSION_MARKER)


def do_compress(data: str, threshold: int) -> bool:
    """Whether ``data`` is larger than ``threshold`` bytes."""
    return len(data.encode("utf-8")) > threshold


def encode(value: object, *, compression: bool = True, threshold: int = 1024) -> str:
    """Serialize and, above ``threshold``, compress a value for storage."""
    text = serialize(value)
    if compression and do_compress(text, threshold):
        return compress(text)
    return text


def decode(data: str) -> Any:
    """Inverse of ``encode``."""
    return deserialize(decompress(data))
