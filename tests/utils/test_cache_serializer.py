# tests/utils/test_cache_serializer.py
"""Tests for catalog/utils/cache_serializer.py module."""

from datetime import UTC, datetime
from uuid import uuid4

import pytest

from catalog.errors import (
    CacheDecompressionError,
    CacheDeserializationError,
    CacheSerializationError,
)
from catalog.schemas import CategoryDto
from catalog.utils.cache_serializer import (
    COMPRESSION_MARKER,
    compress,
    decode,
    decompress,
    deserialize,
    do_compress,
    encode,
    is_compressed,
    serialize,
)


class TestSerialize:
    """Tests for serialize function."""

    def test_serialize_dict(self) -> None:
        """Test serializing a dictionary."""
        result = serialize({"name": "test", "value": 123})
        assert result == '{"name":"test","value":123}'

    def test_serialize_model_uses_field_names(self) -> None:
        """Pydantic models are stored by field name, not by camelCase alias."""
        dto = CategoryDto(
            id=uuid4(),
            name="Books",
            minimum_stock_quantity=500,
            created_at=datetime(2026, 1, 1, tzinfo=UTC),
        )
        result = serialize(dto)
        assert '"minimum_stock_quantity":500' in result
        assert "minimumStockQuantity" not in result

    def test_serialize_non_string_keys(self) -> None:
        assert serialize({1: "one"}) == '{"1":"one"}'

    def test_serialize_unsupported_type(self) -> None:
        """Test that unserializable objects raise CacheSerializationError."""
        with pytest.raises(CacheSerializationError):
            serialize({"value": object()})


class TestDeserialize:
    """Tests for deserialize function."""

    def test_deserialize_json(self) -> None:
        assert deserialize('{"a": [1, 2]}') == {"a": [1, 2]}

    def test_deserialize_invalid_json(self) -> None:
        """Test that invalid JSON raises CacheDeserializationError."""
        with pytest.raises(CacheDeserializationError):
            deserialize("{not json")


class TestCompression:
    """Tests for compress/decompress helpers."""

    def test_compress_adds_marker(self) -> None:
        data = "x" * 2000
        compressed = compress(data)
        assert compressed.startswith(COMPRESSION_MARKER)
        assert is_compressed(compressed)
        assert len(compressed) < len(data)
        assert decompress(compressed) == data

    def test_decompress_plain_text_passthrough(self) -> None:
        assert decompress('{"a":1}') == '{"a":1}'

    def test_decompress_corrupted_payload(self) -> None:
        """Test that a marker followed by garbage raises CacheDecompressionError."""
        with pytest.raises(CacheDecompressionError):
            decompress(COMPRESSION_MARKER + "not-base64!!")

    def test_do_compress_threshold(self) -> None:
        assert do_compress("a" * 11, 10) is True
        assert do_compress("a" * 10, 10) is False


class TestEncodeDecode:
    """Tests for the storage-level encode/decode pair."""

    def test_small_value_stays_plain(self) -> None:
        encoded = encode({"a": 1}, compression=True, threshold=1024)
        assert not is_compressed(encoded)
        assert decode(encoded) == {"a": 1}

    def test_large_value_is_compressed(self) -> None:
        value = {"items": ["product"] * 500}
        encoded = encode(value, compression=True, threshold=100)
        assert is_compressed(encoded)
        assert decode(encoded) == value

    def test_compression_disabled(self) -> None:
        encoded = encode({"items": ["product"] * 500}, compression=False, threshold=100)
        assert not is_compressed(encoded)
