"""Tests for catalog/clients/protocols.py."""

from catalog.clients import MemoryClient, RedisClient
from catalog.clients.protocols import CacheClientProtocol


def test_memory_client_satisfies_protocol() -> None:
    assert isinstance(MemoryClient(), CacheClientProtocol)


def test_redis_client_satisfies_protocol() -> None:
    assert isinstance(RedisClient(), CacheClientProtocol)


def test_unrelated_object_does_not() -> None:
    assert not isinstance(object(), CacheClientProtocol)
