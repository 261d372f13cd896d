from catalog.clients.memory_client import MemoryClient
from catalog.clients.protocols import CacheClientProtocol
from catalog.clients.redis_client import RedisClient

__all__ = ["CacheClientProtocol", "MemoryClient", "RedisClient"]
