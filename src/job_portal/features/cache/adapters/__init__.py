"""Key store adapters."""

from .memory_adapter import MemoryKeyStore
from .redis_adapter import RedisKeyStore

__all__ = ["MemoryKeyStore", "RedisKeyStore"]
