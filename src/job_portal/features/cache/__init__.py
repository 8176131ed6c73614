"""Response caching: key stores and the read-through response cache."""

from .entities import KeyStore
from .adapters import MemoryKeyStore, RedisKeyStore
from .services import ResponseCache, cached

__all__ = [
    "KeyStore",
    "MemoryKeyStore",
    "RedisKeyStore",
    "ResponseCache",
    "cached",
]
