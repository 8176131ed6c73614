"""In-process key store adapter."""

import fnmatch
import time
from dataclasses import dataclass
from typing import Dict, List, Optional


@dataclass
class MemoryCacheEntry:
    """Stored value with its absolute expiry time."""
    value: str
    expires_at: Optional[float] = None

    @property
    def is_expired(self) -> bool:
        if self.expires_at is None:
            return False
        return time.monotonic() >= self.expires_at


class MemoryKeyStore:
    """Key store kept in a dictionary.

    Expired entries are evicted when they are read or enumerated. None of
    the operations await, so each one is atomic with respect to other
    coroutines on the loop.
    """

    def __init__(self):
        self._store: Dict[str, MemoryCacheEntry] = {}

    async def connect(self) -> None:
        pass

    async def close(self) -> None:
        self._store.clear()

    async def get(self, key: str) -> Optional[str]:
        entry = self._store.get(key)
        if entry is None:
            return None
        if entry.is_expired:
            del self._store[key]
            return None
        return entry.value

    async def set(self, key: str, value: str, ttl: Optional[int] = None) -> None:
        expires_at = time.monotonic() + ttl if ttl and ttl > 0 else None
        self._store[key] = MemoryCacheEntry(value=value, expires_at=expires_at)

    async def delete(self, key: str) -> None:
        self._store.pop(key, None)

    async def delete_matching(self, pattern: str) -> int:
        matched = await self.keys(pattern)
        for key in matched:
            self._store.pop(key, None)
        return len(matched)

    async def keys(self, pattern: str = "*") -> List[str]:
        self._evict_expired()
        return [key for key in self._store if fnmatch.fnmatchcase(key, pattern)]

    async def ping(self) -> bool:
        return True

    def _evict_expired(self) -> None:
        for key in [k for k, entry in self._store.items() if entry.is_expired]:
            del self._store[key]
