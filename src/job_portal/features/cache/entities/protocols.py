"""Key store protocol for the response cache.

A key store is a best-effort key-value store with per-key expiry. It never
raises: an unreachable backend reads as empty and ignores writes.
"""

from abc import abstractmethod
from typing import List, Optional, Protocol, runtime_checkable


@runtime_checkable
class KeyStore(Protocol):
    """Protocol for the key-value store behind the response cache."""

    @abstractmethod
    async def connect(self) -> None:
        """Prepare the store for use."""
        ...

    @abstractmethod
    async def close(self) -> None:
        """Release store resources."""
        ...

    @abstractmethod
    async def get(self, key: str) -> Optional[str]:
        """Get a value, or None when absent, expired or unreachable."""
        ...

    @abstractmethod
    async def set(self, key: str, value: str, ttl: Optional[int] = None) -> None:
        """Store a value with an expiry in seconds."""
        ...

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Delete a single key."""
        ...

    @abstractmethod
    async def delete_matching(self, pattern: str) -> int:
        """Delete keys matching a glob pattern and return how many were removed."""
        ...

    @abstractmethod
    async def keys(self, pattern: str = "*") -> List[str]:
        """List keys matching a glob pattern."""
        ...

    @abstractmethod
    async def ping(self) -> bool:
        """Check whether the backend is reachable."""
        ...
