"""Redis key store adapter."""

from typing import List, Optional

import redis.asyncio as redis
from redis.asyncio import Redis
from loguru import logger

from ....core.exceptions import StoreUnavailableError


class RedisKeyStore:
    """Key store backed by Redis.

    Keys are stored under an optional namespace (for example
    ``"job-portal:production:"``) that callers never see: it is added on
    every write and stripped again when keys are enumerated.
    """

    SCAN_BATCH_SIZE = 500

    def __init__(
        self,
        url: str,
        namespace: str = "",
        socket_timeout: float = 5.0,
        client: Optional[Redis] = None,
    ):
        self.url = url
        self.namespace = namespace
        self.socket_timeout = socket_timeout
        self._client: Optional[Redis] = client
        self._closed = False

    def _full_key(self, key: str) -> str:
        return f"{self.namespace}{key}"

    def _strip(self, key) -> str:
        if isinstance(key, bytes):
            key = key.decode()
        if self.namespace and key.startswith(self.namespace):
            return key[len(self.namespace):]
        return key

    def _require_client(self) -> Redis:
        if self._closed:
            raise StoreUnavailableError("Redis key store is closed")
        if self._client is None:
            # from_url does not touch the network; the first command connects
            self._client = redis.from_url(
                self.url,
                decode_responses=True,
                socket_timeout=self.socket_timeout,
                socket_connect_timeout=self.socket_timeout,
            )
        return self._client

    async def connect(self) -> None:
        """Create the client and report whether Redis answers.

        A failed ping is logged, not raised: the store then behaves as an
        always-empty cache until Redis becomes reachable.
        """
        self._closed = False
        if await self.ping():
            logger.info(f"Connected to Redis key store (namespace={self.namespace!r})")
        else:
            logger.warning("Redis is unreachable; response cache will be bypassed until it recovers")

    async def close(self) -> None:
        if self._client is not None:
            try:
                await self._client.aclose()
            except Exception as e:
                logger.warning(f"Error closing Redis connection: {e}")
            finally:
                self._client = None
        self._closed = True

    async def get(self, key: str) -> Optional[str]:
        try:
            return await self._require_client().get(self._full_key(key))
        except Exception as e:
            logger.warning(f"Failed to read cache key {key}: {e}")
            return None

    async def set(self, key: str, value: str, ttl: Optional[int] = None) -> None:
        try:
            await self._require_client().set(
                self._full_key(key),
                value,
                ex=ttl if ttl and ttl > 0 else None,
            )
        except Exception as e:
            logger.warning(f"Failed to write cache key {key}: {e}")

    async def delete(self, key: str) -> None:
        try:
            await self._require_client().delete(self._full_key(key))
        except Exception as e:
            logger.warning(f"Failed to delete cache key {key}: {e}")

    async def delete_matching(self, pattern: str) -> int:
        """Delete keys matching pattern.

        Keys are enumerated with SCAN and deleted in batches, so keys
        written while the scan runs may survive it.
        """
        try:
            client = self._require_client()
            deleted = 0
            batch: List[str] = []
            async for key in client.scan_iter(match=self._full_key(pattern), count=self.SCAN_BATCH_SIZE):
                batch.append(key)
                if len(batch) >= self.SCAN_BATCH_SIZE:
                    deleted += await client.delete(*batch)
                    batch = []
            if batch:
                deleted += await client.delete(*batch)
            return deleted
        except Exception as e:
            logger.warning(f"Failed to delete cache keys matching {pattern}: {e}")
            return 0

    async def keys(self, pattern: str = "*") -> List[str]:
        try:
            client = self._require_client()
            return [
                self._strip(key)
                async for key in client.scan_iter(match=self._full_key(pattern), count=self.SCAN_BATCH_SIZE)
            ]
        except Exception as e:
            logger.warning(f"Failed to list cache keys matching {pattern}: {e}")
            return []

    async def ping(self) -> bool:
        try:
            return bool(await self._require_client().ping())
        except Exception as e:
            logger.warning(f"Redis health check failed: {e}")
            return False
