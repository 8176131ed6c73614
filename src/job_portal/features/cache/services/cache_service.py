"""Read-through response cache."""

import json
import logging
from typing import Any, Awaitable, Callable, Dict, Optional, Union

from fastapi.encoders import jsonable_encoder
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from ..entities.protocols import KeyStore

logger = logging.getLogger(__name__)

Handler = Callable[[Request], Awaitable[Union[Any, Response]]]

CACHEABLE_METHODS = frozenset({"GET", "HEAD"})


class ResponseCache:
    """Caches endpoint payloads in a key store.

    Keys have the form ``"{prefix}:{path}"`` or ``"{prefix}:{path}?{query}"``
    where path and query are taken verbatim from the request, so the same
    parameters in a different order produce a different key.
    """

    def __init__(
        self,
        store: Optional[KeyStore],
        default_ttl: int = 300,
        ttls: Optional[Dict[str, int]] = None,
        enabled: bool = True,
    ):
        self.store = store
        self.default_ttl = default_ttl
        self.ttls = dict(ttls or {})
        self.enabled = enabled and store is not None

    @staticmethod
    def build_key(prefix: str, path: str, query: str = "") -> str:
        """Build the cache key for a request target."""
        key = f"{prefix}:{path}"
        if query:
            key = f"{key}?{query}"
        return key

    def key_for_request(self, prefix: str, request: Request) -> str:
        return self.build_key(prefix, request.url.path, request.url.query)

    def ttl_for(self, prefix: str) -> int:
        return self.ttls.get(prefix, self.default_ttl)

    def wrap(self, prefix: str, ttl: Optional[int], handler: Handler) -> Handler:
        """Wrap a handler with read-through caching.

        The returned handler serves GET/HEAD requests from the store when an
        entry exists and otherwise runs ``handler`` and stores its payload.
        Handlers may return a plain payload or a Response; only payloads and
        2xx JSON responses are stored. Store failures never reach the caller.
        """
        effective_ttl = ttl if ttl is not None else self.ttl_for(prefix)

        async def cached_handler(request: Request):
            if not self.enabled or request.method.upper() not in CACHEABLE_METHODS:
                return await handler(request)

            key = self.key_for_request(prefix, request)
            hit = await self._read(key)
            if hit is not None:
                logger.debug(f"Cache hit: {key}")
                return hit

            logger.debug(f"Cache miss: {key}")
            result = await handler(request)

            if isinstance(result, Response):
                if not 200 <= result.status_code < 300 or not isinstance(result, JSONResponse):
                    return result
                payload = json.loads(result.body)
            else:
                payload = jsonable_encoder(result)

            await self._write(key, payload, effective_ttl)
            return payload

        return cached_handler

    async def invalidate(self, key: str) -> None:
        """Remove a single cached entry."""
        if self.store is None:
            return
        try:
            await self.store.delete(key)
        except Exception as e:
            logger.warning(f"Failed to invalidate cache key {key}: {e}")

    async def invalidate_pattern(self, pattern: str) -> int:
        """Remove every cached entry whose key matches a glob pattern."""
        if self.store is None:
            return 0
        try:
            removed = await self.store.delete_matching(pattern)
        except Exception as e:
            logger.warning(f"Failed to invalidate cache pattern {pattern}: {e}")
            return 0
        if removed:
            logger.debug(f"Invalidated {removed} cache keys matching {pattern}")
        return removed

    async def clear(self, pattern: str = "*") -> int:
        return await self.invalidate_pattern(pattern)

    async def health(self) -> Dict[str, Any]:
        """Report whether the backing store is reachable."""
        if self.store is None:
            return {"healthy": False, "enabled": False, "backend": None}
        try:
            healthy = await self.store.ping()
        except Exception as e:
            logger.warning(f"Cache health check failed: {e}")
            healthy = False
        return {
            "healthy": healthy,
            "enabled": self.enabled,
            "backend": type(self.store).__name__,
        }

    async def count(self, pattern: str = "*") -> int:
        if self.store is None:
            return 0
        try:
            return len(await self.store.keys(pattern))
        except Exception as e:
            logger.warning(f"Failed to count cache keys matching {pattern}: {e}")
            return 0

    async def _read(self, key: str) -> Optional[Any]:
        try:
            raw = await self.store.get(key)
        except Exception as e:
            logger.warning(f"Failed to read cache key {key}: {e}")
            return None
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except ValueError as e:
            logger.warning(f"Discarding undecodable cache entry {key}: {e}")
            await self.invalidate(key)
            return None

    async def _write(self, key: str, payload: Any, ttl: int) -> None:
        try:
            await self.store.set(key, json.dumps(payload), ttl)
        except Exception as e:
            logger.warning(f"Failed to write cache key {key}: {e}")
