"""Route decorator for response caching."""

import functools
from typing import Optional

from starlette.requests import Request


def cached(prefix: str, ttl: Optional[int] = None):
    """Cache a FastAPI endpoint's payload under ``prefix``.

    The endpoint must accept a ``request: Request`` parameter. The cache is
    resolved from ``request.app.state.container.response_cache`` at call
    time; with no ttl the prefix's configured TTL applies.

    Example:
        @router.get("")
        @cached("jobs:list")
        async def list_jobs(request: Request, page: int = 1): ...
    """
    def decorator(func):
        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            request: Request = kwargs["request"]
            cache = request.app.state.container.response_cache

            async def handler(_request: Request):
                return await func(*args, **kwargs)

            return await cache.wrap(prefix, ttl, handler)(request)

        return wrapper
    return decorator
