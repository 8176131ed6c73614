"""Cache management API endpoints."""

from typing import Any, Dict

from fastapi import APIRouter, Depends, Query

from ....api.dependencies import get_response_cache
from ...auth.dependencies import require_admin
from ...cache.services import ResponseCache
from ...users.entities.user import User

router = APIRouter()


@router.post("/clear")
async def clear_cache(
    pattern: str = Query("*", description="Glob pattern of cache keys to remove"),
    admin: User = Depends(require_admin),
    cache: ResponseCache = Depends(get_response_cache),
) -> Dict[str, Any]:
    """Clear cache by pattern.

    Requires administrator role.

    Args:
        pattern: Key pattern to match (default: "*" clears all)

    Returns:
        Dict with pattern, cleared keys count, and success message
    """
    cleared_keys = await cache.clear(pattern)
    return {
        "pattern": pattern,
        "cleared_keys": cleared_keys,
        "message": f"Cleared {cleared_keys} cache keys matching pattern '{pattern}'",
    }
