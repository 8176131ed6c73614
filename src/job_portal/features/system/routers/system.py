"""System-level API endpoints."""

from typing import Any, Dict

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from ....api.dependencies import get_system_service
from ...auth.dependencies import require_admin
from ...users.entities.user import User
from ..services import SystemService

router = APIRouter()


@router.get("/health")
async def get_system_health(service: SystemService = Depends(get_system_service)):
    """Public health check; 503 when a backing service is down."""
    health = await service.health()
    status_code = (
        status.HTTP_200_OK if health["status"] == "healthy" else status.HTTP_503_SERVICE_UNAVAILABLE
    )
    return JSONResponse(status_code=status_code, content=health)


@router.get("/stats")
async def get_system_stats(
    admin: User = Depends(require_admin),
    service: SystemService = Depends(get_system_service),
) -> Dict[str, Any]:
    """Platform counts.

    Requires administrator role.
    """
    return await service.stats()
