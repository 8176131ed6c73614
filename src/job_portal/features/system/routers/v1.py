"""Utility API v1 router - combines the system sub-routers."""

from fastapi import APIRouter

from . import cache, system

router = APIRouter()

router.include_router(system.router, tags=["System"])
router.include_router(cache.router, prefix="/cache", tags=["Cache"])
