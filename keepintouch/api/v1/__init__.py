"""Version 1 API routes for the relationship tracking service."""
from __future__ import annotations

from fastapi import APIRouter, Depends

from keepintouch.api.v1.imports import router as import_router
from keepintouch.api.v1.people import router as people_router
from keepintouch.core.config import Settings, get_settings

router = APIRouter()
router.include_router(people_router)
router.include_router(import_router)


@router.get("/health", tags=["health"])
async def health_check(settings: Settings = Depends(get_settings)) -> dict[str, dict[str, str]]:
    """Report the service health information."""
    return {"data": {"status": "ok", "version": settings.version}}
