"""Health check."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from gallery.config import Settings
from gallery.dependencies import get_settings
from gallery.models.responses import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health(settings: Settings = Depends(get_settings)) -> HealthResponse:
    return HealthResponse(
        status="ok",
        version="0.1.0",
        default_world_size=settings.default_world_size,
    )
