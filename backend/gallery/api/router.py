"""Master API router — mounts all endpoint routers."""

from __future__ import annotations

from fastapi import APIRouter

from gallery.api import camera, frame, health, layout, photos

api_router = APIRouter(prefix="/api")

api_router.include_router(health.router)
api_router.include_router(photos.router)
api_router.include_router(layout.router)
api_router.include_router(frame.router)
api_router.include_router(camera.router)
