"""GET /api/photos — the ordered photo inventory."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response

from gallery.dependencies import get_photo_records
from gallery.models.photo import PhotoRecord

router = APIRouter()


@router.get("/photos", response_model=list[PhotoRecord])
async def list_photos(
    response: Response,
    records: list[PhotoRecord] = Depends(get_photo_records),
) -> list[PhotoRecord]:
    # Files on disk change rarely
    response.headers["Cache-Control"] = "public, max-age=60, stale-while-revalidate=300"
    return records
