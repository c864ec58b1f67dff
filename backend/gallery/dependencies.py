"""FastAPI dependency injection."""

from __future__ import annotations

from fastapi import Depends

from gallery.config import Settings, settings
from gallery.inventory import scan_photos
from gallery.models.photo import PhotoRecord


def get_settings() -> Settings:
    return settings


def get_photo_records(cfg: Settings = Depends(get_settings)) -> list[PhotoRecord]:
    return scan_photos(cfg.photos_root, cfg.photos_url_prefix)
