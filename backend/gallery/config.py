"""Application configuration from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    gallery_env: str = "development"
    gallery_log_level: str = "debug"

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    # Photo inventory
    photos_root: str = "public/photos"
    photos_url_prefix: str = "/photos"

    # World sizes: full canvas vs. a single category
    default_world_size: float = 8000.0
    category_world_size: float = 2600.0

    # Layout seeds
    layout_seed: int = 1337
    placeholder_seed: int = 777

    # Text in the center exclusion box
    center_title: str = "Art Universe"
    center_subtitle: str = "Drag to explore"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
