"""FastAPI app factory."""

from __future__ import annotations

import logging

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from gallery.config import settings

load_dotenv()

logging.basicConfig(
    level=getattr(logging, settings.gallery_log_level.upper(), logging.DEBUG),
    format="%(asctime)s %(name)s %(levelname)s %(message)s",
)


def create_app() -> FastAPI:
    app = FastAPI(
        title="Infinite Gallery",
        description="Photo collage layout engine with placement solver, toroidal camera and viewport culling",
        version="0.1.0",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from gallery.api.router import api_router

    app.include_router(api_router)

    return app


app = create_app()
