"""API response models."""

from __future__ import annotations

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = "0.1.0"
    default_world_size: float = 0.0


class ItemOut(BaseModel):
    id: str
    x: float
    y: float
    w: float
    h: float
    rotation: float = 0.0
    shade: str = ""
    aspect_ratio: float = 4 / 3
    partner: str | None = None
    src: str = ""
    directory: str = ""
    folder: str = ""
    order: int = 0


class BoundsOut(BaseModel):
    x: float
    y: float
    w: float
    h: float


class LayoutResponse(BaseModel):
    world_size: float
    items: list[ItemOut] = Field(default_factory=list)
    dropped: list[str] = Field(default_factory=list)
    violations: int = 0
    exclusion: BoundsOut | None = None
    center_title: str = ""
    center_subtitle: str = ""
    processing_time_ms: float = 0.0


class FrameResponse(BaseModel):
    transform: tuple[float, float]
    visible: dict[str, list[str]] = Field(default_factory=dict)
    visible_count: int = 0


class CameraFrameOut(BaseModel):
    t: float
    phase: str
    target: tuple[float, float]
    current: tuple[float, float]
    display: tuple[float, float]
    velocity: tuple[float, float]
    scale: float
    show_recenter: bool


class SimulateResponse(BaseModel):
    frames: list[CameraFrameOut] = Field(default_factory=list)
    final_phase: str = "idle"
