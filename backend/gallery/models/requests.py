"""API request models."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from gallery.models.responses import ItemOut


class Point(BaseModel):
    x: float = 0.0
    y: float = 0.0


class Size(BaseModel):
    w: float = Field(..., ge=0, description="Width in screen px")
    h: float = Field(..., ge=0, description="Height in screen px")


class LayoutRequest(BaseModel):
    filter_directory: str | None = Field(default=None, description="Only photos from this directory")
    world_size: float | None = Field(default=None, description="World side length; defaults by view type")
    seed: int | None = Field(default=None, description="Layout seed override")
    center_title: str | None = None
    center_subtitle: str | None = None


class FrameRequest(BaseModel):
    world_size: float = Field(..., gt=0)
    items: list[ItemOut] = Field(default_factory=list)
    offset: Point = Field(default_factory=Point, description="Camera translate (screen px, unwrapped ok)")
    scale: float = Field(default=1.0, gt=0)
    viewport: Size
    buffer: float = Field(default=500.0, ge=0)


class PointerEvent(BaseModel):
    type: Literal["down", "move", "up", "cancel", "lost_capture", "recenter", "tick", "resize"]
    t: float = Field(..., description="Timestamp in ms")
    x: float = Field(default=0.0, description="Pointer position in screen px")
    y: float = Field(default=0.0, description="Pointer position in screen px")
    w: float | None = Field(default=None, gt=0, description="New viewport width (resize only); omitted keeps the current one")
    h: float | None = Field(default=None, gt=0, description="New viewport height (resize only); omitted keeps the current one")
    pointer_id: int = 1
    button: int = 0
    pointer_type: str = "mouse"


class SimulateRequest(BaseModel):
    world_size: float = Field(default=8000.0, gt=0)
    viewport: Size = Field(default_factory=lambda: Size(w=1280, h=800))
    events: list[PointerEvent] = Field(default_factory=list)
