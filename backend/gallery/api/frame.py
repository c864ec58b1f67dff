"""POST /api/frame — cull a layout against a camera transform."""

from __future__ import annotations

from fastapi import APIRouter

from gallery.api.serializers import out_to_item
from gallery.engine.culler import count_visible, cull_visible
from gallery.engine.world import World
from gallery.models.requests import FrameRequest
from gallery.models.responses import FrameResponse

router = APIRouter()


@router.post("/frame", response_model=FrameResponse)
async def frame(req: FrameRequest) -> FrameResponse:
    world = World(req.world_size)
    # Only the wrapped translate is ever applied to drawable content
    display = world.wrap_offset(req.offset.x, req.offset.y, req.scale)
    items = [out_to_item(it) for it in req.items]

    visible = cull_visible(
        items,
        req.world_size,
        display,
        req.scale,
        (req.viewport.w, req.viewport.h),
        buffer_px=req.buffer,
    )
    return FrameResponse(
        transform=display,
        visible={key: [it.id for it in its] for key, its in visible.items()},
        visible_count=count_visible(visible),
    )
