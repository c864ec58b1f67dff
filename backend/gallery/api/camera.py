"""POST /api/camera/simulate — replay a gesture script through the controller."""

from __future__ import annotations

import json
from collections.abc import AsyncGenerator, Iterator

from fastapi import APIRouter
from fastapi.responses import StreamingResponse

from gallery.api.serializers import snapshot_to_out
from gallery.engine.motion import MotionController
from gallery.engine.world import World
from gallery.models.requests import PointerEvent, SimulateRequest
from gallery.models.responses import CameraFrameOut, SimulateResponse

router = APIRouter(prefix="/camera")


def _apply(controller: MotionController, ev: PointerEvent) -> CameraFrameOut | None:
    """Feed one event. Only ticks produce a frame."""
    if ev.type == "down":
        controller.pointer_down(ev.pointer_id, ev.x, ev.y, ev.t, ev.button, ev.pointer_type)
    elif ev.type == "move":
        controller.pointer_move(ev.pointer_id, ev.x, ev.y, ev.t)
    elif ev.type == "up":
        controller.pointer_up(ev.pointer_id, ev.t)
    elif ev.type == "cancel":
        controller.pointer_cancel(ev.pointer_id)
    elif ev.type == "lost_capture":
        controller.lost_capture(ev.pointer_id)
    elif ev.type == "recenter":
        controller.recenter(ev.t)
    elif ev.type == "resize":
        s = controller.state
        controller.resize(
            ev.w if ev.w is not None else s.viewport_w,
            ev.h if ev.h is not None else s.viewport_h,
        )
    elif ev.type == "tick":
        return snapshot_to_out(controller.tick(ev.t))
    return None


def run_events(req: SimulateRequest) -> Iterator[CameraFrameOut]:
    """Events run in timestamp order on one timeline; ties keep input order."""
    controller = MotionController(World(req.world_size), req.viewport.w, req.viewport.h)
    for ev in sorted(req.events, key=lambda e: e.t):
        out = _apply(controller, ev)
        if out is not None:
            yield out


@router.post("/simulate", response_model=SimulateResponse)
async def simulate(req: SimulateRequest) -> SimulateResponse:
    frames = list(run_events(req))
    return SimulateResponse(
        frames=frames,
        final_phase=frames[-1].phase if frames else "idle",
    )


async def _stream_frames(req: SimulateRequest) -> AsyncGenerator[str, None]:
    for out in run_events(req):
        yield f"event: frame\ndata: {out.model_dump_json()}\n\n"
    yield f"event: done\ndata: {json.dumps({'type': 'done'})}\n\n"


@router.post("/simulate/stream")
async def simulate_stream(req: SimulateRequest) -> StreamingResponse:
    return StreamingResponse(
        _stream_frames(req),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
            "X-Accel-Buffering": "no",
        },
    )
