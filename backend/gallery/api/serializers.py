"""Engine dataclasses ↔ API models."""

from __future__ import annotations

from gallery.engine.geometry import Bounds
from gallery.engine.items import PlacedItem
from gallery.engine.motion import CameraSnapshot
from gallery.models.responses import BoundsOut, CameraFrameOut, ItemOut


def item_to_out(it: PlacedItem) -> ItemOut:
    return ItemOut(
        id=it.id,
        x=it.x,
        y=it.y,
        w=it.w,
        h=it.h,
        rotation=it.rotation,
        shade=it.shade,
        aspect_ratio=it.aspect_ratio,
        partner=it.partner,
        src=it.src,
        directory=it.directory,
        folder=it.folder,
        order=it.order,
    )


def out_to_item(it: ItemOut) -> PlacedItem:
    return PlacedItem(**it.model_dump())


def bounds_to_out(b: Bounds) -> BoundsOut | None:
    if b[2] <= b[0] or b[3] <= b[1]:
        return None
    return BoundsOut(x=b[0], y=b[1], w=b[2] - b[0], h=b[3] - b[1])


def snapshot_to_out(snap: CameraSnapshot) -> CameraFrameOut:
    return CameraFrameOut(
        t=snap.time,
        phase=snap.phase.value,
        target=snap.target,
        current=snap.current,
        display=snap.display,
        velocity=snap.velocity,
        scale=snap.scale,
        show_recenter=snap.show_recenter,
    )
