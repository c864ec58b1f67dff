"""Viewport culling — which tiles are worth drawing this frame.

Pure and stateless: the result depends only on (items, world size, wrapped
offset, scale, viewport, buffer). Screen-space bounds of an item in world copy
(tx, ty) are

    x1 = offset_x + (tx * world_size + item.x) * scale
    y1 = offset_y + (ty * world_size + item.y) * scale
    x2 = x1 + item.w * scale
    y2 = y1 + (item.h + caption strip) * scale

and the item is kept when that box meets the viewport grown by ``buffer_px``
on every side (shared edges count).
"""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np
from numpy.typing import NDArray

from gallery.engine.geometry import Bounds
from gallery.engine.items import PlacedItem
from gallery.engine.world import TILE_OFFSETS, tile_key

DEFAULT_BUFFER_PX = 500.0


def _footprints(items: Sequence[PlacedItem]) -> NDArray[np.float64]:
    """Nx4 array of (x, y, w, total_h) in world units."""
    if not items:
        return np.empty((0, 4), dtype=np.float64)
    return np.array([(it.x, it.y, it.w, it.total_height) for it in items], dtype=np.float64)


def screen_bounds(
    item: PlacedItem,
    tx: int,
    ty: int,
    offset: tuple[float, float],
    scale: float,
    world_size: float,
) -> Bounds:
    """Screen-space box of ``item`` (tile + caption) inside world copy (tx, ty)."""
    x1 = offset[0] + (tx * world_size + item.x) * scale
    y1 = offset[1] + (ty * world_size + item.y) * scale
    return (x1, y1, x1 + item.w * scale, y1 + item.total_height * scale)


def cull_visible(
    items: Sequence[PlacedItem],
    world_size: float,
    offset: tuple[float, float],
    scale: float,
    viewport: tuple[float, float],
    buffer_px: float = DEFAULT_BUFFER_PX,
    tiles: Sequence[tuple[int, int]] = TILE_OFFSETS,
) -> dict[str, list[PlacedItem]]:
    """Visible items per world copy, keyed ``"tx,ty"``.

    An empty or zero-sized viewport yields an empty mapping.
    """
    vw, vh = viewport
    if vw <= 0 or vh <= 0:
        return {}

    fp = _footprints(items)
    result: dict[str, list[PlacedItem]] = {}
    for tx, ty in tiles:
        if len(fp) == 0:
            result[tile_key(tx, ty)] = []
            continue
        x1 = offset[0] + (tx * world_size + fp[:, 0]) * scale
        y1 = offset[1] + (ty * world_size + fp[:, 1]) * scale
        x2 = x1 + fp[:, 2] * scale
        y2 = y1 + fp[:, 3] * scale
        mask = (
            (x2 >= -buffer_px)
            & (x1 <= vw + buffer_px)
            & (y2 >= -buffer_px)
            & (y1 <= vh + buffer_px)
        )
        result[tile_key(tx, ty)] = [items[i] for i in np.flatnonzero(mask)]
    return result


def count_visible(visible: dict[str, list[PlacedItem]]) -> int:
    return sum(len(v) for v in visible.values())


def hit_test(
    items: Sequence[PlacedItem],
    world_size: float,
    offset: tuple[float, float],
    scale: float,
    point: tuple[float, float],
    tiles: Sequence[tuple[int, int]] = TILE_OFFSETS,
) -> PlacedItem | None:
    """Topmost tile (not caption) under a screen point, across all world copies.

    Later items draw on top of earlier ones. Rotation is cosmetic and ignored.
    """
    px, py = point
    for it in reversed(items):
        for tx, ty in tiles:
            x1 = offset[0] + (tx * world_size + it.x) * scale
            y1 = offset[1] + (ty * world_size + it.y) * scale
            if x1 <= px <= x1 + it.w * scale and y1 <= py <= y1 + it.h * scale:
                return it
    return None
