"""Layout audit — re-checks every placement invariant with Shapely geometry.

Independent of the solver's own bookkeeping: rebuilds tiles and captions as
polygons, finds candidate pairs through an STRtree, and reports violations as
readable strings. An empty list means the layout is clean.
"""

from __future__ import annotations

import logging
from collections import defaultdict

from shapely import STRtree
from shapely.geometry import Polygon, box

from gallery.engine.config import LayoutConfig
from gallery.engine.items import Layout, PlacedItem

logger = logging.getLogger(__name__)

# Aspect drift allowed on top of integer rounding of both edges
_ASPECT_EPS = 1e-9


def _tile(it: PlacedItem) -> Polygon:
    return box(*it.tile)


def _caption(it: PlacedItem) -> Polygon:
    return box(*it.caption)


def aspect_tolerance(it: PlacedItem) -> float:
    """Worst-case |w/h - ratio| from rounding each edge to whole units."""
    return (1 + it.aspect_ratio) / max(it.h, 1) + _ASPECT_EPS


def _positive_overlaps(tree: STRtree, geoms: list[Polygon], probe: Polygon) -> list[tuple[int, float]]:
    hits: list[tuple[int, float]] = []
    if probe.area <= 0:
        return hits
    for j in tree.query(probe):
        other = geoms[int(j)]
        # Zero-height caption strips never collide
        if other.area <= 0:
            continue
        inter = probe.intersection(other).area
        if inter > 0:
            hits.append((int(j), inter))
    return hits


def audit_layout(layout: Layout, config: LayoutConfig | None = None) -> list[str]:
    cfg = config or LayoutConfig()
    items = layout.items
    issues: list[str] = []
    if not items:
        return issues

    tiles = [_tile(it) for it in items]
    captions = [_caption(it) for it in items]
    tile_tree = STRtree(tiles)
    caption_tree = STRtree(captions)
    exclusion = box(*layout.exclusion) if layout.exclusion[2] > layout.exclusion[0] else None

    # Tile-vs-tile: matching + cover ratio
    neighbors: dict[int, set[int]] = defaultdict(set)
    for i, t in enumerate(tiles):
        for j, inter in _positive_overlaps(tile_tree, tiles, t):
            if j == i:
                continue
            neighbors[i].add(j)
            if j < i:
                continue
            for k, a in ((i, t.area), (j, tiles[j].area)):
                if inter / a > cfg.max_cover_ratio + 1e-12:
                    issues.append(
                        f"{items[k].id}: covered {inter / a:.1%} by overlap of "
                        f"{items[i].id}/{items[j].id}"
                    )

    for i, others in neighbors.items():
        if len(others) > 1:
            names = ", ".join(sorted(items[j].id for j in others))
            issues.append(f"{items[i].id}: overlaps {len(others)} tiles ({names})")
        elif len(others) == 1:
            (j,) = others
            if items[i].partner != items[j].id:
                issues.append(f"{items[i].id}: overlaps {items[j].id} but partner is {items[i].partner}")

    # Captions: never touched by any other tile or caption
    for i, c in enumerate(captions):
        for j, _ in _positive_overlaps(tile_tree, tiles, c):
            if j != i:
                issues.append(f"{items[i].id}: caption covered by tile {items[j].id}")
        for j, _ in _positive_overlaps(caption_tree, captions, c):
            if j != i and j > i:
                issues.append(f"{items[i].id}: caption collides with caption {items[j].id}")

    for i, it in enumerate(items):
        fp = box(*it.footprint)
        if exclusion is not None and fp.intersection(exclusion).area > 0:
            issues.append(f"{it.id}: intersects center exclusion zone")
        if it.x < 0 or it.y < 0 or it.x + it.w > layout.world_size or it.y + it.total_height > layout.world_size:
            issues.append(f"{it.id}: outside world bounds")
        drift = abs(it.w / it.h - it.aspect_ratio)
        if drift > aspect_tolerance(it):
            issues.append(f"{it.id}: aspect drift {drift:.4f}")

    if issues:
        logger.warning("Layout audit: %d violations", len(issues))
    return issues
