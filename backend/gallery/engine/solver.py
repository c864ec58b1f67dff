"""Placement solver — randomized greedy scatter with strict overlap rules.

For every item, in input order:
  1. Draw a size tier and fit an aspect-preserving tile inside it.
  2. Sample candidate positions (mostly on a ring around world-center so the
     first view is populated, otherwise uniformly) and reject any that
       - touch the center exclusion box (tile or caption),
       - collide with any existing caption, or put a caption on a tile,
       - overlap an existing tile that already has a partner,
       - overlap more than one existing tile,
       - cover more than 10% of either tile.
  3. On a blown attempt budget shrink (88%, 78%), then try a small fallback
     size with double budget. Still nothing → drop the item. Rules are never
     bent to force a fit.

Tile overlap is therefore a matching: each tile overlaps at most one other.
The solver is a pure function of (specs, world size, config, seed).
"""

from __future__ import annotations

import logging
import math
import time
from collections.abc import Sequence

import numpy as np
from numpy.typing import NDArray

from gallery.engine.config import LayoutConfig, PlaceholderConfig, SizeTier
from gallery.engine.geometry import Bounds, clamp, overlap_area, rect, round_half_up
from gallery.engine.items import ItemSpec, Layout, PlacedItem
from gallery.engine.rng import SeededRng

logger = logging.getLogger(__name__)


def resolve_aspect_ratio(aspect_ratio: float | None, default: float) -> float:
    """Missing, non-finite, or non-positive ratios fall back to ``default``."""
    if aspect_ratio is None or not math.isfinite(aspect_ratio) or aspect_ratio <= 0:
        return default
    return float(aspect_ratio)


def pick_tier(r: float, tiers: Sequence[SizeTier]) -> SizeTier:
    """Weighted draw: ``r`` in [0, 1) walks the cumulative weights."""
    total = sum(t.weight for t in tiers)
    if total <= 0:
        raise ValueError("size tier weights must sum to a positive value")
    acc = 0.0
    for tier in tiers:
        acc += tier.weight / total
        if r < acc:
            return tier
    return tiers[-1]


def fit_to_tier(aspect_ratio: float, tier: SizeTier, r: float) -> tuple[int, int]:
    """Aspect-preserving tile size for ``tier``.

    The long edge is drawn inside the tier range; the other edge follows from
    the ratio and is re-clamped into the tier box if it overflows.
    """
    landscape = aspect_ratio >= 1
    lo, hi = (tier.min_w, tier.max_w) if landscape else (tier.min_h, tier.max_h)
    long_edge = round_half_up(lo + r * (hi - lo))

    if landscape:
        w = clamp(long_edge, tier.min_w, tier.max_w)
        h = round_half_up(w / aspect_ratio)
        if h > tier.max_h:
            h = tier.max_h
            w = round_half_up(h * aspect_ratio)
        elif h < tier.min_h:
            h = tier.min_h
            w = round_half_up(h * aspect_ratio)
    else:
        h = clamp(long_edge, tier.min_h, tier.max_h)
        w = round_half_up(h * aspect_ratio)
        if w > tier.max_w:
            w = tier.max_w
            h = round_half_up(w / aspect_ratio)
        elif w < tier.min_w:
            w = tier.min_w
            h = round_half_up(w / aspect_ratio)
    return max(1, int(w)), max(1, int(h))


def fit_to_box(aspect_ratio: float, box_w: float, box_h: float) -> tuple[int, int]:
    """Largest aspect-preserving size inside (box_w, box_h)."""
    if aspect_ratio >= box_w / box_h:
        w = box_w
        h = round_half_up(box_w / aspect_ratio)
    else:
        h = box_h
        w = round_half_up(box_h * aspect_ratio)
    return max(1, int(w)), max(1, int(h))


def shrink_size(base_w: int, base_h: int, step: float, min_w: float, min_h: float) -> tuple[int, int]:
    """Scale both edges by one factor: ``step``, raised so neither edge drops
    under its floor, and never past the drawn size."""
    factor = min(1.0, max(step, min_w / base_w, min_h / base_h))
    return max(1, int(round_half_up(base_w * factor))), max(1, int(round_half_up(base_h * factor)))


def center_exclusion(world_size: float, config: LayoutConfig) -> Bounds:
    """Box around world-center reserved for the title and subtitle."""
    half = world_size / 2
    return rect(
        half - config.exclusion_w / 2,
        half - config.exclusion_h / 2,
        config.exclusion_w,
        config.exclusion_h,
    )


def _intersections(boxes: NDArray[np.float64], b: Bounds) -> NDArray[np.float64]:
    """Intersection area of every row of ``boxes`` with ``b``."""
    iw = np.minimum(boxes[:, 2], b[2]) - np.maximum(boxes[:, 0], b[0])
    ih = np.minimum(boxes[:, 3], b[3]) - np.maximum(boxes[:, 1], b[1])
    return np.clip(iw, 0.0, None) * np.clip(ih, 0.0, None)


class _Occupancy:
    """Placed tiles/captions as growable arrays plus the overlap pairing."""

    def __init__(self, capacity: int) -> None:
        self.tiles = np.empty((max(capacity, 1), 4), dtype=np.float64)
        self.captions = np.empty((max(capacity, 1), 4), dtype=np.float64)
        self.areas = np.empty(max(capacity, 1), dtype=np.float64)
        self.partner: list[int | None] = []

    @property
    def count(self) -> int:
        return len(self.partner)

    def add(self, tile: Bounds, caption: Bounds, partner: int | None) -> int:
        i = self.count
        if i >= len(self.areas):
            self.tiles = np.vstack([self.tiles, np.empty_like(self.tiles)])
            self.captions = np.vstack([self.captions, np.empty_like(self.captions)])
            self.areas = np.concatenate([self.areas, np.empty_like(self.areas)])
        self.tiles[i] = tile
        self.captions[i] = caption
        self.areas[i] = (tile[2] - tile[0]) * (tile[3] - tile[1])
        self.partner.append(partner)
        if partner is not None:
            self.partner[partner] = i
        return i

    def check(self, tile: Bounds, caption: Bounds, max_cover: float) -> tuple[bool, int | None]:
        """(accepted, index of the single overlapped tile or None)."""
        n = self.count
        if n == 0:
            return True, None
        tiles = self.tiles[:n]
        captions = self.captions[:n]

        # Captions are never covered, by tiles or by other captions
        if (
            (_intersections(captions, tile) > 0).any()
            or (_intersections(tiles, caption) > 0).any()
            or (_intersections(captions, caption) > 0).any()
        ):
            return False, None

        inter = _intersections(tiles, tile)
        hits = np.flatnonzero(inter > 0)
        if len(hits) == 0:
            return True, None
        if len(hits) > 1:
            return False, None

        j = int(hits[0])
        if self.partner[j] is not None:
            return False, None
        cand_area = (tile[2] - tile[0]) * (tile[3] - tile[1])
        shared = float(inter[j])
        if shared / cand_area > max_cover or shared / float(self.areas[j]) > max_cover:
            return False, None
        return True, j


class PlacementSolver:
    """Scatters items inside a square world. See module docstring for rules."""

    def __init__(self, config: LayoutConfig | None = None) -> None:
        self.config = config or LayoutConfig()

    def solve(
        self,
        specs: Sequence[ItemSpec],
        world_size: float,
        rng: SeededRng | None = None,
    ) -> Layout:
        cfg = self.config
        start = time.perf_counter()

        if world_size <= 0:
            return Layout(world_size=world_size)

        exclusion = center_exclusion(world_size, cfg)
        if not specs:
            return Layout(world_size=world_size, exclusion=exclusion)

        rng = rng or SeededRng(cfg.seed)
        occupancy = _Occupancy(len(specs))
        placed: list[tuple[ItemSpec, float, int, int, int, int, float, str]] = []
        dropped: list[str] = []

        for spec in specs:
            ar = resolve_aspect_ratio(spec.aspect_ratio, cfg.default_aspect_ratio)
            tier = pick_tier(rng.next(), cfg.tiers)
            base_w, base_h = fit_to_tier(ar, tier, rng.next())

            # Cosmetic draws happen before placement so they are stable per item
            rotation = float(round_half_up((rng.next() - 0.5) * 2 * cfg.max_rotation_deg))
            shade = cfg.shades[int(rng.next() * len(cfg.shades))] if cfg.shades else ""

            placement = None
            for step in cfg.shrink_steps:
                w, h = shrink_size(base_w, base_h, step, cfg.min_shrunk_w, cfg.min_shrunk_h)
                placement = self._find_placement(w, h, cfg.max_attempts, world_size, exclusion, occupancy, rng)
                if placement is not None:
                    break
                logger.debug("%s: no slot at %dx%d (x%.2f)", spec.id, w, h, step)

            if placement is None:
                fw, fh = fit_to_box(ar, cfg.fallback_w, cfg.fallback_h)
                placement = self._find_placement(
                    fw, fh, cfg.max_attempts * cfg.fallback_attempt_factor,
                    world_size, exclusion, occupancy, rng,
                )

            if placement is None:
                dropped.append(spec.id)
                logger.warning("Dropped %s: no valid position within attempt budget", spec.id)
                continue

            x, y, w, h, partner = placement
            occupancy.add(
                rect(x, y, w, h),
                rect(x, y + h + cfg.caption_gap, w, cfg.caption_height),
                partner,
            )
            placed.append((spec, ar, x, y, w, h, rotation, shade))

        items: list[PlacedItem] = []
        for i, (spec, ar, x, y, w, h, rotation, shade) in enumerate(placed):
            p = occupancy.partner[i]
            items.append(PlacedItem(
                id=spec.id,
                x=x,
                y=y,
                w=w,
                h=h,
                rotation=rotation,
                shade=shade,
                aspect_ratio=ar,
                partner=placed[p][0].id if p is not None else None,
                src=spec.src,
                directory=spec.directory,
                folder=spec.folder,
                order=spec.order,
                caption_gap=cfg.caption_gap,
                caption_height=cfg.caption_height,
            ))

        elapsed = (time.perf_counter() - start) * 1000
        logger.info(
            "Layout: %d/%d items placed in %.0fms (%d dropped)",
            len(items),
            len(specs),
            elapsed,
            len(dropped),
        )
        return Layout(
            world_size=world_size,
            items=items,
            dropped=dropped,
            exclusion=exclusion,
            elapsed_ms=round(elapsed, 1),
        )

    def _sample(self, w: int, total_h: float, world_size: float, rng: SeededRng) -> tuple[int, int]:
        cfg = self.config
        margin = cfg.margin

        if rng.next() >= cfg.ring_probability:
            return (
                round_half_up(margin + rng.next() * (world_size - margin * 2 - w)),
                round_half_up(margin + rng.next() * (world_size - margin * 2 - total_h)),
            )

        cx = cy = world_size / 2
        ang = rng.next() * math.pi * 2
        # Bias radius toward the inner edge so tiles cluster around the title
        r = rng.next() ** cfg.ring_bias_exponent * (cfg.ring_max_radius - cfg.ring_min_radius) + cfg.ring_min_radius
        raw_x = cx + math.cos(ang) * r - w / 2
        raw_y = cy + math.sin(ang) * r - total_h / 2
        return (
            round_half_up(clamp(raw_x, margin, world_size - margin - w)),
            round_half_up(clamp(raw_y, margin, world_size - margin - total_h)),
        )

    def _find_placement(
        self,
        w: int,
        h: int,
        attempts: int,
        world_size: float,
        exclusion: Bounds,
        occupancy: _Occupancy,
        rng: SeededRng,
    ) -> tuple[int, int, int, int, int | None] | None:
        cfg = self.config
        total_h = h + cfg.caption_strip
        usable = world_size - cfg.margin * 2
        if w > usable or total_h > usable:
            return None

        for _ in range(attempts):
            x, y = self._sample(w, total_h, world_size, rng)
            if overlap_area(rect(x, y, w, total_h), exclusion) > 0:
                continue
            ok, partner = occupancy.check(
                rect(x, y, w, h),
                rect(x, y + h + cfg.caption_gap, w, cfg.caption_height),
                cfg.max_cover_ratio,
            )
            if ok:
                return x, y, w, h, partner
        return None


def solve(
    specs: Sequence[ItemSpec],
    world_size: float,
    config: LayoutConfig | None = None,
    rng: SeededRng | None = None,
) -> Layout:
    """Convenience wrapper around ``PlacementSolver.solve``."""
    return PlacementSolver(config).solve(specs, world_size, rng=rng)


def placeholder_layout(world_size: float, config: PlaceholderConfig | None = None) -> Layout:
    """Skeleton tiles for the loading state. Uniform scatter, no overlap rules."""
    cfg = config or PlaceholderConfig()
    layout_cfg = LayoutConfig()
    if world_size <= 0:
        return Layout(world_size=world_size)

    rng = SeededRng(cfg.seed)
    items: list[PlacedItem] = []
    strip = layout_cfg.caption_strip
    for i in range(cfg.count):
        w = round_half_up(cfg.min_w + rng.next() * cfg.span_w)
        h = round_half_up(cfg.min_h + rng.next() * cfg.span_h)
        x = round_half_up(cfg.margin + rng.next() * (world_size - cfg.margin * 2 - w))
        y = round_half_up(cfg.margin + rng.next() * (world_size - cfg.margin * 2 - (h + strip)))
        rotation = float(round_half_up((rng.next() - 0.5) * 2 * layout_cfg.max_rotation_deg))
        shade = layout_cfg.shades[int(rng.next() * len(layout_cfg.shades))]
        items.append(PlacedItem(
            id=f"placeholder-{i}",
            x=x,
            y=y,
            w=w,
            h=h,
            rotation=rotation,
            shade=shade,
            aspect_ratio=w / h,
            folder="Loading",
            order=i + 1,
        ))
    return Layout(world_size=world_size, items=items, exclusion=center_exclusion(world_size, layout_cfg))
