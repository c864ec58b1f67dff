"""World geometry — toroidal coordinate space and the 3x3 tiled neighborhood.

A position p and p + k*world_size are the same world location. Rendering
materializes nine copies of the world so content panned off one edge
reappears from the opposite edge. Only the wrapped screen translate is ever
applied to drawable content.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from gallery.engine.config import MotionConfig
from gallery.engine.geometry import clamp, wrap_delta, wrap_translate

TILE_OFFSETS: tuple[tuple[int, int], ...] = tuple(
    (tx, ty) for ty in (-1, 0, 1) for tx in (-1, 0, 1)
)


def tile_key(tx: int, ty: int) -> str:
    return f"{tx},{ty}"


def responsive_scale(viewport_w: float, viewport_h: float, config: MotionConfig | None = None) -> float:
    """Layout zoom derived from the viewport: small screens zoom out a bit."""
    cfg = config or MotionConfig()
    base = min(viewport_w, viewport_h)
    if base <= 0:
        return cfg.scale_max
    return clamp(base / cfg.scale_base, cfg.scale_min, cfg.scale_max)


@dataclass(frozen=True)
class World:
    """Square toroidal world of side ``size`` world units."""

    size: float

    def period(self, scale: float) -> float:
        """Tile size in screen pixels."""
        return self.size * scale

    def wrap_offset(self, x: float, y: float, scale: float) -> tuple[float, float]:
        tile = self.period(scale)
        return wrap_translate(x, tile), wrap_translate(y, tile)

    def center_offset(self, viewport_w: float, viewport_h: float, scale: float) -> tuple[float, float]:
        """Wrapped translate that puts world-center under the viewport center."""
        tile = self.period(scale)
        return (
            wrap_translate(viewport_w / 2 - (self.size / 2) * scale, tile),
            wrap_translate(viewport_h / 2 - (self.size / 2) * scale, tile),
        )

    def shortest_path(
        self,
        current: tuple[float, float],
        desired: tuple[float, float],
        scale: float,
    ) -> tuple[tuple[float, float], tuple[float, float]]:
        """Start/end translates for animating from ``current`` to ``desired``.

        Both ends are expressed relative to the wrapped current offset, and the
        end never lies more than half a tile away on either axis.
        """
        tile = self.period(scale)
        cx = wrap_translate(current[0], tile)
        cy = wrap_translate(current[1], tile)
        dx = wrap_delta(desired[0] - cx, tile)
        dy = wrap_delta(desired[1] - cy, tile)
        return (cx, cy), (cx + dx, cy + dy)

    def view_center_world(
        self,
        display: tuple[float, float],
        viewport_w: float,
        viewport_h: float,
        scale: float,
    ) -> tuple[float, float]:
        """World coordinate under the viewport center, in [0, size)."""
        return (
            ((viewport_w / 2 - display[0]) / scale) % self.size,
            ((viewport_h / 2 - display[1]) / scale) % self.size,
        )

    def distance_from_center(
        self,
        display: tuple[float, float],
        viewport_w: float,
        viewport_h: float,
        scale: float,
    ) -> float:
        """Wrapped distance (screen px) between the view center and world-center."""
        wx, wy = self.view_center_world(display, viewport_w, viewport_h, scale)
        dx = wrap_delta(wx - self.size / 2, self.size)
        dy = wrap_delta(wy - self.size / 2, self.size)
        return math.hypot(dx * scale, dy * scale)
