"""Leaf-node geometry helpers. No engine imports.

Rectangles are axis-aligned bounds tuples (xmin, ymin, xmax, ymax).
"""

from __future__ import annotations

import math

Bounds = tuple[float, float, float, float]


def rect(x: float, y: float, w: float, h: float) -> Bounds:
    """Bounds from a top-left corner and a size."""
    return (x, y, x + w, y + h)


def overlap_area(a: Bounds, b: Bounds) -> float:
    """Intersection area of two bounds. Touching edges count as zero."""
    x_overlap = max(0.0, min(a[2], b[2]) - max(a[0], b[0]))
    y_overlap = max(0.0, min(a[3], b[3]) - max(a[1], b[1]))
    return x_overlap * y_overlap


def clamp(v: float, lo: float, hi: float) -> float:
    return min(hi, max(lo, v))


def round_half_up(v: float) -> int:
    """Round .5 toward +inf so layouts don't depend on banker's rounding."""
    return math.floor(v + 0.5)


def wrap_translate(v: float, period: float) -> float:
    """Reduce a translate into (-period, 0].

    ``period`` is the tile size in screen pixels (world size after scaling).
    """
    if period <= 0:
        raise ValueError(f"period must be positive, got {period}")
    m = ((v % period) + period) % period  # [0, period)
    return m - period if m > 0 else 0.0


def wrap_delta(delta: float, period: float) -> float:
    """Smallest signed delta on a wrapping axis of length ``period``.

    Result lies in [-period/2, period/2).
    """
    if period <= 0:
        raise ValueError(f"period must be positive, got {period}")
    return ((delta + period / 2) % period) - period / 2


def ease_out_cubic(t: float) -> float:
    t = clamp(t, 0.0, 1.0)
    return 1 - (1 - t) ** 3
