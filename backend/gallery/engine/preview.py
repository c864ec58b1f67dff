"""SVG preview of a solved layout, for debugging placement.

Tiles, caption strips, the center exclusion box and tile-pair overlaps are
drawn as plain SVG paths built from Shapely geometry. No rendering deps.
"""

from __future__ import annotations

from html import escape

from shapely.geometry import Polygon, box

from gallery.engine.items import Layout

# Tailwind shade classes → preview fill
_SHADE_COLORS = {
    "bg-red-950": "#450a0a",
    "bg-slate-900": "#0f172a",
    "bg-neutral-900": "#171717",
    "bg-stone-500": "#78716c",
    "bg-blue-950": "#172554",
}
_DEFAULT_FILL = "#27272a"
_CAPTION_FILL = "#f0a500"
_EXCLUSION_FILL = "#e94560"
_OVERLAP_FILL = "#42d4f4"


def _polygon_to_svg_path(
    poly: Polygon,
    fill: str = "#888888",
    opacity: float = 0.7,
    extra: str = "",
) -> str:
    if poly.is_empty or poly.area <= 0:
        return ""
    coords = list(poly.exterior.coords)
    d = f"M {coords[0][0]:.1f},{coords[0][1]:.1f}"
    for x, y in coords[1:]:
        d += f" L {x:.1f},{y:.1f}"
    d += " Z"
    return f'<path d="{d}" fill="{fill}" fill-opacity="{opacity}"{extra}/>'


def _svg_wrap(content: str, size: float, title: str) -> str:
    return (
        f'<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 {size:.1f} {size:.1f}"'
        f' width="{size / 8:.1f}" height="{size / 8:.1f}"'
        ' style="background:#fef2f2">'
        f"\n<title>{escape(title)}</title>"
        f"\n{content}\n</svg>"
    )


def render_layout_svg(layout: Layout, title: str = "layout") -> str:
    """Standalone SVG document of ``layout`` at 1/8 scale."""
    parts: list[str] = []

    if layout.exclusion[2] > layout.exclusion[0]:
        parts.append(_polygon_to_svg_path(box(*layout.exclusion), fill=_EXCLUSION_FILL, opacity=0.15))

    by_id = {it.id: it for it in layout.items}
    for it in layout.items:
        fill = _SHADE_COLORS.get(it.shade, _DEFAULT_FILL)
        parts.append(_polygon_to_svg_path(
            box(*it.tile),
            fill=fill,
            opacity=0.75,
            extra=f' data-id="{escape(it.id, quote=True)}"',
        ))
        parts.append(_polygon_to_svg_path(box(*it.caption), fill=_CAPTION_FILL, opacity=0.5))

    # Each overlapping pair once
    for it in layout.items:
        other = by_id.get(it.partner) if it.partner else None
        if other is None or other.id < it.id:
            continue
        shared = box(*it.tile).intersection(box(*other.tile))
        if isinstance(shared, Polygon):
            parts.append(_polygon_to_svg_path(shared, fill=_OVERLAP_FILL, opacity=0.9))

    return _svg_wrap("\n".join(p for p in parts if p), layout.world_size, title)
