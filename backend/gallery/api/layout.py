"""POST /api/layout — solve a collage layout for the photo inventory."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response

from gallery.api.serializers import bounds_to_out, item_to_out
from gallery.config import Settings
from gallery.dependencies import get_photo_records, get_settings
from gallery.engine.audit import audit_layout
from gallery.engine.config import LayoutConfig, PlaceholderConfig
from gallery.engine.items import Layout
from gallery.engine.preview import render_layout_svg
from gallery.engine.solver import PlacementSolver, placeholder_layout
from gallery.inventory import to_item_specs
from gallery.models.photo import PhotoRecord
from gallery.models.requests import LayoutRequest
from gallery.models.responses import LayoutResponse

router = APIRouter(prefix="/layout")


def build_layout(
    req: LayoutRequest,
    records: list[PhotoRecord],
    settings: Settings,
) -> tuple[Layout, LayoutConfig]:
    """Filter, size the world, solve, and attach the center text."""
    if req.world_size is not None:
        world_size = req.world_size
    elif req.filter_directory:
        world_size = settings.category_world_size
    else:
        world_size = settings.default_world_size

    config = LayoutConfig(seed=req.seed if req.seed is not None else settings.layout_seed)
    specs = to_item_specs(records, req.filter_directory)
    layout = PlacementSolver(config).solve(specs, world_size)

    if req.center_title is not None:
        layout.center_title = req.center_title
    elif req.filter_directory:
        layout.center_title = req.filter_directory.split("/")[-1] or "Photos"
    else:
        layout.center_title = settings.center_title
    layout.center_subtitle = (
        req.center_subtitle if req.center_subtitle is not None else settings.center_subtitle
    )
    return layout, config


def _to_response(layout: Layout, violations: int = 0) -> LayoutResponse:
    return LayoutResponse(
        world_size=layout.world_size,
        items=[item_to_out(it) for it in layout.items],
        dropped=layout.dropped,
        violations=violations,
        exclusion=bounds_to_out(layout.exclusion),
        center_title=layout.center_title,
        center_subtitle=layout.center_subtitle,
        processing_time_ms=layout.elapsed_ms,
    )


@router.post("", response_model=LayoutResponse)
async def solve_layout(
    req: LayoutRequest,
    records: list[PhotoRecord] = Depends(get_photo_records),
    settings: Settings = Depends(get_settings),
) -> LayoutResponse:
    layout, config = build_layout(req, records, settings)
    violations = audit_layout(layout, config)
    return _to_response(layout, len(violations))


@router.get("/placeholder", response_model=LayoutResponse)
async def loading_layout(
    world_size: float | None = Query(default=None, gt=0),
    settings: Settings = Depends(get_settings),
) -> LayoutResponse:
    """Skeleton tiles shown while the inventory loads."""
    size = world_size if world_size is not None else settings.default_world_size
    layout = placeholder_layout(size, PlaceholderConfig(seed=settings.placeholder_seed))
    layout.center_title = settings.center_title
    layout.center_subtitle = settings.center_subtitle
    return _to_response(layout)


@router.post("/preview")
async def preview_layout(
    req: LayoutRequest,
    records: list[PhotoRecord] = Depends(get_photo_records),
    settings: Settings = Depends(get_settings),
) -> Response:
    layout, _ = build_layout(req, records, settings)
    svg = render_layout_svg(layout, title=layout.center_title)
    return Response(content=svg, media_type="image/svg+xml")
