"""Canvas view — one frame at a time: controller → wrapped transform → culler.

The view owns the motion controller and a cached cull result. The render
offset is only republished (and the culler re-run) once the camera moved more
than a sub-pixel epsilon, so idle frames cost nothing.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from gallery.engine.config import CullConfig, MotionConfig
from gallery.engine.culler import count_visible, cull_visible, hit_test
from gallery.engine.items import Layout, PlacedItem
from gallery.engine.motion import MotionController, MotionPhase
from gallery.engine.world import World, responsive_scale

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Frame:
    """Everything the presentation layer needs for one frame."""

    transform: tuple[float, float]
    scale: float
    visible: dict[str, list[PlacedItem]] = field(default_factory=dict)
    show_recenter: bool = False
    selected: PlacedItem | None = None
    phase: MotionPhase = MotionPhase.IDLE
    republished: bool = False

    @property
    def visible_count(self) -> int:
        return count_visible(self.visible)


class CanvasView:
    """Drives one canvas. A layout with no world (size 0) yields empty frames."""

    def __init__(
        self,
        layout: Layout,
        viewport_w: float,
        viewport_h: float,
        motion_config: MotionConfig | None = None,
        cull_config: CullConfig | None = None,
    ) -> None:
        self.layout = layout
        self.motion_config = motion_config or MotionConfig()
        self.cull_config = cull_config or CullConfig()
        self._viewport = (viewport_w, viewport_h)
        self.controller = self._make_controller(layout.world_size)
        self.selected: PlacedItem | None = None
        self._render_offset = self._display_offset()
        self._visible = self._cull()

    def _make_controller(self, world_size: float) -> MotionController | None:
        if world_size <= 0:
            logger.debug("Empty world, camera disabled")
            return None
        w, h = self._viewport
        return MotionController(World(world_size), w, h, self.motion_config)

    @property
    def viewport(self) -> tuple[float, float]:
        return self._viewport

    @property
    def scale(self) -> float:
        if self.controller is None:
            return responsive_scale(*self._viewport, self.motion_config)
        return self.controller.state.scale

    @property
    def render_offset(self) -> tuple[float, float]:
        return self._render_offset

    def _display_offset(self) -> tuple[float, float]:
        if self.controller is None:
            return (0.0, 0.0)
        return self.controller.display_offset()

    def _cull(self) -> dict[str, list[PlacedItem]]:
        if self.controller is None:
            return {}
        tiles = tuple((tx, ty) for ty in self.cull_config.tile_range for tx in self.cull_config.tile_range)
        return cull_visible(
            self.layout.items,
            self.layout.world_size,
            self._render_offset,
            self.scale,
            self._viewport,
            buffer_px=self.cull_config.buffer_px,
            tiles=tiles,
        )

    def set_layout(self, layout: Layout) -> None:
        """Swap in a recomputed layout. A new world size restarts the camera."""
        if layout.world_size != self.layout.world_size:
            self.controller = self._make_controller(layout.world_size)
            self._render_offset = self._display_offset()
        self.layout = layout
        if self.selected is not None and layout.get_item(self.selected.id) is None:
            self.selected = None
        self._visible = self._cull()

    def resize(self, viewport_w: float, viewport_h: float) -> None:
        self._viewport = (viewport_w, viewport_h)
        if self.controller is not None:
            self.controller.resize(viewport_w, viewport_h)
        self._render_offset = self._display_offset()
        self._visible = self._cull()

    def tick(self, now: float) -> Frame:
        if self.controller is None:
            return Frame(transform=(0.0, 0.0), scale=self.scale, selected=self.selected)
        snap = self.controller.tick(now)
        eps = self.controller.config.republish_epsilon
        dx = abs(snap.display[0] - self._render_offset[0])
        dy = abs(snap.display[1] - self._render_offset[1])
        republished = dx >= eps or dy >= eps
        if republished:
            self._render_offset = snap.display
            self._visible = self._cull()
        return Frame(
            transform=snap.display,
            scale=snap.scale,
            visible=self._visible,
            show_recenter=snap.show_recenter,
            selected=self.selected,
            phase=snap.phase,
            republished=republished,
        )

    # ── Selection ──

    def select(self, item_id: str, now: float) -> bool:
        """Tap on a tile. Ignored right after a drag and for placeholders."""
        if self.controller is None or not self.controller.click_allowed(now):
            return False
        item = self.layout.get_item(item_id)
        if item is None or item.is_placeholder:
            return False
        self.selected = item
        logger.debug("Selected %s", item.id)
        return True

    def select_at(self, x: float, y: float, now: float) -> PlacedItem | None:
        """Tap at a screen point; hit-tests against the drawn transform."""
        if self.controller is None:
            return None
        item = hit_test(
            self.layout.items,
            self.layout.world_size,
            self.controller.display_offset(),
            self.scale,
            (x, y),
        )
        if item is not None and self.select(item.id, now):
            return item
        return None

    def clear_selection(self) -> None:
        self.selected = None
