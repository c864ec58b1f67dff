"""Layout data — what goes into the solver and what comes out.

ItemSpec   → one photo to place (aspect ratio + display metadata)
PlacedItem → one tile in world space, immutable for the session
Layout     → the full placed set plus the world it was solved for
"""

from __future__ import annotations

from dataclasses import dataclass, field

from gallery.engine.geometry import Bounds, rect


@dataclass(frozen=True)
class ItemSpec:
    """A photo waiting to be placed."""

    id: str
    # width / height; None or non-positive falls back to the default ratio
    aspect_ratio: float | None = None
    src: str = ""
    directory: str = ""
    folder: str = ""
    order: int = 0


@dataclass(frozen=True)
class PlacedItem:
    """A placed photo tile. Position is the top-left corner in world units."""

    id: str
    x: float
    y: float
    w: float
    h: float
    # Decorative tilt in degrees; ignored by all collision math
    rotation: float = 0.0
    shade: str = ""
    aspect_ratio: float = 4 / 3
    # Id of the single tile this one overlaps, if any
    partner: str | None = None
    src: str = ""
    directory: str = ""
    folder: str = ""
    order: int = 0
    caption_gap: float = 10.0
    caption_height: float = 22.0

    @property
    def is_placeholder(self) -> bool:
        return not self.src

    @property
    def tile(self) -> Bounds:
        return rect(self.x, self.y, self.w, self.h)

    @property
    def caption(self) -> Bounds:
        return rect(self.x, self.y + self.h + self.caption_gap, self.w, self.caption_height)

    @property
    def total_height(self) -> float:
        return self.h + self.caption_gap + self.caption_height

    @property
    def footprint(self) -> Bounds:
        """Tile plus caption strip."""
        return rect(self.x, self.y, self.w, self.total_height)


@dataclass
class Layout:
    """Solver output for one (items, world size, config) input."""

    world_size: float
    items: list[PlacedItem] = field(default_factory=list)
    # Ids the solver could not place without breaking a rule
    dropped: list[str] = field(default_factory=list)
    exclusion: Bounds = (0.0, 0.0, 0.0, 0.0)
    center_title: str = ""
    center_subtitle: str = ""
    elapsed_ms: float = 0.0

    @property
    def num_items(self) -> int:
        return len(self.items)

    def get_item(self, item_id: str) -> PlacedItem | None:
        for it in self.items:
            if it.id == item_id:
                return it
        return None
