"""Photo inventory — enumerate image files and read their display size.

Thin boundary adapter: the engine only needs an ordered list of records with
optional pixel sizes. Sizes come from Pillow (header only, no decode), with
EXIF orientations 5-8 swapping width and height the way browsers display them.
"""

from __future__ import annotations

import logging
import threading
import warnings
from collections.abc import Iterable
from pathlib import Path
from urllib.parse import quote

from PIL import Image, UnidentifiedImageError

from gallery.engine.items import ItemSpec
from gallery.models.photo import PhotoRecord

logger = logging.getLogger(__name__)

ALLOWED_EXT = {".jpg", ".jpeg", ".png", ".webp", ".gif"}

_EXIF_ORIENTATION = 0x0112
_ROTATED_ORIENTATIONS = {5, 6, 7, 8}

# Pillow's pixel limit is process-wide; only one header read lifts it at a time
_PIXEL_LIMIT_LOCK = threading.Lock()


def read_image_size(path: Path) -> tuple[int, int] | None:
    """Displayed (width, height), or None if the header can't be read."""
    try:
        with _PIXEL_LIMIT_LOCK, warnings.catch_warnings():
            warnings.simplefilter("ignore", Image.DecompressionBombWarning)
            limit = Image.MAX_IMAGE_PIXELS
            Image.MAX_IMAGE_PIXELS = None
            try:
                with Image.open(path) as img:
                    width, height = img.size
                    orientation = img.getexif().get(_EXIF_ORIENTATION)
            finally:
                Image.MAX_IMAGE_PIXELS = limit
    except (OSError, UnidentifiedImageError, ValueError, Image.DecompressionBombError) as e:
        logger.debug("No size for %s: %s", path, e)
        return None
    if not width or not height:
        return None
    if orientation in _ROTATED_ORIENTATIONS:
        return height, width
    return width, height


def scan_photos(root: str | Path, url_prefix: str = "/photos") -> list[PhotoRecord]:
    """All images under ``root``, ordered by directory then file name."""
    root = Path(root)
    if not root.is_dir():
        logger.warning("Photo root %s does not exist", root)
        return []

    found: list[tuple[str, str, Path]] = []
    for path in root.rglob("*"):
        if not path.is_file() or path.suffix.lower() not in ALLOWED_EXT:
            continue
        rel_dir = path.parent.relative_to(root).as_posix()
        found.append(("" if rel_dir == "." else rel_dir, path.name, path))

    found.sort(key=lambda f: (f[0].lower(), f[1].lower()))

    order_by_dir: dict[str, int] = {}
    records: list[PhotoRecord] = []
    prefix = url_prefix.rstrip("/")
    for directory, name, path in found:
        order = order_by_dir.get(directory, 0) + 1
        order_by_dir[directory] = order
        size = read_image_size(path)
        rel = f"{directory}/{name}" if directory else name
        records.append(PhotoRecord(
            src=f"{prefix}/{quote(rel)}",
            directory=directory,
            folder=directory.split("/")[-1] if directory else "Photos",
            order=order,
            file=name,
            width=size[0] if size else None,
            height=size[1] if size else None,
        ))

    logger.info("Inventory: %d photos under %s", len(records), root)
    return records


def to_item_specs(records: Iterable[PhotoRecord], filter_directory: str | None = None) -> list[ItemSpec]:
    """Solver input from inventory records, optionally limited to one directory."""
    return [
        ItemSpec(
            id=f"{r.directory}/{r.file}" if r.directory else r.file,
            aspect_ratio=r.aspect_ratio,
            src=r.src,
            directory=r.directory,
            folder=r.folder,
            order=r.order,
        )
        for r in records
        if not filter_directory or r.directory == filter_directory
    ]
