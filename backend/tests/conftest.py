"""Shared test fixtures."""

from __future__ import annotations

import struct
import zlib
from pathlib import Path

import pytest
from PIL import Image

from gallery.engine.items import ItemSpec, PlacedItem
from gallery.engine.solver import solve
from gallery.models.photo import PhotoRecord


# Mix of landscape, portrait, square, panoramic and missing ratios
ASPECT_CYCLE = [4 / 3, 3 / 2, 2 / 3, 1.0, 16 / 9, 3 / 4, None, 5 / 4, 9 / 16, 2.4]


def make_specs(count: int) -> list[ItemSpec]:
    return [
        ItemSpec(
            id=f"photo-{i:03d}.jpg",
            aspect_ratio=ASPECT_CYCLE[i % len(ASPECT_CYCLE)],
            src=f"/photos/photo-{i:03d}.jpg",
            folder="Photos",
            order=i + 1,
        )
        for i in range(count)
    ]


def write_image(path: Path, size: tuple[int, int], orientation: int | None = None) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    img = Image.new("RGB", size, (120, 40, 40))
    if orientation is not None:
        exif = Image.Exif()
        exif[0x0112] = orientation
        img.save(path, exif=exif.tobytes())
    else:
        img.save(path)
    return path


def write_oversized_png(path: Path, size: tuple[int, int]) -> Path:
    """A tiny PNG whose IHDR claims ``size``. Only the header is valid."""
    write_image(path, (2, 2))
    data = bytearray(path.read_bytes())
    data[16:24] = struct.pack(">II", *size)
    data[29:33] = struct.pack(">I", zlib.crc32(bytes(data[12:29])))
    path.write_bytes(bytes(data))
    return path


def make_item(item_id: str, x: float, y: float, w: float, h: float, **kwargs) -> PlacedItem:
    return PlacedItem(
        id=item_id,
        x=x,
        y=y,
        w=w,
        h=h,
        aspect_ratio=kwargs.pop("aspect_ratio", w / h),
        src=kwargs.pop("src", f"/photos/{item_id}"),
        **kwargs,
    )


RECORDS = [
    PhotoRecord(src="/photos/Art/Analog/a.jpg", directory="Art/Analog", folder="Analog", order=1, file="a.jpg", width=1600, height=1200),
    PhotoRecord(src="/photos/Art/Analog/b.jpg", directory="Art/Analog", folder="Analog", order=2, file="b.jpg", width=1080, height=1350),
    PhotoRecord(src="/photos/Art/Digital/c.png", directory="Art/Digital", folder="Digital", order=1, file="c.png", width=None, height=None),
    PhotoRecord(src="/photos/d.webp", directory="", folder="Photos", order=1, file="d.webp", width=1920, height=1080),
]


@pytest.fixture(scope="session")
def dense_layout():
    """160 items at the default world size, the busy main canvas."""
    return solve(make_specs(160), 8000)


@pytest.fixture
def records() -> list[PhotoRecord]:
    return list(RECORDS)
