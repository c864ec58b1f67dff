"""Tests for viewport culling and hit testing."""

import numpy as np
import pytest
from shapely.geometry import box

from gallery.engine.culler import count_visible, cull_visible, hit_test, screen_bounds
from gallery.engine.world import TILE_OFFSETS, World, tile_key
from tests.conftest import make_item

WORLD_SIZE = 8000.0


def _oracle(items, offset, scale, viewport, buffer_px):
    """Brute-force reference using Shapely (touching boxes intersect)."""
    vw, vh = viewport
    view = box(-buffer_px, -buffer_px, vw + buffer_px, vh + buffer_px)
    out = {}
    for tx, ty in TILE_OFFSETS:
        out[tile_key(tx, ty)] = [
            it.id
            for it in items
            if box(*screen_bounds(it, tx, ty, offset, scale, WORLD_SIZE)).intersects(view)
        ]
    return out


def test_matches_shapely_oracle(dense_layout):
    rng = np.random.default_rng(2024)
    world = World(WORLD_SIZE)
    for _ in range(12):
        scale = float(rng.uniform(0.72, 1.0))
        offset = world.wrap_offset(*map(float, rng.uniform(-2e4, 2e4, size=2)), scale)
        viewport = (float(rng.uniform(320, 1920)), float(rng.uniform(480, 1200)))
        got = cull_visible(dense_layout.items, WORLD_SIZE, offset, scale, viewport)
        expected = _oracle(dense_layout.items, offset, scale, viewport, 500.0)
        assert {k: [it.id for it in v] for k, v in got.items()} == expected


def test_always_nine_tiles(dense_layout):
    visible = cull_visible(dense_layout.items, WORLD_SIZE, (-3360.0, -3600.0), 1.0, (1280, 800))
    assert set(visible) == {tile_key(tx, ty) for tx, ty in TILE_OFFSETS}
    assert 0 < count_visible(visible) < len(dense_layout.items)


def test_empty_items_gives_empty_tiles():
    visible = cull_visible([], WORLD_SIZE, (0.0, 0.0), 1.0, (1280, 800))
    assert len(visible) == 9
    assert count_visible(visible) == 0


@pytest.mark.parametrize("viewport", [(0, 800), (1280, 0), (-5, -5)])
def test_empty_viewport(viewport):
    items = [make_item("a.jpg", 100, 100, 200, 150)]
    assert cull_visible(items, WORLD_SIZE, (0.0, 0.0), 1.0, viewport) == {}


class TestSingleItem:
    item = make_item("a.jpg", 100, 100, 200, 150)

    def _ids(self, offset, buffer_px=0.0):
        visible = cull_visible([self.item], WORLD_SIZE, offset, 1.0, (1000, 800), buffer_px=buffer_px)
        return {k for k, v in visible.items() if v}

    def test_fully_inside(self):
        assert self._ids((0.0, 0.0)) == {"0,0"}

    def test_partially_inside(self):
        # Screen x range is [-150, 50]
        assert self._ids((-250.0, 0.0)) == {"0,0"}

    def test_outside_without_buffer(self):
        assert self._ids((-400.0, 0.0)) == set()

    def test_buffer_pulls_it_in(self):
        assert self._ids((-400.0, 0.0), buffer_px=500.0) == {"0,0"}

    def test_shared_edge_counts(self):
        # Right edge lands exactly on x = 0
        assert self._ids((-300.0, 0.0)) == {"0,0"}

    def test_caption_strip_counts(self):
        # Tile ends at y = -10, caption strip reaches y = 22
        assert self._ids((0.0, -260.0)) == {"0,0"}


def test_item_across_seam_shows_in_neighbor_copy():
    item = make_item("edge.jpg", 7900, 100, 200, 150)
    visible = cull_visible([item], WORLD_SIZE, (0.0, 0.0), 1.0, (1000, 800), buffer_px=0.0)
    assert [it.id for it in visible["-1,0"]] == ["edge.jpg"]
    assert visible["0,0"] == []


class TestHitTest:
    a = make_item("a.jpg", 100, 100, 200, 200, caption_height=22.0)
    b = make_item("b.jpg", 250, 250, 200, 200)

    def test_topmost_wins(self):
        assert hit_test([self.a, self.b], WORLD_SIZE, (0.0, 0.0), 1.0, (260, 260)).id == "b.jpg"
        assert hit_test([self.a, self.b], WORLD_SIZE, (0.0, 0.0), 1.0, (150, 150)).id == "a.jpg"

    def test_caption_is_not_a_hit(self):
        assert hit_test([self.a], WORLD_SIZE, (0.0, 0.0), 1.0, (150, 315)) is None

    def test_miss(self):
        assert hit_test([self.a, self.b], WORLD_SIZE, (0.0, 0.0), 1.0, (900, 900)) is None

    def test_hit_through_seam(self):
        edge = make_item("edge.jpg", 7900, 100, 200, 200)
        assert hit_test([edge], WORLD_SIZE, (0.0, 0.0), 1.0, (50, 150)).id == "edge.jpg"

    def test_respects_scale(self):
        assert hit_test([self.a], WORLD_SIZE, (0.0, 0.0), 0.5, (60, 60)).id == "a.jpg"
        assert hit_test([self.a], WORLD_SIZE, (0.0, 0.0), 0.5, (160, 160)) is None
