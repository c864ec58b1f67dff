"""Tests for the SVG layout preview."""

import xml.etree.ElementTree as ET

from gallery.engine.items import Layout
from gallery.engine.preview import render_layout_svg
from tests.conftest import make_item

SVG_NS = "{http://www.w3.org/2000/svg}"


def test_preview_is_valid_svg(dense_layout):
    svg = render_layout_svg(dense_layout, title="main")
    root = ET.fromstring(svg)
    assert root.tag == f"{SVG_NS}svg"
    assert root.get("viewBox") == "0 0 8000.0 8000.0"
    assert root.get("width") == "1000.0"
    tiles = [p for p in root.iter(f"{SVG_NS}path") if p.get("data-id")]
    assert len(tiles) == len(dense_layout.items)


def test_preview_draws_exclusion_and_captions():
    layout = Layout(
        world_size=8000.0,
        items=[make_item("a.jpg", 100, 100, 200, 150, shade="bg-blue-950")],
        exclusion=(3350.0, 3780.0, 4650.0, 4220.0),
    )
    root = ET.fromstring(render_layout_svg(layout))
    fills = [p.get("fill") for p in root.iter(f"{SVG_NS}path")]
    assert fills == ["#e94560", "#172554", "#f0a500"]


def test_preview_marks_partner_overlap_once():
    bare = {"caption_gap": 0.0, "caption_height": 0.0}
    layout = Layout(
        world_size=8000.0,
        items=[
            make_item("a.jpg", 1000, 1000, 200, 200, partner="b.jpg", **bare),
            make_item("b.jpg", 1190, 1000, 200, 200, partner="a.jpg", **bare),
        ],
    )
    svg = render_layout_svg(layout)
    assert svg.count('fill="#42d4f4"') == 1


def test_preview_escapes_title_and_ids():
    layout = Layout(world_size=2600.0, items=[make_item('x"<y>.jpg', 100, 100, 200, 150)])
    svg = render_layout_svg(layout, title="Art & <Photos>")
    root = ET.fromstring(svg)
    assert root.find(f"{SVG_NS}title").text == "Art & <Photos>"
    assert [p.get("data-id") for p in root.iter(f"{SVG_NS}path") if p.get("data-id")] == ['x"<y>.jpg']
