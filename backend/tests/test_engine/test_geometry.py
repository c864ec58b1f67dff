"""Tests for the geometry helpers: bounds math and wrap arithmetic."""

import pytest

from gallery.engine.geometry import (
    clamp,
    ease_out_cubic,
    overlap_area,
    rect,
    round_half_up,
    wrap_delta,
    wrap_translate,
)

PERIOD = 8000.0
SAMPLES = [-1e7, -16001.5, -8500.0, -8000.0, -300.0, -0.25, 0.0, 0.25, 300.0, 7999.0, 8000.0, 12345.6, 1e7]


def test_rect():
    assert rect(10, 20, 30, 40) == (10, 20, 40, 60)


def test_overlap_area():
    a = rect(0, 0, 100, 100)
    assert overlap_area(a, rect(50, 50, 100, 100)) == 2500
    assert overlap_area(a, rect(100, 0, 50, 50)) == 0  # shared edge
    assert overlap_area(a, rect(300, 300, 10, 10)) == 0


def test_clamp_and_round_half_up():
    assert clamp(5, 0, 3) == 3
    assert clamp(-1, 0, 3) == 0
    assert round_half_up(2.5) == 3
    assert round_half_up(-2.5) == -2
    assert round_half_up(2.49) == 2


class TestWrapTranslate:
    @pytest.mark.parametrize("v", SAMPLES)
    def test_range(self, v):
        w = wrap_translate(v, PERIOD)
        assert -PERIOD < w <= 0

    @pytest.mark.parametrize("v", SAMPLES)
    def test_idempotent(self, v):
        once = wrap_translate(v, PERIOD)
        assert wrap_translate(once, PERIOD) == pytest.approx(once)

    @pytest.mark.parametrize("v", SAMPLES)
    def test_same_class(self, v):
        w = wrap_translate(v, PERIOD)
        k = (v - w) / PERIOD
        assert k == pytest.approx(round(k), abs=1e-6)

    def test_known_values(self):
        assert wrap_translate(-500.0, PERIOD) == -500.0
        assert wrap_translate(-8500.0, PERIOD) == -500.0
        assert wrap_translate(300.0, PERIOD) == -7700.0
        assert wrap_translate(0.0, PERIOD) == 0.0
        assert wrap_translate(-8000.0, PERIOD) == 0.0

    def test_rejects_non_positive_period(self):
        with pytest.raises(ValueError):
            wrap_translate(10, 0)
        with pytest.raises(ValueError):
            wrap_translate(10, -5)


class TestWrapDelta:
    @pytest.mark.parametrize("d", SAMPLES)
    def test_bounded_by_half_period(self, d):
        w = wrap_delta(d, PERIOD)
        assert -PERIOD / 2 <= w < PERIOD / 2

    def test_prefers_short_way_round(self):
        assert wrap_delta(7000.0, PERIOD) == -1000.0
        assert wrap_delta(-7000.0, PERIOD) == 1000.0
        assert wrap_delta(300.0, PERIOD) == 300.0

    def test_half_period_maps_to_lower_bound(self):
        assert wrap_delta(4000.0, PERIOD) == -4000.0
        assert wrap_delta(-4000.0, PERIOD) == -4000.0

    def test_rejects_non_positive_period(self):
        with pytest.raises(ValueError):
            wrap_delta(10, 0)


def test_ease_out_cubic():
    assert ease_out_cubic(0.0) == 0.0
    assert ease_out_cubic(1.0) == 1.0
    assert ease_out_cubic(0.5) == pytest.approx(0.875)
    assert ease_out_cubic(2.0) == 1.0
    assert ease_out_cubic(-1.0) == 0.0
