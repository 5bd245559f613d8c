"""
Tests for the animation catalog render formulas.
"""

import math

import pytest

from animations.catalog import ANIMATION_COUNT, AnimationKind
from models.color import Color
from models.entity import Entity
from models.entity_config import EntityConfig
from models.grid import GridCell


def spawn(origin=(0, 0), tick=0, **config) -> Entity:
    return Entity.spawn(EntityConfig(**config), tick, GridCell(*origin))


def assert_color(actual: Color, expected: Color):
    assert actual.to_tuple() == pytest.approx(expected.to_tuple())


class TestAnimationSelection:

    def test_catalog_size(self):
        assert ANIMATION_COUNT == 5

    def test_selector_wraps(self):
        assert AnimationKind.from_selector(5) is AnimationKind.RIPPLE
        assert AnimationKind.from_selector(-1) is AnimationKind.DROP_THE_BASS

    def test_gating_tags(self):
        assert not AnimationKind.RIPPLE.gated
        assert not AnimationKind.CROSS.gated
        assert AnimationKind.VWAVE.gated
        assert AnimationKind.STREAM.gated
        assert AnimationKind.DROP_THE_BASS.gated


class TestRipple:

    def test_origin_lit_at_spawn(self):
        e = spawn(animation=0, hue=0)
        assert_color(e.render(0, GridCell(0, 0)), e.color)

    def test_ring_expands(self):
        e = spawn(animation=0, hue=0)
        # phase 0.5 -> ring radius 6
        assert_color(e.render(7.5, GridCell(6, 0)), e.color)
        assert e.render(7.5, GridCell(0, 0)).red < 1e-6

    def test_rook_metric_leaves_off_axis_cells_dark(self):
        e = spawn(animation=0, distance=3)
        assert e.render(0, GridCell(1, 1)).is_black()


class TestCross:

    def test_off_axis_is_black(self):
        e = spawn(origin=(3, 3), animation=1)
        assert e.render(0, GridCell(4, 4)).is_black()

    def test_arms_travel(self):
        e = spawn(origin=(0, 0), animation=1, hue=120)
        # phase 0.375 * 8 = 3 cells
        assert_color(e.render(5.625, GridCell(3, 0)), e.color)
        assert_color(e.render(5.625, GridCell(0, 3)), e.color)


class TestVWave:

    def test_crest_at_rest(self):
        e = spawn(animation=2, hue=240, rate=0.0)
        assert_color(e.render(0, GridCell(0, 0)), e.color)

    def test_crest_follows_sine(self):
        e = spawn(animation=2, rate=0.0)
        # dx = 2 -> sin(pi/2) * 4 = 4 rows up
        assert_color(e.render(0, GridCell(2, 4)), e.color)
        assert e.render(0, GridCell(2, 0)).red < 1e-6

    def test_released_wave_fades(self):
        e = spawn(animation=2, rate=0.0)
        e.release(5)
        c = e.render(5, GridCell(0, 0))
        assert c.red == pytest.approx(e.color.red * (1 - 5 / 15))


class TestStream:

    def test_origin_at_spawn(self):
        e = spawn(animation=3, hue=60)
        assert_color(e.render(0, GridCell(0, 0)), e.color)

    def test_unreachable_cells_are_black(self):
        e = spawn(animation=3, distance=3)
        assert e.render(0, GridCell(1, 1)).is_black()

    def test_zero_duration_produces_nan_not_exception(self):
        e = spawn(animation=3, duration=0.0)
        c = e.render(0, GridCell(0, 0))
        assert math.isnan(c.red)


class TestDropTheBass:

    def test_glyph_colors_ignore_origin(self):
        a = spawn(origin=(0, 0), animation=4)
        b = spawn(origin=(7, 7), animation=4, thickness=9.0, rate=3.0)
        cell = GridCell(0, 7)
        assert_color(a.render(0, cell), Color.from_hue(300))
        assert_color(b.render(0, cell), Color.from_hue(300))

    def test_letter_hues(self):
        e = spawn(animation=4)
        assert_color(e.render(0, GridCell(4, 7)), Color.from_hue(0))
        assert_color(e.render(0, GridCell(1, 0)), Color.from_hue(240))
        assert_color(e.render(0, GridCell(4, 0)), Color.from_hue(180))

    def test_background_is_black(self):
        e = spawn(animation=4)
        assert e.render(0, GridCell(3, 3)).is_black()
        assert e.render(0, GridCell(7, 7)).is_black()

    def test_fades_after_release(self):
        e = spawn(animation=4)
        e.release(10)
        c = e.render(10, GridCell(0, 7))
        assert c.red == pytest.approx(Color.from_hue(300).red * (1 - 10 / 15))
