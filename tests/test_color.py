"""
Tests for the linear Color model.
"""

import math

import pytest

from models.color import Color


class TestColorFromHue:

    def test_red_hue(self):
        c = Color.from_hue(0)
        assert c.red > 0.0
        assert c.green == 0.0
        assert c.blue == 0.0

    def test_half_value_is_linearised(self):
        # sRGB 0.5 decodes to ~0.214 linear
        assert Color.from_hue(0).red == pytest.approx(0.214, abs=1e-3)

    def test_hue_wraps(self):
        assert Color.from_hue(360) == Color.from_hue(0)
        assert Color.from_hue(-120) == Color.from_hue(240)
        assert Color.from_hue(480) == Color.from_hue(120)


class TestColorArithmetic:

    def test_add_and_scale(self):
        c = Color(0.1, 0.2, 0.3) + Color(0.1, 0.0, 0.1) * 2
        assert c.to_tuple() == (0.1 + 0.2, 0.2, 0.3 + 0.2)

    def test_rmul(self):
        assert 0.5 * Color(1.0, 1.0, 1.0) == Color(0.5, 0.5, 0.5)

    def test_black(self):
        assert Color.black().is_black()
        assert Color.black().saturated().is_black()


class TestColorOutput:

    def test_saturated_is_below_one(self):
        c = Color(5.0, 1.0, 0.0).saturated()
        assert 0.0 < c.green < c.red < 1.0
        assert c.blue == 0.0

    def test_to_rgb8_clamps(self):
        assert Color(2.0, -1.0, 0.5).to_rgb8() == (255, 0, 128)

    def test_to_rgb8_nan_is_zero(self):
        assert Color(math.nan, 1.0, math.nan).to_rgb8() == (0, 255, 0)

    def test_saturate_large_negative_does_not_overflow(self):
        c = Color(-713.0, -1e308, 0.0).saturated()
        assert c.red < 0.0
        assert c.green < 0.0
        assert c.to_rgb8() == (0, 0, 0)

    def test_saturate_keeps_nan(self):
        assert math.isnan(Color(math.nan, 0.0, 0.0).saturated().red)
