"""
Color conversion utilities

Pure functions for HSV → linear-light RGB conversion used by entity colors,
plus the tone-mapping curve applied to accumulated pad colors.
"""

import colorsys
import math
from typing import Tuple

# Entity colors are fully saturated at half value
ENTITY_SATURATION = 1.0
ENTITY_VALUE = 0.5

# Largest argument math.exp() accepts without OverflowError
MAX_EXP_ARG = 709.0


def srgb_to_linear(c: float) -> float:
    """
    Decode one sRGB-encoded channel (0-1) to linear light.

    Example:
        srgb_to_linear(0.5)  # ≈ 0.214
    """
    if c <= 0.04045:
        return c / 12.92
    return ((c + 0.055) / 1.055) ** 2.4


def hue_to_linear_rgb(
    hue: float,
    saturation: float = ENTITY_SATURATION,
    value: float = ENTITY_VALUE,
) -> Tuple[float, float, float]:
    """
    Convert an HSV color (hue in degrees, unbounded) to linear RGB floats.

    Hue wraps implicitly: 370° is the same as 10°, -30° the same as 330°.

    Args:
        hue: Hue in degrees (any real)
        saturation: 0-1
        value: 0-1 (sRGB encoded)

    Returns:
        (r, g, b) linear-light floats in 0-1
    """
    h = (hue % 360.0) / 360.0
    r, g, b = colorsys.hsv_to_rgb(h, saturation, value)
    return (srgb_to_linear(r), srgb_to_linear(g), srgb_to_linear(b))


def saturate(x: float) -> float:
    """
    Soft-clip an accumulated channel: [0, ∞) → [0, 1).

    saturate(0) == 0; large inputs approach but never reach 1. Negative
    inputs (a released entity fading past zero) map below 0 without
    overflowing; Color.to_rgb8() clamps them to black. NaN stays NaN.
    """
    return 1.0 - math.exp(min(-x, MAX_EXP_ARG))
