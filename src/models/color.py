"""
Color model - linear-light RGB triple

Entity contributions are summed per pad in linear light, tone-mapped with
saturate(), then quantised to 8 bit for the pad transport.
"""

import math
from dataclasses import dataclass
from typing import Tuple
from utils.colors import hue_to_linear_rgb, saturate


@dataclass(frozen=True)
class Color:
    """
    Immutable linear RGB color with float channels.

    Channels are not clamped: sums of several entities may exceed 1 and
    degenerate parameters may produce negative or NaN values. Clamping
    happens only in to_rgb8().

    Examples:
        red = Color.from_hue(0)
        accum = Color.black() + red * 0.5
        r, g, b = accum.saturated().to_rgb8()
    """

    red: float = 0.0
    green: float = 0.0
    blue: float = 0.0

    # === CONSTRUCTORS ===

    @classmethod
    def from_hue(cls, hue: float) -> 'Color':
        """Create entity color from hue in degrees (S=1, V=0.5)"""
        return cls(*hue_to_linear_rgb(hue))

    @staticmethod
    def black() -> 'Color':
        return Color(0.0, 0.0, 0.0)

    # === ARITHMETIC ===

    def __add__(self, other: 'Color') -> 'Color':
        return Color(self.red + other.red, self.green + other.green, self.blue + other.blue)

    def __mul__(self, k: float) -> 'Color':
        return Color(self.red * k, self.green * k, self.blue * k)

    __rmul__ = __mul__

    # === TONE MAPPING / OUTPUT ===

    def saturated(self) -> 'Color':
        """Apply saturate() to each channel independently"""
        return Color(saturate(self.red), saturate(self.green), saturate(self.blue))

    def to_tuple(self) -> Tuple[float, float, float]:
        return (self.red, self.green, self.blue)

    def to_rgb8(self) -> Tuple[int, int, int]:
        """
        Quantise to 0-255 per channel.

        Out-of-range values are clamped; NaN becomes 0.
        """
        return (_to_byte(self.red), _to_byte(self.green), _to_byte(self.blue))

    def is_black(self) -> bool:
        return self.red == 0.0 and self.green == 0.0 and self.blue == 0.0

    def __str__(self) -> str:
        return f"Color({self.red:.3f}, {self.green:.3f}, {self.blue:.3f})"


def _to_byte(c: float) -> int:
    if math.isnan(c):
        return 0
    return int(round(max(0.0, min(1.0, c)) * 255))
