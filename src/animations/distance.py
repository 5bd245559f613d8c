"""
Distance metrics between two pad cells

Used by spatially-gated animations (Ripple, Stream). Rook and Bishop return
UNREACHABLE_DISTANCE for cells not on a shared line, which every consumer
treats as "out of range".
"""

import math
from enum import Enum

# Larger than the 8x8 grid diagonal (~9.9) and than any animation radius
UNREACHABLE_DISTANCE = 1024.0

# Selector values are taken modulo 6 while only 5 metrics exist;
# selector 5 falls back to Euclidean.
DISTANCE_SELECTOR_MODULUS = 6


class DistanceMetric(Enum):
    EUCLIDEAN = 0
    CHEBYSHEV = 1
    MANHATTAN = 2
    ROOK = 3
    BISHOP = 4

    @classmethod
    def from_selector(cls, selector: int) -> 'DistanceMetric':
        """
        Resolve a (possibly negative or out-of-range) selector.

        Example:
            DistanceMetric.from_selector(3)   # ROOK
            DistanceMetric.from_selector(5)   # EUCLIDEAN (reserved slot)
            DistanceMetric.from_selector(-1)  # EUCLIDEAN (-1 % 6 == 5)
        """
        index = selector % DISTANCE_SELECTOR_MODULUS
        if index < len(cls):
            return list(cls)[index]
        return cls.EUCLIDEAN

    def evaluate(self, origin_x: int, origin_y: int, target_x: int, target_y: int) -> float:
        """Scalar distance from origin to target under this metric"""
        dx = abs(target_x - origin_x)
        dy = abs(target_y - origin_y)

        if self is DistanceMetric.EUCLIDEAN:
            return math.hypot(dx, dy)
        elif self is DistanceMetric.CHEBYSHEV:
            return float(max(dx, dy))
        elif self is DistanceMetric.MANHATTAN:
            return float(dx + dy)
        elif self is DistanceMetric.ROOK:
            if dx == 0 or dy == 0:
                return float(dx + dy)
            return UNREACHABLE_DISTANCE
        elif self is DistanceMetric.BISHOP:
            if dx == dy:
                return float(dx)
            return UNREACHABLE_DISTANCE

        raise ValueError(f"Unhandled distance metric: {self}")
