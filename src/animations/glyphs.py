"""
"DROP" pixel-art overlay used by the DropTheBass animation.

Four 3x4 letters, one per grid quadrant. Coordinates are (x, y) with y = 0
on the bottom pad row, matching GridCell.
"""

from typing import FrozenSet, Tuple

Cell = Tuple[int, int]

GLYPH_D: FrozenSet[Cell] = frozenset([
    (0, 7), (1, 7),
    (0, 6), (2, 6),
    (0, 5), (2, 5),
    (0, 4), (1, 4),
])

GLYPH_R: FrozenSet[Cell] = frozenset([
    (4, 7), (5, 7),
    (4, 6), (6, 6),
    (4, 5), (5, 5),
    (4, 4), (6, 4),
])

GLYPH_O: FrozenSet[Cell] = frozenset([
    (1, 3),
    (0, 2), (2, 2),
    (0, 1), (2, 1),
    (1, 0),
])

GLYPH_P: FrozenSet[Cell] = frozenset([
    (4, 3), (5, 3),
    (4, 2), (6, 2),
    (4, 1), (5, 1),
    (4, 0),
])

# (cells, hue in degrees): magenta, red, blue, cyan
DROP_GLYPHS: Tuple[Tuple[FrozenSet[Cell], float], ...] = (
    (GLYPH_D, 300.0),
    (GLYPH_R, 0.0),
    (GLYPH_O, 240.0),
    (GLYPH_P, 180.0),
)
