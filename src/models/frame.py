"""
GridFrame - one tone-mapped 8x8 frame handed to the pad sink per tick.
"""

import time
from dataclasses import dataclass, field
from typing import Iterator, List, Tuple

from models.color import Color
from models.enums import FrameSource
from models.grid import GRID_SIZE, PAD_COUNT, GridCell


@dataclass
class GridFrame:
    """
    Pixels in pad-index order (index = x + 8 * y), already saturated.

    Attributes:
        tick: Tick the frame was rendered at
        source: ENTITIES or PREVIEW (assigning mode)
        pixels: 64 colors in 0-1 range
        active_hue: Hue of the pad selected for editing (hue knob LED)
    """

    tick: float
    source: FrameSource
    pixels: List[Color] = field(default_factory=lambda: [Color.black()] * PAD_COUNT)
    active_hue: float = 0.0
    timestamp: float = field(default_factory=time.time)

    def get(self, x: int, y: int) -> Color:
        return self.pixels[x + y * GRID_SIZE]

    def __getitem__(self, cell: GridCell) -> Color:
        return self.get(cell.x, cell.y)

    def items(self) -> Iterator[Tuple[GridCell, Color]]:
        for index, color in enumerate(self.pixels):
            yield GridCell.from_pad_index(index), color

    def to_rgb8(self) -> List[Tuple[int, int, int]]:
        return [c.to_rgb8() for c in self.pixels]
