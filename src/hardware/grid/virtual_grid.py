from __future__ import annotations
from typing import List, Optional
from models.color import Color
from models.frame import GridFrame
from models.grid import PAD_COUNT
from hardware.grid.grid_interface import IPadGrid


class VirtualPadGrid(IPadGrid):
    """In-memory pad grid (tests, --virtual runs)"""

    def __init__(self, pad_count: int = PAD_COUNT):
        self._pad_count = pad_count
        self._buffer = [Color.black() for _ in range(pad_count)]
        self.frames_applied = 0
        self.last_frame: Optional[GridFrame] = None

    @property
    def pad_count(self) -> int:
        return self._pad_count

    def apply_frame(self, frame: GridFrame) -> None:
        self._buffer = list(frame.pixels[:self._pad_count])
        self.last_frame = frame
        self.frames_applied += 1

    def get_frame(self) -> List[Color]:
        return self._buffer

    def get_pad(self, index: int) -> Color:
        if 0 <= index < self._pad_count:
            return self._buffer[index]
        return Color.black()

    def clear(self) -> None:
        self._buffer = [Color.black() for _ in range(self._pad_count)]
