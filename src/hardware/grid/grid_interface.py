# hardware/grid/grid_interface.py
"""
IPadGrid Protocol
=================
Hardware abstraction for the 8x8 pad grid.
Minimal contract for any pad transport (Push 2 palette SysEx, virtual buffer).
"""

from __future__ import annotations
from typing import Protocol, List
from models.color import Color
from models.frame import GridFrame


class IPadGrid(Protocol):
    """
    Protocol defining the pad grid sink.

    All implementations must provide:
    - pad_count: number of pads
    - apply_frame: push a full tone-mapped frame (one call per tick)
    - get_frame: read back the last pushed pixels
    - clear: turn off all pads
    """

    @property
    def pad_count(self) -> int:
        ...

    def apply_frame(self, frame: GridFrame) -> None:
        """Push all 64 pad colors (values 0-1, pad-index order)."""
        ...

    def get_frame(self) -> List[Color]:
        ...

    def clear(self) -> None:
        ...
