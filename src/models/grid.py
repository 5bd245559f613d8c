"""Pad grid geometry"""

from typing import Iterator, NamedTuple

GRID_SIZE = 8
PAD_COUNT = GRID_SIZE * GRID_SIZE


class GridCell(NamedTuple):
    """One pad position; x = column, y = row, both 0-7"""
    x: int
    y: int

    @classmethod
    def from_pad_index(cls, index: int) -> 'GridCell':
        """Pad 0 is bottom-left on the controller; rows run upwards"""
        if not 0 <= index < PAD_COUNT:
            raise ValueError(f"Pad index out of range: {index}")
        return cls(index % GRID_SIZE, index // GRID_SIZE)

    @property
    def pad_index(self) -> int:
        return self.x + self.y * GRID_SIZE


def iter_cells() -> Iterator[GridCell]:
    """All cells in pad-index order"""
    for index in range(PAD_COUNT):
        yield GridCell.from_pad_index(index)
