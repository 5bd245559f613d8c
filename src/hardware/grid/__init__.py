from .grid_interface import IPadGrid
from .virtual_grid import VirtualPadGrid

__all__ = [
    "IPadGrid",
    "VirtualPadGrid",
]
