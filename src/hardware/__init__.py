"""
Hardware Layer

Low-level controller I/O only:

- Pad grid sinks (IPadGrid, VirtualPadGrid, Push2PadGrid)
- Status display sinks (IStatusDisplay, LogStatusDisplay)
- Push 2 MIDI transport (rtmidi, imported lazily on open)

"""
from .grid.grid_interface import IPadGrid
from .grid.virtual_grid import VirtualPadGrid
from .display.status_display import IStatusDisplay, LogStatusDisplay

__all__ = [
    "IPadGrid",
    "VirtualPadGrid",
    "IStatusDisplay",
    "LogStatusDisplay",
]
