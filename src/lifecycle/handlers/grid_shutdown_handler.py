"""
Pad grid shutdown handler.

Blanks the pads and releases the controller transport (if any).
"""

from __future__ import annotations
from typing import Any, Optional

from hardware.grid.grid_interface import IPadGrid
from lifecycle.shutdown_protocol import IShutdownHandler
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.LIFECYCLE)


class GridShutdownHandler(IShutdownHandler):
    """
    Args:
        grid: Pad sink to clear
        device: Optional transport with close() (Push2Device)
    """

    def __init__(self, grid: IPadGrid, device: Optional[Any] = None):
        self.grid = grid
        self.device = device

    @property
    def shutdown_priority(self) -> int:
        return 100

    async def shutdown(self) -> None:
        if self.device is not None:
            # Push2Device.close() clears its own grid before closing ports
            self.device.close()
        else:
            self.grid.clear()
        log.info("Pads cleared")
