"""
FrameLoop shutdown handler.

Stops the render loop first so no tick runs against closed hardware; the
loop's stop() performs the final save of the parameter table.
"""

from __future__ import annotations

from engine.frame_loop import FrameLoop
from lifecycle.shutdown_protocol import IShutdownHandler
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.LIFECYCLE)


class FrameLoopShutdownHandler(IShutdownHandler):

    def __init__(self, frame_loop: FrameLoop):
        self.frame_loop = frame_loop

    @property
    def shutdown_priority(self) -> int:
        return 120

    async def shutdown(self) -> None:
        log.info("Stopping frame loop...")
        await self.frame_loop.stop()
