from .frame_loop_shutdown_handler import FrameLoopShutdownHandler
from .grid_shutdown_handler import GridShutdownHandler

__all__ = [
    "FrameLoopShutdownHandler",
    "GridShutdownHandler",
]
