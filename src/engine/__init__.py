"""
Engine: entity compositor and the fixed-rate frame loop that drives it.
"""

from .compositor import Compositor
from .frame_loop import FrameLoop

__all__ = ["Compositor", "FrameLoop"]
