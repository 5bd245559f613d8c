"""
Utility functions for the pad grid engine
"""

from .colors import (
    hue_to_linear_rgb,
    srgb_to_linear,
    saturate,
)

__all__ = [
    'hue_to_linear_rgb',
    'srgb_to_linear',
    'saturate',
]
