"""
Models package - data models for the pad grid engine
"""

from .enums import KnobID, KnobDirection, FrameSource, LogLevel, LogCategory
from .color import Color
from .grid import GridCell, GRID_SIZE, PAD_COUNT
from .entity_config import EntityConfig, DEFAULT_ENTITY_CONFIG

__all__ = [
    'KnobID',
    'KnobDirection',
    'FrameSource',
    'LogLevel',
    'LogCategory',
    'Color',
    'GridCell',
    'GRID_SIZE',
    'PAD_COUNT',
    'EntityConfig',
    'DEFAULT_ENTITY_CONFIG',
]
