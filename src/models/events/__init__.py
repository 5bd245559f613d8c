"""
Event system for the pad grid engine

Controller input arrives as typed events, is queued by the transport thread
and published on the EventBus once per tick by the frame loop.
"""

from models.events.types import EventType
from models.events.base import Event
from models.events.sources import EventSource

from models.events.control import (
    KnobTurnEvent,
    KnobTouchEvent,
    PadPressEvent,
    PadReleaseEvent,
    ModeToggleEvent,
    UnhandledControlEvent,
)

__all__ = [
    "EventType",
    "Event",
    "EventSource",

    "KnobTurnEvent",
    "KnobTouchEvent",
    "PadPressEvent",
    "PadReleaseEvent",
    "ModeToggleEvent",
    "UnhandledControlEvent",
]
