"""Controller input events (knobs, pads, assign button)"""

from dataclasses import dataclass
from typing import Optional

from models.enums import KnobDirection
from models.events.base import Event
from models.events.types import EventType
from models.events.sources import EventSource


@dataclass(init=False)
class KnobTurnEvent(Event):
    """Relative encoder turn"""
    knob: int
    direction: KnobDirection

    def __init__(self, knob: int, direction: KnobDirection, source: EventSource = EventSource.HARDWARE):
        """
        Args:
            knob: Controller number of the encoder (bound to a KnobID in config)
            direction: CLOCKWISE or COUNTER_CLOCKWISE
        """
        super().__init__(type=EventType.KNOB_TURN, source=source)
        self.knob = knob
        self.direction = direction


@dataclass(init=False)
class KnobTouchEvent(Event):
    """Capacitive touch on an encoder cap"""
    knob: int
    pressed: bool

    def __init__(self, knob: int, pressed: bool, source: EventSource = EventSource.HARDWARE):
        super().__init__(type=EventType.KNOB_TOUCH, source=source)
        self.knob = knob
        self.pressed = pressed


@dataclass(init=False)
class PadPressEvent(Event):
    """Pad hit; velocity is carried but unused by the engine"""
    pad: int
    velocity: int

    def __init__(self, pad: int, velocity: int = 127, source: EventSource = EventSource.HARDWARE):
        """
        Args:
            pad: Pad index 0-63 (x = pad % 8, y = pad // 8)
            velocity: 1-127
        """
        super().__init__(type=EventType.PAD_PRESS, source=source)
        self.pad = pad
        self.velocity = velocity


@dataclass(init=False)
class PadReleaseEvent(Event):
    pad: int

    def __init__(self, pad: int, source: EventSource = EventSource.HARDWARE):
        super().__init__(type=EventType.PAD_RELEASE, source=source)
        self.pad = pad


@dataclass(init=False)
class ModeToggleEvent(Event):
    """Assign button; the engine flips assigning mode on press"""
    pressed: bool

    def __init__(self, pressed: bool, source: EventSource = EventSource.HARDWARE):
        super().__init__(type=EventType.MODE_TOGGLE, source=source)
        self.pressed = pressed


@dataclass(init=False)
class UnhandledControlEvent(Event):
    """Well-formed controller message with no engine meaning"""
    raw: bytes
    description: Optional[str]

    def __init__(self, raw: bytes, description: Optional[str] = None, source: EventSource = EventSource.HARDWARE):
        super().__init__(type=EventType.UNHANDLED, source=source)
        self.raw = bytes(raw)
        self.description = description
