from enum import Enum, auto


class EventType(Enum):
    # Controller input
    KNOB_TURN = auto()
    KNOB_TOUCH = auto()
    PAD_PRESS = auto()
    PAD_RELEASE = auto()
    MODE_TOGGLE = auto()

    # Decoded but not mapped to any engine action (diagnostics only)
    UNHANDLED = auto()
