from enum import Enum, auto


class EventSource(Enum):
    """Where a control event came from"""
    HARDWARE = auto()   # Push 2 MIDI input (rtmidi callback thread)
    VIRTUAL = auto()    # Synthesised in-process (tests, --virtual demo)
