"""
Enums for the pad grid entity engine
"""

from enum import Enum, auto


class KnobID(Enum):
    """
    Editable EntityConfig fields, one per parameter knob.

    The physical controller number bound to each knob comes from
    config.yaml (controls.knobs), not from this enum.
    """
    HUE = auto()         # hue ±1.0°
    ANIMATION = auto()   # animation selector ±1 (wraps over catalog)
    DURATION = auto()    # duration ×/÷ 1.01
    THICKNESS = auto()   # thickness ×/÷ 1.01
    RATE = auto()        # rate ±0.01
    DISTANCE = auto()    # distance selector ±1


class KnobDirection(Enum):
    """Relative encoder turn direction"""
    CLOCKWISE = 1
    COUNTER_CLOCKWISE = -1


class FrameSource(Enum):
    """Which compositor mode produced a frame"""
    ENTITIES = auto()   # Summed live entity contributions
    PREVIEW = auto()    # Assigning mode: flat hue per assigned pad


class LogLevel(Enum):
    """Log severity levels"""
    DEBUG = auto()
    INFO = auto()
    WARN = auto()
    ERROR = auto()


class LogCategory(Enum):
    """Log categories for grouping related events"""
    CONFIG = auto()         # Configuration loading, validation
    HARDWARE = auto()       # MIDI ports, pad grid, status display
    STATE = auto()          # Parameter table persistence
    ANIMATION = auto()      # Entity spawn/release/retire
    SYSTEM = auto()         # Startup, shutdown, errors
    EVENT = auto()          # Event bus events and handling
    RENDER_ENGINE = auto()  # Frame loop
    LIFECYCLE = auto()

    GENERAL = auto()    # Default general category
