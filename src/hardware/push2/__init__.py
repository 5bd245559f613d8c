"""Ableton Push 2 MIDI transport"""

from .protocol import ControlMap, MalformedMessageError, decode_message, palette_entry_message
from .push2_device import Push2Device, Push2MidiInput, Push2PadGrid, Push2NotFoundError

__all__ = [
    "ControlMap",
    "MalformedMessageError",
    "decode_message",
    "palette_entry_message",
    "Push2Device",
    "Push2MidiInput",
    "Push2PadGrid",
    "Push2NotFoundError",
]
