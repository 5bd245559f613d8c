"""
Ableton Push 2 MIDI protocol helpers (pure functions, no I/O).

Input:  raw MIDI message bytes -> typed control events
Output: pad colors -> palette SysEx messages

Pads are lit indirectly: at start-up pad i is bound to palette slot 1 + i
(NoteOn velocity = slot), then every frame rewrites the RGB of each slot.
"""

from dataclasses import dataclass, field
from typing import Dict, FrozenSet, List, Optional, Tuple

from models.color import Color
from models.enums import KnobDirection
from models.events import (
    Event,
    KnobTouchEvent,
    KnobTurnEvent,
    ModeToggleEvent,
    PadPressEvent,
    PadReleaseEvent,
    UnhandledControlEvent,
)
from models.grid import PAD_COUNT

SYSEX_HEADER = bytes([0xF0, 0x00, 0x21, 0x1D, 0x01, 0x01])
SYSEX_END = 0xF7

CMD_SET_PALETTE_ENTRY = 0x03
CMD_REAPPLY_PALETTE = 0x05
CMD_SET_MIDI_MODE = 0x0A

NOTE_OFF = 0x80
NOTE_ON = 0x90
CONTROL_CHANGE = 0xB0

# Relative encoders: tempo, swing, 8 track knobs, master
ENCODER_CCS: FrozenSet[int] = frozenset([14, 15, *range(71, 80)])

# Encoder cap touch notes -> encoder CC, so touches and turns share an index space
TOUCH_NOTE_TO_KNOB: Dict[int, int] = {
    **{note: 71 + note for note in range(8)},
    8: 79,
    9: 15,
    10: 14,
}


# Upper (CC 20-27) and lower (CC 102-109) button rows, lit from palette slots 65-80
BUTTON_ROW_CCS: Tuple[int, ...] = (*range(20, 28), *range(102, 110))
BUTTON_PALETTE_FIRST = 65

# Rainbow across the button rows: hue = i * step + tick * velocity
RAINBOW_HUE_STEP = 22.5
RAINBOW_VELOCITY = 2.0

# Hue knob LED (top right) shows the active pad's hue from the last palette slot
HUE_KNOB_LED_CC = 85
HUE_PALETTE_SLOT = 127


class MalformedMessageError(ValueError):
    """Truncated or out-of-range MIDI bytes"""


@dataclass(frozen=True)
class ControlMap:
    """Controller layout used by decode_message()"""
    pad_note_first: int = 36
    assign_button: int = 86
    encoder_ccs: FrozenSet[int] = ENCODER_CCS
    touch_notes: Dict[int, int] = field(default_factory=lambda: dict(TOUCH_NOTE_TO_KNOB))

    def pad_for_note(self, note: int) -> Optional[int]:
        pad = note - self.pad_note_first
        if 0 <= pad < PAD_COUNT:
            return pad
        return None


# === Input ===

def decode_message(data: bytes, control_map: ControlMap = ControlMap()) -> Optional[Event]:
    """
    Decode one raw MIDI message.

    Returns:
        A control event, UnhandledControlEvent for well-formed messages with
        no meaning here, or None for system real-time bytes.

    Raises:
        MalformedMessageError: empty, running-status, truncated or data
            bytes >= 0x80
    """
    if not data:
        raise MalformedMessageError("empty message")

    status = data[0]
    if status < 0x80:
        raise MalformedMessageError(f"missing status byte: {bytes(data).hex()}")
    if status >= 0xF8:
        return None
    if status >= 0xF0:
        return UnhandledControlEvent(data, "system message")

    kind = status & 0xF0
    if kind not in (NOTE_OFF, NOTE_ON, CONTROL_CHANGE):
        return UnhandledControlEvent(data, f"status 0x{kind:02X}")

    if len(data) < 3:
        raise MalformedMessageError(f"truncated message: {bytes(data).hex()}")
    number, value = data[1], data[2]
    if number >= 0x80 or value >= 0x80:
        raise MalformedMessageError(f"data byte out of range: {bytes(data).hex()}")

    if kind in (NOTE_ON, NOTE_OFF):
        on = kind == NOTE_ON and value > 0
        pad = control_map.pad_for_note(number)
        if pad is not None:
            return PadPressEvent(pad, value) if on else PadReleaseEvent(pad)
        knob = control_map.touch_notes.get(number)
        if knob is not None:
            return KnobTouchEvent(knob, on)
        return UnhandledControlEvent(data, f"note {number}")

    # Control change
    if number == control_map.assign_button:
        return ModeToggleEvent(value >= 64)
    if number in control_map.encoder_ccs:
        if value == 0:
            return UnhandledControlEvent(data, f"encoder {number} without motion")
        direction = KnobDirection.CLOCKWISE if value < 64 else KnobDirection.COUNTER_CLOCKWISE
        return KnobTurnEvent(number, direction)
    return UnhandledControlEvent(data, f"cc {number}")


# === Output ===

def sysex(command: int, *payload: int) -> bytes:
    return SYSEX_HEADER + bytes([command, *payload, SYSEX_END])


def user_mode_message() -> bytes:
    """Switch the MIDI input/output to the User Port"""
    return sysex(CMD_SET_MIDI_MODE, 0x01)


def reapply_palette_message() -> bytes:
    return sysex(CMD_REAPPLY_PALETTE)


def palette_entry_message(index: int, rgb: Tuple[int, int, int], white: int = 0) -> bytes:
    """
    Set palette slot RGB(W); each 8-bit value is split into 7-bit LSB + MSB.

    Example:
        palette_entry_message(10, (255, 0, 0)).hex()
        # 'f000211d0101030a7f01000000000000f7'
    """
    if not 0 <= index < 128:
        raise ValueError(f"Palette index out of range: {index}")
    payload: List[int] = [index]
    for v in (*rgb, white):
        payload += [v & 0x7F, v >> 7]
    return sysex(CMD_SET_PALETTE_ENTRY, *payload)


def pad_palette_slot(pad: int) -> int:
    return 1 + pad


def pad_binding_messages(pad_note_first: int = 36) -> List[bytes]:
    """NoteOn on channel 0 binding pad i to palette slot 1 + i"""
    return [
        bytes([NOTE_ON, pad_note_first + pad, pad_palette_slot(pad)])
        for pad in range(PAD_COUNT)
    ]


def control_binding_messages() -> List[bytes]:
    """CC messages binding the button rows and the hue knob LED to their palette slots"""
    messages = [
        bytes([CONTROL_CHANGE, cc, BUTTON_PALETTE_FIRST + i])
        for i, cc in enumerate(BUTTON_ROW_CCS)
    ]
    messages.append(bytes([CONTROL_CHANGE, HUE_KNOB_LED_CC, HUE_PALETTE_SLOT]))
    return messages


def feedback_slot_colors(tick: float, active_hue: float) -> Dict[int, Tuple[int, int, int]]:
    """
    Palette slot -> 8-bit RGB for the non-pad LEDs at a tick.

    Button rows cycle a rainbow; the hue knob LED shows active_hue. Both use
    the entity color curve without tone-mapping.
    """
    slots = {
        BUTTON_PALETTE_FIRST + i: Color.from_hue(i * RAINBOW_HUE_STEP + tick * RAINBOW_VELOCITY).to_rgb8()
        for i in range(len(BUTTON_ROW_CCS))
    }
    slots[HUE_PALETTE_SLOT] = Color.from_hue(active_hue).to_rgb8()
    return slots
