# hardware/push2/push2_device.py
"""
Push2Device - python-rtmidi transport for Ableton Push 2
=========================================================
- Push2MidiInput: rtmidi callback -> decode_message() -> ControlEventQueue
- Push2PadGrid: IPadGrid writing pad colors and control LED feedback as palette SysEx
- Push2Device: finds/opens the User Port pair and wires both together

rtmidi is imported on open(), so --virtual runs and tests need no MIDI stack.
"""

from __future__ import annotations
from typing import Any, Dict, List, Optional, Tuple

from hardware.grid.grid_interface import IPadGrid
from hardware.push2.protocol import (
    ControlMap,
    MalformedMessageError,
    control_binding_messages,
    decode_message,
    feedback_slot_colors,
    pad_binding_messages,
    pad_palette_slot,
    palette_entry_message,
    reapply_palette_message,
    user_mode_message,
)
from models.color import Color
from models.frame import GridFrame
from models.grid import PAD_COUNT
from services.ingress_queue import ControlEventQueue
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.HARDWARE)

DEFAULT_PORT_NAME = "Ableton Push 2 User Port"


class Push2NotFoundError(RuntimeError):
    """No MIDI port matching the configured name"""


class Push2MidiInput:
    """
    Decodes raw MIDI on the rtmidi callback thread and enqueues the events.

    Malformed messages are logged and dropped; nothing here touches engine state.
    """

    def __init__(self, event_queue: ControlEventQueue, control_map: ControlMap = ControlMap()):
        self.event_queue = event_queue
        self.control_map = control_map
        self.received = 0
        self.dropped = 0

    def on_message(self, message: Tuple[List[int], float], data: Any = None) -> None:
        """rtmidi callback signature: ((bytes, delta_time), user_data)"""
        raw = bytes(message[0])
        self.received += 1
        try:
            event = decode_message(raw, self.control_map)
        except MalformedMessageError as ex:
            self.dropped += 1
            log.warn("Malformed MIDI message dropped", raw=raw.hex(), error=str(ex))
            return
        if event is not None:
            self.event_queue.put(event)


class Push2PadGrid(IPadGrid):
    """
    Pad sink for Push 2.

    Pad i is bound to palette slot 1 + i once (initialize()), together with
    the button rows and the hue knob LED. Afterwards only slots whose 8-bit
    color changed are rewritten, followed by one "reapply palette" command
    per frame.
    """

    def __init__(self, midi_out: Any, pad_note_first: int = 36):
        self.midi_out = midi_out
        self.pad_note_first = pad_note_first
        self._buffer: List[Color] = [Color.black() for _ in range(PAD_COUNT)]
        self._sent: Dict[int, Tuple[int, int, int]] = {}
        self.messages_sent = 0

    def _send(self, message: bytes) -> None:
        self.midi_out.send_message(list(message))
        self.messages_sent += 1

    def initialize(self) -> None:
        """Enter User mode and bind pads, button rows and hue knob to palette slots"""
        self._send(user_mode_message())
        for message in control_binding_messages():
            self._send(message)
        for message in pad_binding_messages(self.pad_note_first):
            self._send(message)
        self._sent = {}
        self.clear()
        log.info("Push 2 pads bound to palette", pads=PAD_COUNT)

    # ==================== IPadGrid API ====================

    @property
    def pad_count(self) -> int:
        return PAD_COUNT

    def apply_frame(self, frame: GridFrame) -> None:
        slots = self._store_pads(frame.pixels)
        slots.update(feedback_slot_colors(frame.tick, frame.active_hue))
        self._write(slots)

    def get_frame(self) -> List[Color]:
        return self._buffer

    def clear(self) -> None:
        """Blank every pad and feedback LED"""
        slots = self._store_pads([Color.black()] * PAD_COUNT)
        slots.update({slot: (0, 0, 0) for slot in feedback_slot_colors(0.0, 0.0)})
        self._write(slots)

    def _store_pads(self, pixels: List[Color]) -> Dict[int, Tuple[int, int, int]]:
        slots: Dict[int, Tuple[int, int, int]] = {}
        for pad, color in enumerate(pixels[:PAD_COUNT]):
            self._buffer[pad] = color
            slots[pad_palette_slot(pad)] = color.to_rgb8()
        return slots

    def _write(self, slots: Dict[int, Tuple[int, int, int]]) -> None:
        changed = 0
        for slot, rgb in slots.items():
            if self._sent.get(slot) == rgb:
                continue
            self._send(palette_entry_message(slot, rgb))
            self._sent[slot] = rgb
            changed += 1
        if changed:
            self._send(reapply_palette_message())


class Push2Device:
    """
    Opens the Push 2 User Port for input and output.

    Example:
        device = Push2Device(queue, ControlMap(pad_note_first=36, assign_button=86))
        device.open()
        frame_loop = FrameLoop(..., grid=device.grid, ...)
        ...
        device.close()
    """

    def __init__(
        self,
        event_queue: ControlEventQueue,
        control_map: ControlMap = ControlMap(),
        port_name: Optional[str] = DEFAULT_PORT_NAME,
    ):
        self.port_name = port_name or DEFAULT_PORT_NAME
        self.control_map = control_map
        self.input = Push2MidiInput(event_queue, control_map)
        self.grid: Optional[Push2PadGrid] = None
        self._midi_in: Any = None
        self._midi_out: Any = None

    @staticmethod
    def _find_port(ports: List[str], query: str) -> int:
        q = query.strip().lower()
        for i, name in enumerate(ports):
            if q in name.lower():
                return i
        raise Push2NotFoundError(f"No MIDI port matching '{query}' (available: {ports})")

    def open(self) -> Push2PadGrid:
        """
        Raises:
            ImportError: python-rtmidi not installed
            Push2NotFoundError: controller not connected
        """
        import rtmidi

        midi_in = rtmidi.MidiIn()
        midi_out = rtmidi.MidiOut()
        try:
            in_idx = self._find_port(midi_in.get_ports(), self.port_name)
            out_idx = self._find_port(midi_out.get_ports(), self.port_name)
            midi_in.open_port(in_idx)
            midi_out.open_port(out_idx)
        except Exception:
            midi_in.delete()
            midi_out.delete()
            raise

        midi_in.ignore_types(sysex=True, timing=True, active_sense=True)
        midi_in.set_callback(self.input.on_message)

        self._midi_in, self._midi_out = midi_in, midi_out
        self.grid = Push2PadGrid(midi_out, self.control_map.pad_note_first)
        self.grid.initialize()

        log.info("Push 2 connected", port=self.port_name)
        return self.grid

    def close(self) -> None:
        if self.grid is not None:
            try:
                self.grid.clear()
            except Exception as ex:
                log.warn(f"Failed to clear pads on close: {ex}")
        if self._midi_in is not None:
            self._midi_in.cancel_callback()
            self._midi_in.close_port()
            self._midi_in = None
        if self._midi_out is not None:
            self._midi_out.close_port()
            self._midi_out = None
        log.info("Push 2 disconnected")
