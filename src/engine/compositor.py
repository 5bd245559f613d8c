"""
Compositor - owns live entities, applies control events, renders frames.

Per-tick protocol (driven by FrameLoop, single thread):
  1. Queued control events are applied in arrival order (via EventBus → handlers)
  2. Every pad accumulates the contributions of every live entity
     (or, in assigning mode, the flat hue of its table entry)
  3. Each channel is tone-mapped with saturate()
  4. Entities dead at this tick are removed
  5. tick += 1

Live entities are keyed by EntitySlot:
  PadSlot(pad)      sustain entity, one per pad (re-press replaces it)
  FreshSlot(serial) momentary entity, unique per press (presses stack)
"""

from __future__ import annotations

from typing import Callable, Dict, List, Mapping, Optional, Set

from animations.catalog import ANIMATION_COUNT
from models.color import Color
from models.entity import Entity, EntitySlot, FreshSlot, PadSlot
from models.entity_config import DEFAULT_ENTITY_CONFIG, EntityConfig
from models.enums import FrameSource, KnobDirection, KnobID
from models.events import (
    Event,
    EventType,
    KnobTouchEvent,
    KnobTurnEvent,
    ModeToggleEvent,
    PadPressEvent,
    PadReleaseEvent,
)
from models.frame import GridFrame
from models.grid import GridCell, iter_cells
from services.event_bus import EventBus
from services.parameter_table import ParameterTable
from services.status_formatter import format_status
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.ANIMATION)

# Multiplicative step for duration / thickness knobs
SCALE_STEP = 1.01
RATE_STEP = 0.01
HUE_STEP = 1.0


class Compositor:
    """
    Entity engine state machine.

    Args:
        table: Parameter table (edited in place)
        knob_bindings: Controller knob number -> edited field
        start_tick: Initial tick counter

    Example:
        compositor = Compositor(table, {79: KnobID.HUE})
        compositor.handle(PadPressEvent(9))
        frame = compositor.step()
    """

    def __init__(
        self,
        table: ParameterTable,
        knob_bindings: Mapping[int, KnobID],
        start_tick: float = 0.0,
    ):
        self.table = table
        self.knob_bindings: Dict[int, KnobID] = dict(knob_bindings)

        self.entities: Dict[EntitySlot, Entity] = {}
        self.tick = start_tick
        self.active_pad = 0
        self.assigning = False
        self.focused: Set[int] = set()
        self._fresh_serial = 0

        self._handlers: Dict[EventType, Callable[[Event], None]] = {
            EventType.KNOB_TURN: self.on_knob_turn,
            EventType.KNOB_TOUCH: self.on_knob_touch,
            EventType.PAD_PRESS: self.on_pad_press,
            EventType.PAD_RELEASE: self.on_pad_release,
            EventType.MODE_TOGGLE: self.on_mode_toggle,
            EventType.UNHANDLED: self.on_unhandled,
        }

    # ------------------------------------------------------------
    # Wiring
    # ------------------------------------------------------------

    def attach(self, bus: EventBus) -> None:
        """Subscribe every control handler on the bus"""
        for event_type, handler in self._handlers.items():
            bus.subscribe(event_type, handler)

    def handle(self, event: Event) -> None:
        """Apply one event synchronously (same handlers the bus calls)"""
        handler = self._handlers.get(event.type)
        if handler is None:
            log.debug("Ignored event", event_type=event.type.name)
            return
        handler(event)

    # ------------------------------------------------------------
    # Active configuration
    # ------------------------------------------------------------

    @property
    def active_config(self) -> EntityConfig:
        return self.table.get(self.active_pad)

    @property
    def active_hue(self) -> float:
        """Hue of the active pad, without creating its table entry"""
        return (self.table.peek(self.active_pad) or DEFAULT_ENTITY_CONFIG).hue

    def status_text(self) -> str:
        focused = [self.knob_bindings[k] for k in self.focused if k in self.knob_bindings]
        return format_status(self.active_pad, self.active_config, self.assigning, focused)

    # ------------------------------------------------------------
    # Event handlers
    # ------------------------------------------------------------

    def on_knob_turn(self, event: KnobTurnEvent) -> None:
        knob_id = self.knob_bindings.get(event.knob)
        if knob_id is None:
            log.debug("Unbound knob turned", knob=event.knob)
            return

        up = event.direction is KnobDirection.CLOCKWISE
        cfg = self.active_config

        if knob_id is KnobID.DISTANCE:
            changes = {"distance": cfg.distance + (1 if up else -1)}
        elif knob_id is KnobID.ANIMATION:
            changes = {"animation": (cfg.animation + (1 if up else -1)) % ANIMATION_COUNT}
        elif knob_id is KnobID.THICKNESS:
            changes = {"thickness": cfg.thickness * SCALE_STEP if up else cfg.thickness / SCALE_STEP}
        elif knob_id is KnobID.RATE:
            changes = {"rate": cfg.rate + (RATE_STEP if up else -RATE_STEP)}
        elif knob_id is KnobID.DURATION:
            changes = {"duration": cfg.duration * SCALE_STEP if up else cfg.duration / SCALE_STEP}
        elif knob_id is KnobID.HUE:
            changes = {"hue": cfg.hue + (HUE_STEP if up else -HUE_STEP)}
        else:
            raise ValueError(f"Unhandled knob: {knob_id}")

        self.table.update(self.active_pad, **changes)
        log.debug("Parameter edited", pad=self.active_pad, **changes)

    def on_knob_touch(self, event: KnobTouchEvent) -> None:
        """Every touch edge flips the knob in or out of the focused set"""
        if event.knob in self.focused:
            self.focused.discard(event.knob)
        else:
            self.focused.add(event.knob)

    def on_pad_press(self, event: PadPressEvent) -> None:
        pad = event.pad
        origin = GridCell.from_pad_index(pad)

        previous = self.active_config
        if pad not in self.table or self.assigning:
            self.table.set(pad, previous)
        self.active_pad = pad

        entity = Entity.spawn(self.table.get(pad), self.tick, origin)
        if entity.gated:
            slot: EntitySlot = PadSlot(pad)
        else:
            self._fresh_serial += 1
            slot = FreshSlot(self._fresh_serial)
        self.entities[slot] = entity

        log.debug(
            "Entity spawned",
            pad=pad,
            animation=entity.animation.name,
            gated=entity.gated,
            t1=entity.t1,
        )

    def on_pad_release(self, event: PadReleaseEvent) -> None:
        entity = self.entities.get(PadSlot(event.pad))
        if entity is not None:
            entity.release(self.tick)
            log.debug("Entity released", pad=event.pad, t1=entity.t1)

    def on_mode_toggle(self, event: ModeToggleEvent) -> None:
        if not event.pressed:
            return
        self.assigning = not self.assigning
        log.info("Assigning mode " + ("ON" if self.assigning else "OFF"))

    def on_unhandled(self, event: Event) -> None:
        log.debug("Unhandled control message", **event.to_data())

    # ------------------------------------------------------------
    # Frame
    # ------------------------------------------------------------

    def render_frame(self) -> GridFrame:
        """Composite and tone-map the current tick (no state change)"""
        pixels: List[Color] = []

        if self.assigning:
            for cell in iter_cells():
                cfg: Optional[EntityConfig] = self.table.peek(cell.pad_index)
                accum = Color.from_hue(cfg.hue) if cfg is not None else Color.black()
                pixels.append(accum.saturated())
            return GridFrame(
                tick=self.tick, source=FrameSource.PREVIEW, pixels=pixels, active_hue=self.active_hue
            )

        live = list(self.entities.values())
        for cell in iter_cells():
            accum = Color.black()
            for entity in live:
                accum = accum + entity.render(self.tick, cell)
            pixels.append(accum.saturated())
        return GridFrame(
            tick=self.tick, source=FrameSource.ENTITIES, pixels=pixels, active_hue=self.active_hue
        )

    def retire_dead(self) -> int:
        """Remove entities dead at the current tick; returns how many"""
        dead = [slot for slot, e in self.entities.items() if e.is_dead(self.tick)]
        for slot in dead:
            del self.entities[slot]
        if dead:
            log.debug("Entities retired", count=len(dead), live=len(self.entities))
        return len(dead)

    def step(self) -> GridFrame:
        """Render, retire, advance. Events must already be applied."""
        frame = self.render_frame()
        self.retire_dead()
        self.tick += 1
        return frame
