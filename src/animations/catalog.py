"""
Animation catalog

A fixed, ordered set of effects. Each is a pure function of
(entity, tick, target cell) -> linear Color contribution; the compositor
sums contributions of all live entities per pad.

Gating tag per effect:
- momentary (RIPPLE, CROSS): expire duration ticks after spawn
- sustain (VWAVE, STREAM, DROP_THE_BASS): live until the pad is released
"""

from __future__ import annotations

import math
from enum import Enum
from typing import TYPE_CHECKING

from animations.envelope import divide, sine, window
from animations.glyphs import DROP_GLYPHS
from models.color import Color
from models.grid import GridCell

if TYPE_CHECKING:
    from models.entity import Entity

# Ring / arm travel over one nominal lifetime, in cells
RIPPLE_SPAN = 12.0
CROSS_SPAN = 8.0

# VWave crest amplitude in rows and horizontal wavelength (8 cells)
VWAVE_AMPLITUDE = 4.0
VWAVE_PHASE_PER_CELL = math.pi / 4

# Stream renders only inside this radius
STREAM_RADIUS = 12.0


class AnimationKind(Enum):
    RIPPLE = 0
    CROSS = 1
    VWAVE = 2
    STREAM = 3
    DROP_THE_BASS = 4

    @classmethod
    def from_selector(cls, selector: int) -> 'AnimationKind':
        """Selector modulo catalog size; negative selectors wrap too"""
        return list(cls)[selector % len(cls)]

    @property
    def gated(self) -> bool:
        """True for sustain-style effects held until pad release"""
        return self in _SUSTAIN_KINDS

    @property
    def label(self) -> str:
        return _LABELS[self]


_SUSTAIN_KINDS = frozenset({
    AnimationKind.VWAVE,
    AnimationKind.STREAM,
    AnimationKind.DROP_THE_BASS,
})

_LABELS = {
    AnimationKind.RIPPLE: "Ripple",
    AnimationKind.CROSS: "Cross",
    AnimationKind.VWAVE: "VWave",
    AnimationKind.STREAM: "Stream",
    AnimationKind.DROP_THE_BASS: "DropTheBass",
}

ANIMATION_COUNT = len(AnimationKind)

_GLYPH_COLORS = tuple((cells, Color.from_hue(hue)) for cells, hue in DROP_GLYPHS)


def render(entity: 'Entity', tick: float, cell: GridCell) -> Color:
    """
    Contribution of one entity to one pad at the given tick.

    Args:
        entity: Live entity (animation, origin, color, timing, params)
        tick: Current frame tick
        cell: Target pad

    Returns:
        Linear Color, black when the effect does not reach the pad
    """
    kind = entity.animation
    params = entity.params
    ox, oy = entity.origin
    dx = cell.x - ox
    dy = cell.y - oy

    if kind is AnimationKind.RIPPLE:
        d = entity.distance.evaluate(ox, oy, cell.x, cell.y)
        return entity.color * window(d - entity.phase(tick) * RIPPLE_SPAN, params.thickness)

    elif kind is AnimationKind.CROSS:
        if cell.y == oy:
            return entity.color * window(abs(dx) - entity.phase(tick) * CROSS_SPAN, params.thickness)
        elif cell.x == ox:
            return entity.color * window(abs(dy) - entity.phase(tick) * CROSS_SPAN, params.thickness)
        return Color.black()

    elif kind is AnimationKind.VWAVE:
        theta = math.pi * tick * params.rate
        amp = sine(theta + VWAVE_PHASE_PER_CELL * dx) * VWAVE_AMPLITUDE
        return entity.color * (window(amp - dy, params.thickness) * entity.decay(tick))

    elif kind is AnimationKind.STREAM:
        d = entity.distance.evaluate(ox, oy, cell.x, cell.y)
        # UNREACHABLE_DISTANCE is always outside the radius
        if d >= STREAM_RADIUS:
            return Color.black()
        amp = sine(divide(tick, params.duration) - d * params.rate)
        return entity.color * (window(amp, params.thickness) * entity.decay(tick))

    elif kind is AnimationKind.DROP_THE_BASS:
        for cells, color in _GLYPH_COLORS:
            if (cell.x, cell.y) in cells:
                return color * entity.decay(tick)
        return Color.black()

    raise ValueError(f"Unhandled animation kind: {kind}")
