"""
Entity - one spawned, time-bounded visual effect anchored at a pad.

Lifecycle:

    spawn (momentary) ──► ATTACK ──(tick >= t1)──► DEAD
    spawn (sustain)   ──► SUSTAIN ──release(t)──► RELEASE ──(tick >= t + 5)──► DEAD

Only release() is triggered from outside; every other transition is a
tick comparison done by is_dead().
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Union

from animations.catalog import AnimationKind, render
from animations.distance import DistanceMetric
from animations.envelope import divide
from models.color import Color
from models.entity_config import EntityConfig
from models.grid import GridCell

# Ticks a released sustain entity keeps rendering before removal
RELEASE_TICKS = 5


class EntityPhase(Enum):
    ATTACK = auto()
    SUSTAIN = auto()
    RELEASE = auto()
    DEAD = auto()


# === Live-set keys ===

@dataclass(frozen=True)
class PadSlot:
    """Key of a sustain entity: one per pad, re-pressing replaces it"""
    pad: int


@dataclass(frozen=True)
class FreshSlot:
    """Key of a momentary entity: unique per spawn"""
    serial: int


EntitySlot = Union[PadSlot, FreshSlot]


@dataclass
class Entity:
    """
    Live effect instance.

    Attributes:
        animation: Resolved catalog entry
        origin: Spawn pad
        color: Linear color resolved from params.hue at spawn
        t0: Spawn tick
        t1: Expiry tick; only meaningful while not gated
        gated: True while sustaining (never expires by time alone)
        params: Frozen copy of the pad configuration at spawn
        distance: Resolved distance metric
    """

    animation: AnimationKind
    origin: GridCell
    color: Color
    t0: float
    t1: float
    gated: bool
    params: EntityConfig
    distance: DistanceMetric
    released: bool = field(default=False)

    @classmethod
    def spawn(cls, config: EntityConfig, tick: float, origin: GridCell) -> 'Entity':
        """Instantiate a configuration at a pad; gating follows the animation tag"""
        animation = AnimationKind.from_selector(config.animation)
        return cls(
            animation=animation,
            origin=origin,
            color=Color.from_hue(config.hue),
            t0=tick,
            t1=tick + config.duration,
            gated=animation.gated,
            params=config,
            distance=DistanceMetric.from_selector(config.distance),
        )

    # === Envelope ===

    def phase(self, tick: float) -> float:
        """
        Linear progress through the scheduled life, unclamped.

        Frozen at 0 while gated. After release it resumes from t0 using
        the original duration, so it is usually already past 1.
        """
        if self.gated:
            return 0.0
        return divide(tick - self.t0, self.params.duration)

    def decay(self, tick: float) -> float:
        """Linear fade multiplier: 1 - phase"""
        # TODO: exponential decay once the release curve is tuned on hardware
        return 1.0 - self.phase(tick)

    # === Lifecycle ===

    def is_dead(self, tick: float) -> bool:
        return not self.gated and tick >= self.t1

    def release(self, tick: float) -> None:
        """Sustain -> Release; idempotent"""
        if not self.gated:
            return
        self.gated = False
        self.released = True
        self.t1 = tick + RELEASE_TICKS

    def state(self, tick: float) -> EntityPhase:
        if self.gated:
            return EntityPhase.SUSTAIN
        if tick >= self.t1:
            return EntityPhase.DEAD
        return EntityPhase.RELEASE if self.released else EntityPhase.ATTACK

    # === Rendering ===

    def render(self, tick: float, cell: GridCell) -> Color:
        return render(self, tick, cell)
