"""
EntityConfig - persisted, knob-editable configuration of one pad
"""

from dataclasses import dataclass, asdict
from typing import Any, Dict


@dataclass(frozen=True)
class EntityConfig:
    """
    Configuration snapshot used to spawn an Entity.

    Frozen: knob edits produce a new instance via dataclasses.replace(),
    so an Entity holding a config never sees later table edits.

    Attributes:
        animation: Animation selector, taken modulo the catalog size
        hue: Hue in degrees, unbounded
        duration: Envelope time constant in ticks (not validated, see DESIGN.md)
        thickness: Spatial width of the bell window (larger = blurrier)
        rate: Per-animation multiplier (wave speed, stream frequency)
        distance: Distance metric selector, taken modulo 6
    """

    animation: int = 0
    hue: float = 0.0
    duration: float = 15.0
    thickness: float = 1.0
    rate: float = 0.0
    distance: int = 0

    # === SERIALIZATION ===

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'EntityConfig':
        """
        Build from a persisted record.

        Missing fields take defaults (files written before thickness/rate/
        distance existed only carry animation, hue and duration). Values of
        the wrong type raise TypeError / ValueError.
        """
        default = cls()
        return cls(
            animation=int(data.get("animation", default.animation)),
            hue=float(data.get("hue", default.hue)),
            duration=float(data.get("duration", default.duration)),
            thickness=float(data.get("thickness", default.thickness)),
            rate=float(data.get("rate", default.rate)),
            distance=int(data.get("distance", default.distance)),
        )


DEFAULT_ENTITY_CONFIG = EntityConfig()
