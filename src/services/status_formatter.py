"""Status line for the controller display"""

from typing import Iterable

from animations.catalog import AnimationKind
from animations.distance import DistanceMetric
from models.entity_config import EntityConfig
from models.enums import KnobID


def format_status(
    pad: int,
    config: EntityConfig,
    assigning: bool = False,
    focused: Iterable[KnobID] = (),
) -> str:
    """
    One-line summary of the active pad's configuration.

    Example:
        format_status(9, EntityConfig(animation=2, hue=120.0))
        # "P09 VWave/15.0f h120 w1.00 r0.00 EUCLIDEAN"
    """
    animation = AnimationKind.from_selector(config.animation)
    distance = DistanceMetric.from_selector(config.distance)
    text = (
        f"P{pad:02d} {animation.label}/{config.duration:.1f}f "
        f"h{config.hue:.0f} w{config.thickness:.2f} r{config.rate:.2f} {distance.name}"
    )
    if assigning:
        text = "ASSIGN " + text
    names = sorted(k.name.lower() for k in focused)
    if names:
        text += f" [{','.join(names)}]"
    return text
