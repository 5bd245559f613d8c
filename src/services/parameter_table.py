"""
ParameterTable - pad index -> EntityConfig, lazily populated.

Owned by main(), edited only by the Compositor, persisted by StateManager.
"""

from dataclasses import replace
from typing import Any, Dict, Iterator, Mapping, Optional, Tuple

from models.entity_config import EntityConfig, DEFAULT_ENTITY_CONFIG
from models.grid import PAD_COUNT
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.STATE)


class ParameterTable:
    """
    Editable pad configuration table.

    Reading an absent pad with get() inserts and returns the default
    configuration, so repeated reads are stable. Every mutation bumps
    `revision`, which the frame loop uses to skip redundant saves.

    Example:
        table = ParameterTable()
        cfg = table.get(9)                  # default, now stored
        table.update(9, hue=cfg.hue + 1.0)  # replaces the frozen entry
    """

    def __init__(self, assignments: Optional[Mapping[int, EntityConfig]] = None):
        self._assignments: Dict[int, EntityConfig] = {}
        self.revision = 0
        for pad, config in (assignments or {}).items():
            self._check_pad(pad)
            self._assignments[pad] = config

    @staticmethod
    def _check_pad(pad: int) -> None:
        if not 0 <= pad < PAD_COUNT:
            raise KeyError(f"Pad index out of range: {pad}")

    # === Access ===

    def get(self, pad: int) -> EntityConfig:
        """Entry for pad, inserting the default when absent"""
        config = self._assignments.get(pad)
        if config is None:
            self._check_pad(pad)
            config = DEFAULT_ENTITY_CONFIG
            self._assignments[pad] = config
            self.revision += 1
            log.debug("Default configuration created", pad=pad)
        return config

    def peek(self, pad: int) -> Optional[EntityConfig]:
        """Entry for pad without lazy creation"""
        return self._assignments.get(pad)

    def __contains__(self, pad: object) -> bool:
        return pad in self._assignments

    def __len__(self) -> int:
        return len(self._assignments)

    def items(self) -> Iterator[Tuple[int, EntityConfig]]:
        return iter(sorted(self._assignments.items()))

    # === Mutation ===

    def set(self, pad: int, config: EntityConfig) -> None:
        self._check_pad(pad)
        self._assignments[pad] = config
        self.revision += 1

    def update(self, pad: int, **changes: Any) -> EntityConfig:
        """Replace selected fields of a pad's entry (creating it first if absent)"""
        config = replace(self.get(pad), **changes)
        self._assignments[pad] = config
        self.revision += 1
        return config

    # === Serialization ===

    def to_dict(self) -> Dict[str, Any]:
        return {
            "assignments": {str(pad): cfg.to_dict() for pad, cfg in self.items()}
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'ParameterTable':
        """
        Build from a persisted document.

        Raises KeyError / TypeError / ValueError on malformed input; the
        caller treats any of them as fatal.
        """
        raw = data["assignments"]
        if not isinstance(raw, Mapping):
            raise TypeError("'assignments' must be a mapping of pad index to configuration")
        assignments = {int(pad): EntityConfig.from_dict(cfg) for pad, cfg in raw.items()}
        return cls(assignments)
