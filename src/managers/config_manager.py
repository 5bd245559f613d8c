"""
Config Manager

Loads config/config.yaml and exposes typed accessors for the render loop,
persistence, logging, controller bindings and hardware ports.
"""

import copy
import yaml
from pathlib import Path
from typing import Any, Dict, Optional, Union
from models.enums import KnobID, LogLevel, LogCategory
from utils.logger import get_logger

log = get_logger().for_category(LogCategory.CONFIG)

SRC_DIR = Path(__file__).parent.parent


class ConfigError(Exception):
    """Missing or malformed configuration / persisted state (fatal at startup)"""


DEFAULTS: Dict[str, Any] = {
    "render": {
        "fps": 30,
    },
    "state": {
        "path": "state/assignments.json",
        "autosave_every_ticks": 30,
    },
    "logging": {
        "level": "INFO",
        "use_colors": True,
    },
    "controls": {
        "pad_note_first": 36,
        "assign_button": 86,
        "knobs": {
            "hue": 79,
            "animation": 14,
            "duration": 78,
            "thickness": 71,
            "rate": 72,
            "distance": 73,
        },
    },
    "hardware": {
        "virtual": False,
        "port_name": "Ableton Push 2 User Port",
    },
}


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


class ConfigManager:
    """
    Main configuration manager

    Example:
        config = ConfigManager()
        config.load()

        config.fps                 # 30
        config.knob_bindings       # {79: KnobID.HUE, 14: KnobID.ANIMATION, ...}
        config.state_path          # Path(.../state/assignments.json)
    """

    def __init__(self, config_path: Union[str, Path] = "config/config.yaml"):
        """
        Args:
            config_path: Path to config.yaml (relative paths resolve against src/)
        """
        path = Path(config_path)
        self.config_path = path if path.is_absolute() else SRC_DIR / path
        self.data: Dict[str, Any] = copy.deepcopy(DEFAULTS)

    def load(self) -> Dict[str, Any]:
        """
        Load YAML configuration and merge it over built-in defaults.

        Raises:
            ConfigError: file unreadable, not YAML, not a mapping, or with
                invalid knob / level names
        """
        try:
            with open(self.config_path, "r", encoding="utf-8") as f:
                loaded = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as ex:
            log.error("Failed to load config.yaml", path=str(self.config_path), error=str(ex))
            raise ConfigError(f"Cannot load {self.config_path}: {ex}") from ex

        if not isinstance(loaded, dict):
            raise ConfigError(f"{self.config_path}: top level must be a mapping")

        self.data = _deep_merge(DEFAULTS, loaded)

        # Validate eagerly so a typo fails at startup, not on first knob turn
        _ = self.knob_bindings
        _ = self.log_level

        log.info(
            "Configuration loaded",
            path=str(self.config_path),
            fps=self.fps,
            knobs=len(self.knob_bindings),
        )
        return self.data

    # ===== Accessors =====

    def _section(self, name: str) -> Dict[str, Any]:
        section = self.data.get(name)
        if not isinstance(section, dict):
            raise ConfigError(f"Section '{name}' must be a mapping")
        return section

    @property
    def fps(self) -> int:
        return int(self._section("render")["fps"])

    @property
    def state_path(self) -> Path:
        path = Path(self._section("state")["path"])
        return path if path.is_absolute() else SRC_DIR / path

    @property
    def autosave_every_ticks(self) -> int:
        return int(self._section("state")["autosave_every_ticks"])

    @property
    def log_level(self) -> LogLevel:
        name = str(self._section("logging")["level"]).upper()
        try:
            return LogLevel[name]
        except KeyError:
            raise ConfigError(f"Unknown log level: {name}") from None

    @property
    def use_colors(self) -> bool:
        return bool(self._section("logging")["use_colors"])

    @property
    def pad_note_first(self) -> int:
        return int(self._section("controls")["pad_note_first"])

    @property
    def assign_button(self) -> int:
        return int(self._section("controls")["assign_button"])

    @property
    def knob_bindings(self) -> Dict[int, KnobID]:
        """Controller CC number -> KnobID"""
        knobs = self._section("controls").get("knobs") or {}
        bindings: Dict[int, KnobID] = {}
        for name, cc in knobs.items():
            try:
                knob_id = KnobID[str(name).upper()]
            except KeyError:
                raise ConfigError(f"Unknown knob name in controls.knobs: {name}") from None
            bindings[int(cc)] = knob_id
        return bindings

    @property
    def virtual(self) -> bool:
        return bool(self._section("hardware")["virtual"])

    @property
    def port_name(self) -> Optional[str]:
        return self._section("hardware").get("port_name")
