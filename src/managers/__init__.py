"""
Managers for configuration and persisted state
"""

from .config_manager import ConfigManager, ConfigError
from .state_manager import StateManager

__all__ = ['ConfigManager', 'ConfigError', 'StateManager']
