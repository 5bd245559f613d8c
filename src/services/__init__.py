"""Services layer"""

from .event_bus import EventBus
from .ingress_queue import ControlEventQueue
from .parameter_table import ParameterTable
from .status_formatter import format_status

__all__ = [
    "EventBus",
    "ControlEventQueue",
    "ParameterTable",
    "format_status",
]
