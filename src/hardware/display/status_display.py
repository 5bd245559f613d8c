"""
Status display sinks

The engine only formats one short status line per tick; rendering it on
the controller's screen is the display's job.
"""

from typing import Optional, Protocol
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.HARDWARE)


class IStatusDisplay(Protocol):
    def show(self, text: str) -> None:
        ...


class LogStatusDisplay(IStatusDisplay):
    """Writes the status line to the log whenever it changes"""

    def __init__(self):
        self.last_text: Optional[str] = None

    def show(self, text: str) -> None:
        if text == self.last_text:
            return
        self.last_text = text
        log.info(text)
