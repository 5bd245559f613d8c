from .status_display import IStatusDisplay, LogStatusDisplay

__all__ = [
    "IStatusDisplay",
    "LogStatusDisplay",
]
