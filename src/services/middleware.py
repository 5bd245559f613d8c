"""
Middleware for EventBus

Middleware = pipeline functions that process events before handlers.
Can modify events, block events, or log/validate events.
"""

from typing import Optional

from models.enums import KnobDirection
from models.events import Event, EventType
from models.grid import PAD_COUNT
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.EVENT)


def log_middleware(event: Event) -> Event:
    """
    Log all events for debugging

    Usage:
        event_bus.add_middleware(log_middleware)
    """
    data = event.to_data()
    if 'direction' in data:
        data_str = f"knob={data['knob']} {data['direction'].name}"
    else:
        data_str = ", ".join(f"{k}={v}" for k, v in data.items())

    log.debug(f"Event: {event.type.name} from {event.source.name} | {data_str}")
    return event


def validation_middleware(event: Event) -> Optional[Event]:
    """
    Drop structurally invalid control events before dispatch.

    Pad events must carry an index in 0..63 and knob turns a KnobDirection.
    Dropped events are logged; processing of later events continues.
    """
    reason = None

    if event.type in (EventType.PAD_PRESS, EventType.PAD_RELEASE):
        pad = getattr(event, "pad", None)
        if not isinstance(pad, int) or not 0 <= pad < PAD_COUNT:
            reason = f"pad index out of range: {pad!r}"

    elif event.type == EventType.KNOB_TURN:
        if not isinstance(getattr(event, "direction", None), KnobDirection):
            reason = f"invalid knob direction: {getattr(event, 'direction', None)!r}"
        elif not isinstance(getattr(event, "knob", None), int):
            reason = f"invalid knob index: {getattr(event, 'knob', None)!r}"

    if reason:
        log.warn("Dropped malformed event", event_type=event.type.name, reason=reason)
        return None
    return event
