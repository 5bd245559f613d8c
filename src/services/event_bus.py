"""
Event Bus - routes controller events to the engine

Publish/subscribe keyed by EventType. The frame loop publishes the
events drained from the ingress queue once per tick, in arrival order;
the Compositor subscribes one handler per control event type.

Middleware runs before dispatch and may rewrite or drop an event
(see services/middleware.py).
"""

import asyncio
from collections import deque
from typing import Callable, Deque, Dict, List, Optional
from dataclasses import dataclass
from models.events import Event, EventType
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.EVENT)

Handler = Callable[[Event], None]
Middleware = Callable[[Event], Optional[Event]]


@dataclass
class EventHandler:
    """Subscription entry"""
    handler: Handler
    priority: int
    filter_fn: Optional[Callable[[Event], bool]]

    @property
    def name(self) -> str:
        return getattr(self.handler, "__name__", repr(self.handler))


class EventBus:
    """
    Priority-ordered pub-sub with middleware and fault isolation.

    - handlers with higher priority run first; equal priorities keep
      subscription order
    - sync and async handlers are both accepted
    - an exception in one handler is logged and counted; the remaining
      handlers still receive the event

    Example:
        bus = EventBus()
        bus.add_middleware(validation_middleware)
        bus.subscribe(EventType.PAD_PRESS, compositor.on_pad_press)
        await bus.publish(PadPressEvent(9, 100))
    """

    def __init__(self, history_limit: int = 100):
        self._handlers: Dict[EventType, List[EventHandler]] = {}
        self._middleware: List[Middleware] = []
        self._event_history: Deque[Event] = deque(maxlen=history_limit)

        # Counters (exposed for metrics / tests)
        self.published = 0
        self.blocked = 0
        self.failed_handlers = 0

    # === Registration ===

    def subscribe(
        self,
        event_type: EventType,
        handler: Handler,
        priority: int = 0,
        filter_fn: Optional[Callable[[Event], bool]] = None
    ) -> None:
        """
        Args:
            event_type: Which events to receive
            handler: Sync or async callable taking the event
            priority: Higher runs first (default 0)
            filter_fn: Per-handler predicate; False skips this handler only
        """
        entries = self._handlers.setdefault(event_type, [])
        entries.append(EventHandler(handler, priority, filter_fn))
        entries.sort(key=lambda h: h.priority, reverse=True)

        log.debug(
            "Event handler subscribed",
            event_type=event_type.name,
            handler=getattr(handler, "__name__", repr(handler)),
            priority=priority
        )

    def unsubscribe(self, event_type: EventType, handler: Handler) -> bool:
        """Remove every registration of handler for event_type; True if any"""
        entries = self._handlers.get(event_type, [])
        kept = [h for h in entries if h.handler != handler]
        self._handlers[event_type] = kept
        return len(kept) != len(entries)

    def add_middleware(self, middleware: Middleware) -> None:
        """Append to the pipeline; middleware runs in registration order"""
        self._middleware.append(middleware)
        log.debug("Middleware registered", middleware=middleware.__name__)

    def handler_count(self, event_type: EventType) -> int:
        return len(self._handlers.get(event_type, []))

    # === Publishing ===

    def _apply_middleware(self, event: Event) -> Optional[Event]:
        for middleware in self._middleware:
            result = middleware(event)
            if result is None:
                return None
            event = result
        return event

    async def publish(self, event: Event) -> None:
        """Run the middleware pipeline, record the event, dispatch by priority"""
        processed = self._apply_middleware(event)
        if processed is None:
            self.blocked += 1
            return

        self.published += 1
        self._event_history.append(processed)

        entries = self._handlers.get(processed.type)
        if not entries:
            log.debug("No handlers for event", event_type=processed.type.name)
            return

        for entry in list(entries):
            if entry.filter_fn is not None and not entry.filter_fn(processed):
                continue
            await self._dispatch(entry, processed)

    async def _dispatch(self, entry: EventHandler, event: Event) -> None:
        try:
            if asyncio.iscoroutinefunction(entry.handler):
                await entry.handler(event)
            else:
                entry.handler(event)
        except Exception as e:
            self.failed_handlers += 1
            log.error(
                f"Event handler failed: {entry.name} for {event.type.name}",
                error=str(e),
                error_type=type(e).__name__,
            )

    # === History ===

    def get_event_history(self, limit: int = 10) -> List[Event]:
        """Recent events, newest last"""
        return list(self._event_history)[-limit:]

    def clear_history(self) -> None:
        self._event_history.clear()
