"""
ControlEventQueue - the only concurrency boundary of the engine.

Producers (the rtmidi callback thread, tests, the virtual demo) put events
from any thread; the frame loop drains everything available once per tick
without ever blocking.
"""

import queue
from typing import List

from models.events import Event


class ControlEventQueue:
    """Unbounded, order-preserving multi-producer / single-consumer FIFO"""

    def __init__(self):
        self._queue: "queue.SimpleQueue[Event]" = queue.SimpleQueue()

    def put(self, event: Event) -> None:
        """Thread-safe, never blocks"""
        self._queue.put(event)

    def drain(self) -> List[Event]:
        """Return every event queued so far, oldest first (may be empty)"""
        events: List[Event] = []
        while True:
            try:
                events.append(self._queue.get_nowait())
            except queue.Empty:
                return events

    def __len__(self) -> int:
        return self._queue.qsize()
