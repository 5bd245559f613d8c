"""
FrameLoop - fixed-rate driver of the Compositor.

Per tick:
  1. Drain the ControlEventQueue (everything queued so far, arrival order)
  2. Publish each event on the EventBus (middleware → Compositor handlers)
  3. compositor.step(): render, retire dead entities, advance tick
  4. Push the frame to the pad grid and the status line to the display
  5. Every N ticks, persist the parameter table if it changed (non-fatal)
  6. Sleep until the next frame deadline

A slow tick is never skipped; the next one simply starts late and is
counted in `dropped_frames`.
"""

from __future__ import annotations
import asyncio
import time
from collections import deque
from typing import Deque, Dict, Optional

from engine.compositor import Compositor
from hardware.display.status_display import IStatusDisplay
from hardware.grid.grid_interface import IPadGrid
from managers.state_manager import StateManager
from models.frame import GridFrame
from services.event_bus import EventBus
from services.ingress_queue import ControlEventQueue
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.RENDER_ENGINE)


class FrameLoop:
    """
    Render loop with pause/step control and metrics.

    Example:
        loop = FrameLoop(compositor, bus, queue, VirtualPadGrid(), fps=30)
        await loop.start()
        ...
        await loop.stop()      # final save included
    """

    def __init__(
        self,
        compositor: Compositor,
        event_bus: EventBus,
        event_queue: ControlEventQueue,
        grid: IPadGrid,
        status_display: Optional[IStatusDisplay] = None,
        state_manager: Optional[StateManager] = None,
        fps: int = 30,
        autosave_every_ticks: int = 30,
    ):
        """
        Args:
            fps: Target tick rate (1-240, default 30)
            autosave_every_ticks: Save interval in ticks (0 disables autosave)
        """
        self.compositor = compositor
        self.event_bus = event_bus
        self.event_queue = event_queue
        self.grid = grid
        self.status_display = status_display
        self.state_manager = state_manager

        self.fps = max(1, min(fps, 240))
        self.autosave_every_ticks = max(0, autosave_every_ticks)

        # Runtime state
        self.running = False
        self.paused = False
        self.step_requested = False
        self.render_task: Optional[asyncio.Task] = None

        # Metrics
        self.ticks_run = 0
        self.events_processed = 0
        self.dropped_frames = 0
        self.autosaves = 0
        self.save_failures = 0
        self.frame_times: Deque[float] = deque(maxlen=self.fps * 5)
        self.last_frame: Optional[GridFrame] = None

        log.info("FrameLoop initialized", fps=self.fps, autosave_every=self.autosave_every_ticks)

    # === Control API ===

    def pause(self) -> None: self.paused = True

    def resume(self) -> None: self.paused = False

    def step_frame(self) -> None: self.step_requested = True

    # === Lifecycle ===

    async def start(self) -> None:
        if self.running:
            log.warn("FrameLoop already running")
            return

        self.running = True
        self.render_task = asyncio.create_task(self._render_loop())
        log.info(f"FrameLoop started @ {self.fps} FPS")

    async def stop(self) -> None:
        """Stop the loop and save the table one last time"""
        if not self.running:
            return
        self.running = False
        if self.render_task:
            self.render_task.cancel()
            try:
                await self.render_task
            except asyncio.CancelledError:
                pass
            self.render_task = None

        await self.save_state()
        log.info(
            "FrameLoop stopped",
            ticks=self.ticks_run,
            events=self.events_processed,
            dropped_frames=self.dropped_frames,
        )

    # === Tick ===

    async def run_tick(self) -> GridFrame:
        """Process one tick; the loop calls this, tests call it directly"""
        for event in self.event_queue.drain():
            await self.event_bus.publish(event)
            self.events_processed += 1

        frame = self.compositor.step()
        self.last_frame = frame

        try:
            self.grid.apply_frame(frame)
        except Exception as e:
            log.error(f"Pad grid error: {e}", exc_info=True)

        if self.status_display is not None:
            self.status_display.show(self.compositor.status_text())

        self.ticks_run += 1
        self.frame_times.append(time.perf_counter())

        if self.autosave_every_ticks and self.ticks_run % self.autosave_every_ticks == 0:
            if await self.save_state():
                self.autosaves += 1

        return frame

    async def save_state(self) -> bool:
        """Persist the table if it changed; failures are logged, never raised"""
        if self.state_manager is None:
            return False
        try:
            return await self.state_manager.save_if_changed(self.compositor.table)
        except (OSError, TypeError, ValueError) as e:
            self.save_failures += 1
            log.error("Failed to save assignments", error=str(e), failures=self.save_failures)
            return False

    async def _render_loop(self) -> None:
        frame_delay = 1.0 / self.fps
        log.info(f"Render loop @ {self.fps} FPS (delay={frame_delay*1000:.2f}ms)")

        next_deadline = time.perf_counter()
        while self.running:
            if self.paused and not self.step_requested:
                await asyncio.sleep(0.01)
                next_deadline = time.perf_counter()
                continue

            await self.run_tick()
            self.step_requested = False

            next_deadline += frame_delay
            delay = next_deadline - time.perf_counter()
            if delay < 0:
                self.dropped_frames += 1
                next_deadline = time.perf_counter()
                delay = 0
            await asyncio.sleep(delay)

    # === Metrics ===

    def get_actual_fps(self) -> float:
        if len(self.frame_times) < 2:
            return 0.0
        duration = self.frame_times[-1] - self.frame_times[0]
        if duration <= 0:
            return 0.0
        return (len(self.frame_times) - 1) / duration

    def get_metrics(self) -> Dict:
        return {
            "fps_target": self.fps,
            "fps_actual": self.get_actual_fps(),
            "ticks": self.ticks_run,
            "tick_counter": self.compositor.tick,
            "events_processed": self.events_processed,
            "live_entities": len(self.compositor.entities),
            "dropped_frames": self.dropped_frames,
            "pending_events": len(self.event_queue),
            "autosaves": self.autosaves,
            "save_failures": self.save_failures,
        }

    def __repr__(self) -> str:
        metrics = self.get_metrics()
        return (
            f"FrameLoop(fps={metrics['fps_actual']:.1f}/{metrics['fps_target']}, "
            f"ticks={metrics['ticks']}, "
            f"entities={metrics['live_entities']}, "
            f"dropped={metrics['dropped_frames']})"
        )
