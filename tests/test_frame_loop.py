"""
Tests for FrameLoop (tick pipeline, autosave, lifecycle, metrics).
"""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from engine.frame_loop import FrameLoop
from managers.state_manager import StateManager
from models.enums import FrameSource, KnobDirection
from models.events import KnobTurnEvent, PadPressEvent

from helpers import HUE_KNOB


@pytest.fixture
def frame_loop_factory(compositor, event_bus, event_queue, grid):
    compositor.attach(event_bus)

    def make(**kwargs):
        return FrameLoop(compositor, event_bus, event_queue, grid, **kwargs)

    return make


class TestTick:

    @pytest.mark.asyncio
    async def test_run_tick_applies_queued_events(self, frame_loop_factory, event_queue, compositor, grid):
        display = MagicMock()
        loop = frame_loop_factory(status_display=display, autosave_every_ticks=0)

        event_queue.put(PadPressEvent(9))
        frame = await loop.run_tick()

        assert loop.events_processed == 1
        assert len(compositor.entities) == 1
        assert compositor.tick == 1
        assert frame.source is FrameSource.ENTITIES
        assert grid.last_frame is frame
        assert not grid.get_pad(9).is_black()
        display.show.assert_called_once_with(compositor.status_text())
        assert len(event_queue) == 0

    @pytest.mark.asyncio
    async def test_events_applied_in_arrival_order(self, frame_loop_factory, event_queue, compositor):
        loop = frame_loop_factory(autosave_every_ticks=0)

        event_queue.put(KnobTurnEvent(HUE_KNOB, KnobDirection.CLOCKWISE))
        event_queue.put(PadPressEvent(5))
        event_queue.put(KnobTurnEvent(HUE_KNOB, KnobDirection.CLOCKWISE))
        await loop.run_tick()

        # First turn edits pad 0; pad 5 inherits it on press, then the second turn edits pad 5
        assert compositor.table.peek(0).hue == 1.0
        assert compositor.table.peek(5).hue == 2.0
        assert compositor.active_pad == 5

    @pytest.mark.asyncio
    async def test_grid_error_is_not_fatal(self, compositor, event_bus, event_queue):
        grid = MagicMock()
        grid.apply_frame.side_effect = RuntimeError("port gone")
        loop = FrameLoop(compositor, event_bus, event_queue, grid, autosave_every_ticks=0)

        frame = await loop.run_tick()

        assert frame is not None
        assert loop.ticks_run == 1


class TestAutosave:

    @pytest.mark.asyncio
    async def test_saves_every_n_ticks(self, frame_loop_factory, event_queue, tmp_path):
        path = tmp_path / "assignments.json"
        loop = frame_loop_factory(state_manager=StateManager(path), autosave_every_ticks=2)

        event_queue.put(KnobTurnEvent(HUE_KNOB, KnobDirection.CLOCKWISE))
        await loop.run_tick()
        assert not path.exists()

        await loop.run_tick()
        assert path.exists()
        assert loop.autosaves == 1

        # Nothing changed since: no further write counted
        await loop.run_tick()
        await loop.run_tick()
        assert loop.autosaves == 1

    @pytest.mark.asyncio
    async def test_save_failure_is_not_fatal(self, frame_loop_factory):
        state_manager = MagicMock()
        state_manager.save_if_changed = AsyncMock(side_effect=OSError("disk full"))
        loop = frame_loop_factory(state_manager=state_manager, autosave_every_ticks=1)

        await loop.run_tick()
        await loop.run_tick()

        assert loop.ticks_run == 2
        assert loop.save_failures == 2
        assert loop.autosaves == 0

    @pytest.mark.asyncio
    async def test_no_state_manager(self, frame_loop_factory):
        loop = frame_loop_factory(autosave_every_ticks=1)
        assert await loop.save_state() is False


class TestLifecycle:

    @pytest.mark.asyncio
    async def test_start_and_stop_saves(self, frame_loop_factory, event_queue, tmp_path):
        path = tmp_path / "assignments.json"
        loop = frame_loop_factory(state_manager=StateManager(path), fps=100, autosave_every_ticks=0)

        event_queue.put(KnobTurnEvent(HUE_KNOB, KnobDirection.CLOCKWISE))
        await loop.start()
        await asyncio.sleep(0.1)
        await loop.stop()

        assert loop.ticks_run > 0
        assert loop.render_task is None
        assert loop.running is False
        assert path.exists()

    @pytest.mark.asyncio
    async def test_stop_without_start(self, frame_loop_factory):
        loop = frame_loop_factory()
        await loop.stop()
        assert loop.ticks_run == 0

    @pytest.mark.asyncio
    async def test_pause_and_step(self, frame_loop_factory):
        loop = frame_loop_factory(fps=100, autosave_every_ticks=0)
        loop.pause()

        await loop.start()
        await asyncio.sleep(0.05)
        assert loop.ticks_run == 0

        loop.step_frame()
        await asyncio.sleep(0.05)
        assert loop.ticks_run == 1

        loop.resume()
        await asyncio.sleep(0.05)
        await loop.stop()
        assert loop.ticks_run > 1


class TestMetrics:

    def test_fps_is_clamped(self, frame_loop_factory):
        assert frame_loop_factory(fps=0).fps == 1
        assert frame_loop_factory(fps=1000).fps == 240

    @pytest.mark.asyncio
    async def test_get_metrics(self, frame_loop_factory, event_queue):
        loop = frame_loop_factory(fps=30, autosave_every_ticks=0)
        event_queue.put(PadPressEvent(0))
        await loop.run_tick()
        event_queue.put(PadPressEvent(1))

        metrics = loop.get_metrics()

        assert metrics["fps_target"] == 30
        assert metrics["ticks"] == 1
        assert metrics["tick_counter"] == 1
        assert metrics["events_processed"] == 1
        assert metrics["live_entities"] == 1
        assert metrics["pending_events"] == 1
        assert "FrameLoop(" in repr(loop)
