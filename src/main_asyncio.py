#!/usr/bin/env python3
"""
padlight - visual entity engine for an 8x8 pad controller

Wiring:
  Push 2 (rtmidi thread) → ControlEventQueue → FrameLoop → EventBus → Compositor
                                                   └→ pad grid sink + status display
"""

import sys

# ---------------------------------------------------------------------------
# UTF-8 ENCODING FIX (log symbols on Raspberry Pi / Windows consoles)
# ---------------------------------------------------------------------------

if hasattr(sys.stdout, 'reconfigure') and sys.stdout.encoding != 'UTF-8':
    sys.stdout.reconfigure(encoding='utf-8')  # type: ignore
if hasattr(sys.stderr, 'reconfigure') and sys.stderr.encoding != 'UTF-8':
    sys.stderr.reconfigure(encoding='utf-8')  # type: ignore

import argparse
import asyncio
from typing import List, Optional

from engine import Compositor, FrameLoop
from hardware import IPadGrid, LogStatusDisplay, VirtualPadGrid
from hardware.push2 import Push2Device
from hardware.push2.protocol import ENCODER_CCS, ControlMap
from lifecycle import ShutdownCoordinator
from lifecycle.handlers import FrameLoopShutdownHandler, GridShutdownHandler
from managers import ConfigError, ConfigManager, StateManager
from models.enums import LogCategory
from services import ControlEventQueue, EventBus
from services.middleware import log_middleware, validation_middleware
from utils.logger import configure_logger, get_logger

log = get_logger().for_category(LogCategory.SYSTEM)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="padlight",
        description="Animated light entities on an 8x8 pad grid",
    )
    parser.add_argument(
        "--config",
        default="config/config.yaml",
        help="Path to config.yaml (relative paths resolve against the package source dir)",
    )
    parser.add_argument(
        "--virtual",
        action="store_true",
        help="Render to an in-memory grid instead of the Push 2",
    )
    return parser.parse_args(argv)


# ---------------------------------------------------------------------------
# Application Entry
# ---------------------------------------------------------------------------

async def main(args: argparse.Namespace) -> int:
    """Main async entry point (dependency injection and event loop startup)."""

    # ========================================================================
    # 1. CONFIGURATION & STATE (both fatal on error)
    # ========================================================================

    config = ConfigManager(args.config)
    config.load()
    configure_logger(config.log_level, config.use_colors)

    log.info("Starting padlight...")

    state_manager = StateManager(config.state_path)
    table = await state_manager.load()

    # ========================================================================
    # 2. EVENTS & ENGINE
    # ========================================================================

    event_bus = EventBus()
    event_bus.add_middleware(validation_middleware)
    event_bus.add_middleware(log_middleware)

    knob_bindings = config.knob_bindings
    compositor = Compositor(table, knob_bindings)
    compositor.attach(event_bus)

    event_queue = ControlEventQueue()

    # ========================================================================
    # 3. HARDWARE
    # ========================================================================

    device = None
    grid: IPadGrid
    if args.virtual or config.virtual:
        log.info("Using virtual pad grid")
        grid = VirtualPadGrid()
    else:
        control_map = ControlMap(
            pad_note_first=config.pad_note_first,
            assign_button=config.assign_button,
            encoder_ccs=frozenset(ENCODER_CCS | set(knob_bindings)),
        )
        device = Push2Device(event_queue, control_map, config.port_name)
        grid = device.open()

    # ========================================================================
    # 4. FRAME LOOP
    # ========================================================================

    frame_loop = FrameLoop(
        compositor,
        event_bus,
        event_queue,
        grid,
        status_display=LogStatusDisplay(),
        state_manager=state_manager,
        fps=config.fps,
        autosave_every_ticks=config.autosave_every_ticks,
    )

    # ========================================================================
    # 5. SHUTDOWN COORDINATOR
    # ========================================================================

    coordinator = ShutdownCoordinator()
    coordinator.register(FrameLoopShutdownHandler(frame_loop))
    coordinator.register(GridShutdownHandler(grid, device))
    coordinator.setup_signal_handlers(asyncio.get_running_loop())

    try:
        await frame_loop.start()
        log.info("🏁 Application initialized. Waiting for exit signal...")
        await coordinator.wait_for_shutdown([frame_loop.render_task])
    finally:
        await coordinator.shutdown_all()

    log.info("👋 padlight shut down cleanly.", metrics=frame_loop.get_metrics())
    return 0


def run(argv: Optional[List[str]] = None) -> None:
    """Console script entry point"""
    args = parse_args(argv)
    exit_code = 0
    try:
        exit_code = asyncio.run(main(args))
    except KeyboardInterrupt:
        log.info("Keyboard interrupt received")
    except ConfigError as e:
        log.error(f"Fatal configuration error: {e}")
        exit_code = 2
    except Exception as e:
        log.error(f"Fatal error: {e}", exc_info=True)
        exit_code = 1
    sys.exit(exit_code)


# ---------------------------------------------------------------------------
# ENTRY POINT
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    run()
