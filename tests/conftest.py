"""Shared fixtures for the pad grid engine tests"""

from typing import Dict

import pytest

from engine.compositor import Compositor
from hardware.grid.virtual_grid import VirtualPadGrid
from models.enums import KnobID, LogLevel
from services.event_bus import EventBus
from services.ingress_queue import ControlEventQueue
from services.parameter_table import ParameterTable
from utils.logger import configure_logger

from helpers import (
    ANIMATION_KNOB,
    DISTANCE_KNOB,
    DURATION_KNOB,
    HUE_KNOB,
    RATE_KNOB,
    THICKNESS_KNOB,
)


@pytest.fixture(autouse=True)
def quiet_logger():
    """Keep test output readable; only errors reach stdout"""
    configure_logger(LogLevel.ERROR, use_colors=False)
    yield
    configure_logger(LogLevel.INFO, use_colors=True)


@pytest.fixture
def knob_bindings() -> Dict[int, KnobID]:
    return {
        HUE_KNOB: KnobID.HUE,
        ANIMATION_KNOB: KnobID.ANIMATION,
        DURATION_KNOB: KnobID.DURATION,
        THICKNESS_KNOB: KnobID.THICKNESS,
        RATE_KNOB: KnobID.RATE,
        DISTANCE_KNOB: KnobID.DISTANCE,
    }


@pytest.fixture
def table() -> ParameterTable:
    return ParameterTable()


@pytest.fixture
def compositor(table, knob_bindings) -> Compositor:
    return Compositor(table, knob_bindings)


@pytest.fixture
def event_bus() -> EventBus:
    return EventBus()


@pytest.fixture
def event_queue() -> ControlEventQueue:
    return ControlEventQueue()


@pytest.fixture
def grid() -> VirtualPadGrid:
    return VirtualPadGrid()
