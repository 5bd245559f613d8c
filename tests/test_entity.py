"""
Tests for the Entity lifecycle (attack / sustain / release / dead).
"""

import pytest

from models.entity import Entity, EntityPhase, RELEASE_TICKS
from models.entity_config import EntityConfig
from models.grid import GridCell

MOMENTARY = EntityConfig(animation=0, duration=15.0)   # Ripple
SUSTAIN = EntityConfig(animation=2, duration=15.0)     # VWave


class TestMomentaryEntity:

    def test_spawn_schedules_expiry(self):
        e = Entity.spawn(MOMENTARY, 10, GridCell(0, 0))
        assert e.t0 == 10
        assert e.t1 == 25
        assert e.gated is False
        assert e.state(10) is EntityPhase.ATTACK

    def test_dead_exactly_from_t1(self):
        e = Entity.spawn(MOMENTARY, 10, GridCell(0, 0))
        assert not any(e.is_dead(t) for t in range(0, 25))
        assert all(e.is_dead(t) for t in range(25, 40))
        assert e.state(25) is EntityPhase.DEAD

    def test_phase_and_decay_are_linear(self):
        e = Entity.spawn(MOMENTARY, 0, GridCell(0, 0))
        assert e.phase(0) == 0.0
        assert e.phase(7.5) == 0.5
        assert e.decay(15) == 0.0
        # unclamped past expiry
        assert e.phase(30) == 2.0

    def test_release_is_noop(self):
        e = Entity.spawn(MOMENTARY, 0, GridCell(0, 0))
        e.release(3)
        assert e.t1 == 15
        assert e.released is False


class TestSustainEntity:

    def test_never_dies_while_gated(self):
        e = Entity.spawn(SUSTAIN, 0, GridCell(1, 1))
        assert e.gated is True
        assert not any(e.is_dead(t) for t in range(0, 1000))
        assert e.state(500) is EntityPhase.SUSTAIN

    def test_phase_frozen_while_gated(self):
        e = Entity.spawn(SUSTAIN, 0, GridCell(1, 1))
        assert e.phase(100) == 0.0
        assert e.decay(100) == 1.0

    def test_release_schedules_death(self):
        e = Entity.spawn(SUSTAIN, 0, GridCell(1, 1))
        e.release(50)
        assert e.t1 == 50 + RELEASE_TICKS
        assert e.state(52) is EntityPhase.RELEASE
        assert not e.is_dead(54)
        assert e.is_dead(55)

    def test_release_is_idempotent(self):
        once = Entity.spawn(SUSTAIN, 0, GridCell(1, 1))
        once.release(50)

        twice = Entity.spawn(SUSTAIN, 0, GridCell(1, 1))
        twice.release(50)
        twice.release(60)

        assert twice.t1 == once.t1 == 55

    def test_phase_resumes_from_spawn_after_release(self):
        e = Entity.spawn(SUSTAIN, 0, GridCell(1, 1))
        e.release(30)
        assert e.phase(30) == pytest.approx(2.0)


class TestEntitySpawn:

    def test_params_are_a_snapshot(self):
        e = Entity.spawn(MOMENTARY, 0, GridCell(2, 2))
        assert e.params is MOMENTARY

    def test_selectors_are_resolved(self):
        config = EntityConfig(animation=7, distance=9)
        e = Entity.spawn(config, 0, GridCell(0, 0))
        assert e.animation.name == "VWAVE"
        assert e.distance.name == "ROOK"
