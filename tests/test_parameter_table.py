"""
Tests for ParameterTable lazy defaults, edits and serialization.
"""

import pytest

from models.entity_config import EntityConfig, DEFAULT_ENTITY_CONFIG
from services.parameter_table import ParameterTable


class TestLazyDefaults:

    def test_get_inserts_default(self, table):
        assert 9 not in table
        cfg = table.get(9)
        assert cfg == EntityConfig(animation=0, hue=0.0, duration=15.0, thickness=1.0, rate=0.0, distance=0)
        assert 9 in table
        assert table.get(9) is cfg

    def test_get_bumps_revision_once(self, table):
        table.get(3)
        revision = table.revision
        table.get(3)
        assert table.revision == revision

    def test_peek_does_not_insert(self, table):
        assert table.peek(4) is None
        assert 4 not in table
        assert len(table) == 0

    def test_out_of_range_pad(self, table):
        with pytest.raises(KeyError):
            table.get(64)
        with pytest.raises(KeyError):
            table.set(-1, DEFAULT_ENTITY_CONFIG)


class TestEdits:

    def test_update_replaces_frozen_entry(self, table):
        before = table.get(1)
        after = table.update(1, hue=42.0)
        assert before.hue == 0.0
        assert after.hue == 42.0
        assert table.get(1) is after

    def test_update_creates_absent_entry(self, table):
        table.update(5, rate=0.5)
        assert table.get(5) == EntityConfig(rate=0.5)

    def test_items_sorted(self, table):
        table.set(10, EntityConfig(hue=10))
        table.set(2, EntityConfig(hue=2))
        assert [pad for pad, _ in table.items()] == [2, 10]


class TestSerialization:

    def test_round_trip(self, table):
        table.set(9, EntityConfig(animation=2, hue=120.0, rate=0.25, distance=3))
        restored = ParameterTable.from_dict(table.to_dict())
        assert restored.peek(9) == table.peek(9)
        assert len(restored) == 1

    def test_document_shape(self, table):
        table.set(0, EntityConfig(hue=30.0))
        data = table.to_dict()
        assert data == {
            "assignments": {
                "0": {"animation": 0, "hue": 30.0, "duration": 15.0,
                      "thickness": 1.0, "rate": 0.0, "distance": 0},
            }
        }

    def test_missing_fields_take_defaults(self):
        restored = ParameterTable.from_dict({"assignments": {"7": {"animation": 1, "hue": 90}}})
        assert restored.peek(7) == EntityConfig(animation=1, hue=90.0)

    @pytest.mark.parametrize("data,error", [
        ({}, KeyError),
        ({"assignments": []}, TypeError),
        ({"assignments": {"x": {}}}, ValueError),
        ({"assignments": {"70": {}}}, KeyError),
        ({"assignments": {"1": {"hue": "red"}}}, ValueError),
    ])
    def test_malformed_documents_raise(self, data, error):
        with pytest.raises(error):
            ParameterTable.from_dict(data)
