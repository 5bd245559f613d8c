"""
Tests for StateManager persistence of the parameter table.
"""

import json

import pytest

from managers.config_manager import ConfigError
from managers.state_manager import StateManager
from models.entity_config import EntityConfig
from services.parameter_table import ParameterTable


@pytest.mark.asyncio
async def test_missing_file_is_empty_table(tmp_path):
    manager = StateManager(tmp_path / "assignments.json")
    table = await manager.load()
    assert len(table) == 0


@pytest.mark.asyncio
async def test_save_and_load(tmp_path):
    path = tmp_path / "state" / "assignments.json"
    table = ParameterTable()
    table.set(9, EntityConfig(animation=2, hue=120.0, thickness=1.5))
    table.set(0, EntityConfig(rate=0.03, distance=4))

    await StateManager(path).save(table)
    restored = await StateManager(path).load()

    assert restored.peek(9) == table.peek(9)
    assert restored.peek(0) == table.peek(0)
    assert len(restored) == 2
    assert not path.with_suffix(".json.tmp").exists()


@pytest.mark.asyncio
async def test_file_format(tmp_path):
    path = tmp_path / "assignments.json"
    table = ParameterTable()
    table.set(3, EntityConfig(hue=45.0))
    await StateManager(path).save(table)

    data = json.loads(path.read_text(encoding="utf-8"))
    assert data["assignments"]["3"]["hue"] == 45.0


@pytest.mark.asyncio
@pytest.mark.parametrize("content", [
    "{not json",
    '{"assignments": []}',
    '{"pads": {}}',
    '{"assignments": {"99": {}}}',
])
async def test_malformed_file_is_fatal(tmp_path, content):
    path = tmp_path / "assignments.json"
    path.write_text(content, encoding="utf-8")

    with pytest.raises(ConfigError):
        await StateManager(path).load()


@pytest.mark.asyncio
async def test_save_if_changed(tmp_path):
    manager = StateManager(tmp_path / "assignments.json")
    table = await manager.load()

    assert await manager.save_if_changed(table) is False

    table.update(4, hue=10.0)
    assert await manager.save_if_changed(table) is True
    assert await manager.save_if_changed(table) is False


@pytest.mark.asyncio
async def test_save_failure_raises(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    manager = StateManager(blocker / "assignments.json")

    with pytest.raises(OSError):
        await manager.save(ParameterTable())
