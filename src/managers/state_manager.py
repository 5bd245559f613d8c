"""
State Manager

Handles async loading/saving of the ParameterTable to JSON.

File format:
{
    "assignments": {
        "9": {"animation": 2, "hue": 120.0, "duration": 15.0,
              "thickness": 1.0, "rate": 0.0, "distance": 0},
        ...
    }
}
"""

import aiofiles
import aiofiles.os
import json
from pathlib import Path
from typing import Union

from managers.config_manager import ConfigError
from services.parameter_table import ParameterTable
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.STATE)


class StateManager:
    """Persists the pad parameter table"""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self.last_saved_revision = -1

    async def load(self) -> ParameterTable:
        """
        Load the table; missing file = first run = empty table.

        Raises:
            ConfigError: unreadable or malformed file (no partial load)
        """
        try:
            async with aiofiles.open(self.path, "r", encoding="utf-8") as f:
                content = await f.read()
        except FileNotFoundError:
            log.info("No saved assignments, starting empty", path=str(self.path))
            table = ParameterTable()
            self.last_saved_revision = table.revision
            return table
        except OSError as ex:
            raise ConfigError(f"Cannot read {self.path}: {ex}") from ex

        try:
            table = ParameterTable.from_dict(json.loads(content))
        except (ValueError, TypeError, KeyError, AttributeError) as ex:
            raise ConfigError(f"Malformed assignments file {self.path}: {ex}") from ex

        self.last_saved_revision = table.revision
        log.info("Assignments loaded", path=str(self.path), pads=len(table))
        return table

    async def save(self, table: ParameterTable) -> None:
        """
        Write the table (temp file + atomic replace).

        Raises OSError on failure; callers in the render loop log it and
        carry on.
        """
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        revision = table.revision

        async with aiofiles.open(tmp_path, "w", encoding="utf-8") as f:
            await f.write(json.dumps(table.to_dict(), indent=2))
        await aiofiles.os.replace(tmp_path, self.path)

        self.last_saved_revision = revision
        log.debug("Assignments saved", path=str(self.path), pads=len(table))

    async def save_if_changed(self, table: ParameterTable) -> bool:
        """Save only when the table was edited since the last load/save"""
        if table.revision == self.last_saved_revision:
            return False
        await self.save(table)
        return True
