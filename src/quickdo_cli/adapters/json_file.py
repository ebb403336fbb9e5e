"""JSON file storage for the task collection."""

from __future__ import annotations

import json
import os
import tempfile
from json import JSONDecodeError
from pathlib import Path
from typing import Any

from quickdo_cli.models.exceptions import StorageError
from quickdo_cli.repositories import TaskStorage
from quickdo_cli.utils.logger import get_logger

logger = get_logger("storage")


class JsonFileStorage(TaskStorage):
    """Persist the collection as a single JSON array.

    Writes go to a sibling temp file which then replaces the target, so a
    reader never sees a half-written collection.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path).expanduser()

    def load(self) -> list[dict[str, Any]]:
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            return []
        except (OSError, JSONDecodeError) as e:
            raise StorageError(f"Failed to read tasks from {self.path}: {e}") from e

        if not isinstance(data, list):
            raise StorageError(f"Task file {self.path} does not contain a JSON array")
        return data

    def save(self, records: list[dict[str, Any]]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(records, f, indent=2, ensure_ascii=False)
            os.chmod(tmp_name, 0o600)
            os.replace(tmp_name, self.path)
        except OSError as e:
            Path(tmp_name).unlink(missing_ok=True)
            raise StorageError(f"Failed to write tasks to {self.path}: {e}") from e
        logger.debug("saved %d task(s) to %s", len(records), self.path)

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)
