"""Storage abstraction for the task collection.

The whole collection is persisted as one serialized value, so the port is
deliberately small: load everything, save everything. Implementations live
in :mod:`quickdo_cli.adapters`.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class TaskStorage(ABC):
    """Abstract base class for task collection persistence."""

    @abstractmethod
    def load(self) -> list[dict[str, Any]]:
        """Load all persisted task records.

        Returns:
            List of raw record dicts; empty when nothing has been saved

        Raises:
            StorageError: If stored data exists but cannot be read
        """
        raise NotImplementedError("TaskStorage.load() must be implemented by adapter")

    @abstractmethod
    def save(self, records: list[dict[str, Any]]) -> None:
        """Replace the persisted collection with *records*.

        Raises:
            StorageError: If the collection cannot be written
        """
        raise NotImplementedError("TaskStorage.save() must be implemented by adapter")

    @abstractmethod
    def clear(self) -> None:
        """Remove the persisted collection entirely."""
        raise NotImplementedError("TaskStorage.clear() must be implemented by adapter")
