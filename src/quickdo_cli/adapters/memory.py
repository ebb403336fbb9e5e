"""In-memory storage, used by tests and throwaway sessions."""

from __future__ import annotations

import copy
from typing import Any

from quickdo_cli.repositories import TaskStorage


class MemoryStorage(TaskStorage):
    """Keep the serialized collection in a list; ``saves`` counts writes."""

    def __init__(self, records: list[dict[str, Any]] | None = None):
        self.records: list[dict[str, Any]] = copy.deepcopy(records or [])
        self.saves = 0

    def load(self) -> list[dict[str, Any]]:
        return copy.deepcopy(self.records)

    def save(self, records: list[dict[str, Any]]) -> None:
        self.records = copy.deepcopy(records)
        self.saves += 1

    def clear(self) -> None:
        self.records = []
