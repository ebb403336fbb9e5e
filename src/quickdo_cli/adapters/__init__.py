"""Storage adapters implementing :class:`quickdo_cli.repositories.TaskStorage`.

- json_file: one JSON array on disk
- memory: in-process list
"""

from .json_file import JsonFileStorage
from .memory import MemoryStorage

__all__ = ["JsonFileStorage", "MemoryStorage"]
