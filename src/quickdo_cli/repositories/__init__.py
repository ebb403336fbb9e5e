"""Persistence ports for quickdo.

Implementations (adapters) are in:
- quickdo_cli.adapters.json_file (JSON file on disk)
- quickdo_cli.adapters.memory (in-process, for tests and dry runs)
"""

from .repository import TaskStorage

__all__ = ["TaskStorage"]
