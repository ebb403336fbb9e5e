"""Console utilities for quickdo."""

import os
from functools import lru_cache

from rich.console import Console


@lru_cache(maxsize=4)
def get_console(highlight: bool = True, color: bool = True) -> Console:
    """Get a Rich Console instance for consistent output formatting.

    Color is dropped when *color* is False or ``NO_COLOR`` is set.
    """
    no_color = not color or bool(os.environ.get("NO_COLOR"))
    return Console(highlight=highlight, no_color=no_color)
