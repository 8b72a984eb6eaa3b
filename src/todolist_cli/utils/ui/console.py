"""Console utilities for todolist-cli."""

from functools import lru_cache

from rich.console import Console


@lru_cache(maxsize=4)
def get_console(highlight: bool = True, no_color: bool = False) -> Console:
    """Return the shared Rich console for a given style combination."""
    return Console(highlight=highlight, no_color=no_color)
