"""Command 'version' of todolist-cli"""

from todolist_cli import __version__
from todolist_cli.utils.ui.console import get_console

console = get_console(highlight=False)


def version() -> None:
    """Show version information"""
    console.print(__version__)
