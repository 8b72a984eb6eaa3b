"""Command 'list' of todolist-cli."""

import typer

from .decorators import command_wrapper
from .session import make_controller, open_session


@command_wrapper
async def list_tasks(
    offline: bool = typer.Option(
        False, "--offline", help="Do not seed from the remote source"
    ),
    profile: str = typer.Option("default", "--profile", help="Profile name"),
) -> None:
    """List tasks, newest first.

    Unless --offline is given (or sync.seed_on_launch is off), remote todos
    are merged in first. A failed seed is reported and the local list is
    shown anyway.
    """
    with open_session(profile) as context:
        controller = make_controller(context, render_on_update=True)
        try:
            result = None
            if context.config.sync.seed_on_launch and not offline:
                result = await context.repository.load_and_save_todos_from_network()
            if result is None:
                context.repository.load_tasks()
        finally:
            controller.close()
