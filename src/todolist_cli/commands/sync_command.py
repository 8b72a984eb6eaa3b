"""Command 'sync' of todolist-cli."""

import typer

from todolist_cli.utils.ui.formatters import format_success

from .decorators import command_wrapper
from .session import exit_on_errors, make_controller, open_session


@command_wrapper
async def sync_tasks(
    profile: str = typer.Option("default", "--profile", help="Profile name"),
) -> None:
    """Fetch remote todos and merge them into the local list.

    Todos whose title already exists locally are left alone.
    """
    with open_session(profile) as context:
        controller = make_controller(context)
        result = await context.repository.load_and_save_todos_from_network()
        exit_on_errors(controller)

    if result is not None:
        format_success(
            f"Received {result.received} todos: "
            f"{result.created} added, {result.skipped} already present"
        )
