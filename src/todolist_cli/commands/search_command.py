"""Command 'search' of todolist-cli."""

import typer

from .decorators import command_wrapper
from .session import exit_on_errors, make_controller, open_session


@command_wrapper
async def search_tasks(
    query: str = typer.Argument(..., help="Text to look for in titles and details"),
    profile: str = typer.Option("default", "--profile", help="Profile name"),
) -> None:
    """Search tasks by title or details, ignoring case and accents."""
    with open_session(profile) as context:
        controller = make_controller(context, render_on_update=True)
        try:
            if query.strip():
                await controller.search(query)
            else:
                context.repository.load_tasks()
        finally:
            controller.close()
        exit_on_errors(controller)
