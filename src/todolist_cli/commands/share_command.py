"""Command 'share' of todolist-cli."""

import typer

from todolist_cli.utils.task_helpers import resolve_task_reference

from .decorators import command_wrapper
from .session import load_tasks, make_controller, open_session


@command_wrapper
def share_task(
    reference: str = typer.Argument(..., help="Row number, task ID or ID suffix"),
    profile: str = typer.Option("default", "--profile", help="Profile name"),
) -> None:
    """Print a task as plain text, ready to paste elsewhere."""
    with open_session(profile) as context:
        controller = make_controller(context)
        load_tasks(context, controller)
        task = resolve_task_reference(context.repository, reference)
        typer.echo(controller.share_text(task))
