"""Command 'delete' of todolist-cli."""

import typer

from todolist_cli.utils.task_helpers import resolve_task_reference
from todolist_cli.utils.ui.formatters import format_info, format_success

from .decorators import command_wrapper
from .session import exit_on_errors, load_tasks, make_controller, open_session


@command_wrapper
def delete_task(
    reference: str = typer.Argument(..., help="Row number, task ID or ID suffix"),
    force: bool = typer.Option(False, "--force", "-f", help="Skip confirmation"),
    profile: str = typer.Option("default", "--profile", help="Profile name"),
) -> None:
    """Delete a task."""
    with open_session(profile) as context:
        controller = make_controller(context)
        load_tasks(context, controller)
        task = resolve_task_reference(context.repository, reference)

        if not force and not typer.confirm(f"Delete task '{task.title}'?"):
            format_info("Cancelled")
            raise typer.Exit(0)

        controller.delete_task(task)
        exit_on_errors(controller)

    format_success(f"Deleted '{task.title}'")
