"""Command 'edit' of todolist-cli."""

import typer

from todolist_cli.utils.exit_codes import ERROR_INVALID_ARGS
from todolist_cli.utils.task_helpers import resolve_task_reference
from todolist_cli.utils.ui.formatters import format_error, format_info, format_success

from .decorators import command_wrapper
from .session import exit_on_errors, load_tasks, make_controller, open_session


@command_wrapper
def edit_task(
    reference: str = typer.Argument(..., help="Row number, task ID or ID suffix"),
    title: str | None = typer.Option(None, "--title", "-t", help="New title"),
    details: str | None = typer.Option(
        None, "--details", "-d", help="New details (empty string clears them)"
    ),
    profile: str = typer.Option("default", "--profile", help="Profile name"),
) -> None:
    """Edit a task's title or details."""
    if title is None and details is None:
        format_error("Nothing to change; pass --title and/or --details")
        raise typer.Exit(code=ERROR_INVALID_ARGS)

    with open_session(profile) as context:
        controller = make_controller(context)
        load_tasks(context, controller)
        task = resolve_task_reference(context.repository, reference)

        new_title = task.title if title is None else title
        new_details = task.details if details is None else details
        if not new_title.strip():
            format_error("Task title cannot be empty")
            raise typer.Exit(code=ERROR_INVALID_ARGS)

        changed = controller.edit_task(task, new_title, new_details)
        exit_on_errors(controller)

    if changed:
        format_success(f"Updated '{new_title.strip()}'")
    else:
        format_info("No changes")
