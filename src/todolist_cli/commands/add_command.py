"""Command 'add' of todolist-cli."""

import typer

from todolist_cli.utils.exit_codes import ERROR_INVALID_ARGS
from todolist_cli.utils.ui.formatters import format_error, format_success

from .decorators import command_wrapper
from .session import exit_on_errors, make_controller, open_session


@command_wrapper
def add_task(
    title: str = typer.Argument(..., help="Task title"),
    details: str | None = typer.Option(None, "--details", "-d", help="Task details"),
    profile: str = typer.Option("default", "--profile", help="Profile name"),
) -> None:
    """Add a task."""
    if not title.strip():
        format_error("Task title cannot be empty")
        raise typer.Exit(code=ERROR_INVALID_ARGS)

    with open_session(profile) as context:
        controller = make_controller(context)
        task = controller.add_task(title, details)
        exit_on_errors(controller)

    if task is not None:
        format_success(f"Added '{task.title}' ({task.id})")
