"""Command 'toggle' of todolist-cli."""

import typer

from todolist_cli.utils.task_helpers import resolve_task_reference
from todolist_cli.utils.ui.formatters import format_success

from .decorators import command_wrapper
from .session import exit_on_errors, load_tasks, make_controller, open_session


@command_wrapper
def toggle_task(
    reference: str = typer.Argument(..., help="Row number, task ID or ID suffix"),
    profile: str = typer.Option("default", "--profile", help="Profile name"),
) -> None:
    """Mark a task done, or not done again."""
    with open_session(profile) as context:
        controller = make_controller(context)
        load_tasks(context, controller)
        task = resolve_task_reference(context.repository, reference)
        updated = controller.toggle_task(task)
        exit_on_errors(controller)

    if updated is not None:
        state = "done" if updated.is_completed else "not done"
        format_success(f"Marked '{updated.title}' as {state}")
