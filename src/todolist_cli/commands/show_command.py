"""Command 'show' of todolist-cli."""

import typer

from todolist_cli.services.task_detail_service import TaskDetailService
from todolist_cli.utils.task_helpers import resolve_task_reference
from todolist_cli.utils.ui.formatters import format_single_task

from .decorators import command_wrapper
from .session import load_tasks, make_controller, open_session


@command_wrapper
def show_task(
    reference: str = typer.Argument(..., help="Row number, task ID or ID suffix"),
    profile: str = typer.Option("default", "--profile", help="Profile name"),
) -> None:
    """Show a task in detail."""
    with open_session(profile) as context:
        controller = make_controller(context)
        load_tasks(context, controller)
        task = resolve_task_reference(context.repository, reference)
        detail = TaskDetailService(context.repository, task)
        format_single_task(task, detail.created_date_string)
