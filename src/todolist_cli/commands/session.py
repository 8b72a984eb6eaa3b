"""Shared plumbing for the task commands."""

from collections.abc import Iterator
from contextlib import contextmanager

import typer

from todolist_cli.services.app_context import AppContext, get_app_context
from todolist_cli.ui import TaskListController
from todolist_cli.utils.exit_codes import ERROR_GENERAL
from todolist_cli.utils.ui.console import get_console


@contextmanager
def open_session(profile: str) -> Iterator[AppContext]:
    """Open the app context of *profile* for the duration of a command."""
    context = get_app_context(profile)
    with context:
        yield context


def make_controller(
    context: AppContext, *, render_on_update: bool = False
) -> TaskListController:
    output = context.config.output
    return TaskListController(
        context.repository,
        get_console(no_color=not output.color),
        date_format=output.date_format,
        render_on_update=render_on_update,
    )


def exit_on_errors(controller: TaskListController) -> None:
    """Fail the command if the repository reported any error.

    The messages themselves were already printed by the controller.
    """
    if controller.errors:
        raise typer.Exit(code=ERROR_GENERAL)


def load_tasks(context: AppContext, controller: TaskListController) -> None:
    context.repository.load_tasks()
    exit_on_errors(controller)
