"""List controller: renders the task list and relays user intents."""

from __future__ import annotations

import logging

from rich.console import Console

from todolist_cli.models import Task
from todolist_cli.repositories import TaskRepository
from todolist_cli.services.task_detail_service import TaskDetailService
from todolist_cli.ui.detail_controller import TaskDetailController
from todolist_cli.utils.ui.console import get_console
from todolist_cli.utils.ui.formatters import (
    DEFAULT_ROW_DATE_FORMAT,
    build_task_table,
    format_error,
)

logger = logging.getLogger(__name__)


def share_text(task: Task) -> str:
    """Plain-text payload for sharing: the title, then details if any."""
    if task.details:
        return f"{task.title}\n{task.details}"
    return task.title


class TaskListController:
    """Binds a :class:`TaskRepository` to a rich console.

    Args:
        repository: Repository whose notifications drive the view.
        console: Console to render on; the shared console when omitted.
        date_format: strftime format of the row creation date.
        render_on_update: Redraw the table on every ``tasks_updated``.
            Commands that only report an outcome turn this off.
    """

    def __init__(
        self,
        repository: TaskRepository,
        console: Console | None = None,
        *,
        date_format: str = DEFAULT_ROW_DATE_FORMAT,
        render_on_update: bool = True,
    ) -> None:
        self.repository = repository
        self.console = console or get_console()
        self.date_format = date_format
        self.errors: list[str] = []
        self._query = ""

        self._disconnects = [repository.error_occurred.connect(self.on_error)]
        if render_on_update:
            self._disconnects.append(
                repository.tasks_updated.connect(self.on_tasks_updated)
            )

    def close(self) -> None:
        """Unsubscribe from the repository."""
        for disconnect in self._disconnects:
            disconnect()
        self._disconnects = []

    # ------------------------------------------------------------------
    # Notifications
    # ------------------------------------------------------------------

    def on_tasks_updated(self) -> None:
        self.render()

    def on_error(self, message: str) -> None:
        self.errors.append(message)
        format_error(message)

    def render(self) -> None:
        tasks = self.repository.active_tasks
        if self.repository.is_searching:
            title = f"Results for '{self._query}'"
            empty = f"No tasks match '{self._query}'"
        else:
            title = "Tasks"
            empty = "No tasks yet"

        if not tasks:
            self.console.print(f"[yellow]{empty}[/yellow]")
            return
        self.console.print(build_task_table(tasks, self.date_format, title=title))

    # ------------------------------------------------------------------
    # Intents
    # ------------------------------------------------------------------

    def add_task(self, title: str, details: str | None = None) -> Task | None:
        controller = TaskDetailController(TaskDetailService(self.repository))
        if not controller.save_changes_if_needed(title, details):
            return None
        return controller.detail_service.task

    def edit_task(self, task: Task, title: str, details: str | None) -> bool:
        """Apply an edit; False when nothing changed or it was rejected."""
        controller = TaskDetailController(TaskDetailService(self.repository, task))
        return controller.save_changes_if_needed(title, details)

    def delete_task(self, task: Task) -> bool:
        return self.repository.delete_task(task)

    def toggle_task(self, task: Task) -> Task | None:
        return self.repository.toggle_completed(task)

    async def search(self, query: str) -> None:
        """Run a search and wait for its results to be published."""
        self._query = query
        pending = self.repository.update_search_results(query)
        if pending is not None:
            await pending

    def share_text(self, task: Task) -> str:
        return share_text(task)
