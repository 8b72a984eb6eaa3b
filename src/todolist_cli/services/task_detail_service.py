"""Task detail service - the single-task view of an add or edit screen."""

from __future__ import annotations

from datetime import datetime

from todolist_cli.models import Task
from todolist_cli.repositories import TaskRepository

CREATED_DATE_FORMAT = "%d %B %Y, %H:%M"


class TaskDetailService:
    """Holds one task being created (``task=None``) or edited."""

    def __init__(self, repository: TaskRepository, task: Task | None = None) -> None:
        self._repository = repository
        self._task = task

    @property
    def task(self) -> Task | None:
        return self._task

    @property
    def is_new_task(self) -> bool:
        return self._task is None

    @property
    def title(self) -> str:
        return self._task.title if self._task else ""

    @property
    def details(self) -> str:
        return (self._task.details or "") if self._task else ""

    @property
    def created_at(self) -> datetime | None:
        return self._task.created_at if self._task else None

    @property
    def created_date_string(self) -> str:
        """Creation time in local time, e.g. ``"05 March 2024, 14:30"``."""
        if self.created_at is None:
            return ""
        return self.created_at.astimezone().strftime(CREATED_DATE_FORMAT)

    def save_task(self, title: str, details: str | None) -> Task | None:
        """Create the task, or update the one being edited.

        Returns the stored task, or None when the repository rejected or
        failed the change.
        """
        if self._task is None:
            saved = self._repository.create_task(title, details)
        else:
            saved = self._repository.update_task(self._task, title, details)
        if saved is not None:
            self._task = saved
        return saved
