"""Detail controller: commits an edit only when something changed."""

from __future__ import annotations

import logging

from todolist_cli.models import Task
from todolist_cli.services.task_detail_service import TaskDetailService

logger = logging.getLogger(__name__)


class TaskDetailController:
    """Edit session over a :class:`TaskDetailService`.

    The values loaded when the session started are kept so that closing
    an unchanged editor writes nothing.
    """

    def __init__(self, detail_service: TaskDetailService) -> None:
        self.detail_service = detail_service
        self.original_title = detail_service.title
        self.original_details = detail_service.details

    @property
    def header(self) -> str:
        return "New Task" if self.detail_service.is_new_task else "Edit Task"

    def save_changes_if_needed(self, title: str | None, details: str | None) -> bool:
        """Save when the trimmed title or details differ from the originals.

        An empty title is never committed. Returns True when a save went
        through.
        """
        title = (title or "").strip()
        details = (details or "").strip()

        if not title:
            logger.debug("not saving task with empty title")
            return False
        if title == self.original_title and details == self.original_details:
            return False

        saved: Task | None = self.detail_service.save_task(title, details)
        if saved is None:
            return False

        self.original_title = self.detail_service.title
        self.original_details = self.detail_service.details
        return True
