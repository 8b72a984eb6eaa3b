"""Presentation controllers for the task list and task detail views."""

from todolist_cli.ui.detail_controller import TaskDetailController
from todolist_cli.ui.list_controller import TaskListController

__all__ = ["TaskDetailController", "TaskListController"]
