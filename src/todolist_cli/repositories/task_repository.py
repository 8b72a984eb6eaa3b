"""Task repository - owns the task lifecycle for the presentation layer.

Holds the observable task list, the search results and the two
notification channels the list and detail controllers subscribe to.
All store access goes through the store's main context (or, for the
network merge, a background context of its own).
"""

from __future__ import annotations

import asyncio
import logging
import sqlite3
from collections.abc import Callable
from typing import TypeVar

from todolist_cli.adapters.sqlite.store import StoreContext, TaskStore
from todolist_cli.errors import RemoteTodoError
from todolist_cli.models import Task, TaskCreate, TaskFilters, TaskUpdate
from todolist_cli.services.notifications import Channel, ForegroundDispatcher
from todolist_cli.services.remote import (
    MergeResult,
    RemoteTodoItem,
    RemoteTodoSourceProtocol,
)

logger = logging.getLogger(__name__)

R = TypeVar("R")


def _clean_title(title: str | None) -> str:
    return (title or "").strip()


def _clean_details(details: str | None) -> str | None:
    details = (details or "").strip()
    return details or None


class TaskRepository:
    """Task lifecycle operations plus the state the list view renders.

    Args:
        store: Task store providing the main and background contexts.
        remote_source: Source of remote todos used for seeding.
        dispatcher: Foreground dispatcher for notifications; a new one bound
            to the constructing thread is created when omitted.

    Notifications:
        tasks_updated: emitted with no arguments whenever ``tasks`` or
            ``filtered_tasks`` changed.
        error_occurred: emitted with a human-readable message.
    """

    def __init__(
        self,
        store: TaskStore,
        remote_source: RemoteTodoSourceProtocol | None = None,
        dispatcher: ForegroundDispatcher | None = None,
    ) -> None:
        self._store = store
        self._remote_source = remote_source
        self.dispatcher = dispatcher or ForegroundDispatcher()

        self._tasks: list[Task] = []
        self._filtered_tasks: list[Task] = []
        self.is_searching = False
        self._search_generation = 0

        self.tasks_updated = Channel("tasks_updated", self.dispatcher)
        self.error_occurred = Channel("error_occurred", self.dispatcher)

    # ------------------------------------------------------------------
    # Observable state
    # ------------------------------------------------------------------

    @property
    def tasks(self) -> list[Task]:
        """All tasks, newest first."""
        return list(self._tasks)

    @property
    def filtered_tasks(self) -> list[Task]:
        """Tasks matching the active search query, newest first."""
        return list(self._filtered_tasks)

    @property
    def active_tasks(self) -> list[Task]:
        """Whichever of ``filtered_tasks``/``tasks`` the list should show."""
        return self.filtered_tasks if self.is_searching else self.tasks

    @property
    def count(self) -> int:
        return len(self._filtered_tasks if self.is_searching else self._tasks)

    def task_at(self, index: int) -> Task | None:
        """Task at *index* of the active list, or None when out of range."""
        items = self._filtered_tasks if self.is_searching else self._tasks
        if 0 <= index < len(items):
            return items[index]
        return None

    # ------------------------------------------------------------------
    # Local CRUD
    # ------------------------------------------------------------------

    def load_tasks(self) -> None:
        """Reload ``tasks`` from the main context.

        On failure the previous list is kept and an error is emitted.
        """
        context = self._store.main_context()
        try:
            tasks = context.perform_and_wait(lambda ctx: ctx.fetch(TaskFilters()))
        except sqlite3.Error as exc:
            logger.error("loading tasks failed: %s", exc)
            self._report_error(f"Failed to load tasks: {exc}")
            return

        self._tasks = tasks
        self.tasks_updated.emit()

    def create_task(self, title: str, details: str | None = None) -> Task | None:
        """Create and persist a task.

        Empty (or all-whitespace) titles are silently rejected.
        """
        title = _clean_title(title)
        if not title:
            logger.debug("rejected task with empty title")
            return None

        data = TaskCreate(title=title, details=_clean_details(details))
        return self._apply_change("create task", lambda ctx: ctx.insert(data))

    def update_task(
        self, task: Task, title: str, details: str | None = None
    ) -> Task | None:
        """Replace a task's title and details; empty titles are rejected."""
        title = _clean_title(title)
        if not title:
            logger.debug("rejected edit of %s with empty title", task.id)
            return None

        updates = TaskUpdate(title=title, details=_clean_details(details))
        return self._apply_change("update task", lambda ctx: ctx.update(task.id, updates))

    def delete_task(self, task: Task) -> bool:
        """Delete a task. Deleting a task that is already gone is a no-op."""
        return bool(self._apply_change("delete task", lambda ctx: ctx.delete(task.id)))

    def toggle_completed(self, task: Task) -> Task | None:
        """Flip the stored completion flag of *task*."""
        return self._apply_change(
            "toggle task", lambda ctx: ctx.toggle_completed(task.id)
        )

    def _apply_change(
        self, action: str, change: Callable[[StoreContext], R]
    ) -> R | None:
        """Run *change* on the main context, save, then reload ``tasks``."""
        context = self._store.main_context()

        def block(ctx: StoreContext) -> tuple[R, bool]:
            result = change(ctx)
            return result, self._store.save(ctx)

        try:
            result, saved = context.perform_and_wait(block)
        except sqlite3.Error as exc:
            logger.error("%s failed: %s", action, exc)
            self._report_error(f"Failed to {action}: {exc}")
            return None

        if not saved:
            self._report_error(f"Failed to save changes ({action})")
        self.load_tasks()
        return result

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------

    def update_search_results(self, query: str) -> asyncio.Task[None] | None:
        """Start searching titles and details for *query*.

        An empty query ends searching synchronously and returns None.
        Otherwise the search runs in the default executor and the returned
        asyncio task publishes the results on the foreground loop. Results
        of a search that was superseded by a later call are discarded.

        Raises:
            RuntimeError: If called with a non-empty query outside a running loop.
        """
        self._search_generation += 1
        generation = self._search_generation

        if not query:
            self._filtered_tasks = []
            self.is_searching = False
            self.tasks_updated.emit()
            return None

        self.dispatcher.ensure_bound()
        self.is_searching = True
        return asyncio.get_running_loop().create_task(self._search(query, generation))

    async def _search(self, query: str, generation: int) -> None:
        loop = asyncio.get_running_loop()
        context = self._store.main_context()
        filters = TaskFilters(search=query)

        try:
            results = await loop.run_in_executor(
                None, context.perform_and_wait, lambda ctx: ctx.fetch(filters)
            )
        except sqlite3.Error as exc:
            logger.error("search for %r failed: %s", query, exc)
            if generation == self._search_generation:
                self._report_error(f"Failed to search tasks: {exc}")
            return

        if generation != self._search_generation:
            logger.debug("dropping stale results for %r", query)
            return

        self._filtered_tasks = results
        self.tasks_updated.emit()

    # ------------------------------------------------------------------
    # Network seeding
    # ------------------------------------------------------------------

    async def load_and_save_todos_from_network(self) -> MergeResult | None:
        """Fetch remote todos and merge them into the local store.

        Remote items are matched to local tasks by exact title. A match is
        left untouched; anything else becomes a new task. The whole batch is
        one transaction in a background context. On success ``tasks`` is
        reloaded once; on any failure one error is emitted and nothing is
        reloaded.

        Returns:
            Counts of created and skipped items, or None on failure.
        """
        if self._remote_source is None:
            raise RuntimeError("TaskRepository has no remote source configured")

        self.dispatcher.ensure_bound()
        try:
            todos = await self._remote_source.fetch_todos()
        except RemoteTodoError as exc:
            logger.warning("fetching remote todos failed: %s", exc)
            self._report_error(f"Failed to load tasks: {exc}")
            return None

        loop = asyncio.get_running_loop()
        try:
            result = await loop.run_in_executor(None, self._merge_remote_todos, todos)
        except sqlite3.Error as exc:
            logger.error("merging remote todos failed: %s", exc)
            self._report_error(f"Failed to save tasks: {exc}")
            return None

        logger.info(
            "merged remote todos: %d created, %d skipped", result.created, result.skipped
        )
        self.load_tasks()
        return result

    def _merge_remote_todos(self, todos: list[RemoteTodoItem]) -> MergeResult:
        context = self._store.new_background_context()
        try:
            return context.perform_and_wait(lambda ctx: self._merge_batch(ctx, todos))
        finally:
            context.close()

    @staticmethod
    def _merge_batch(context: StoreContext, todos: list[RemoteTodoItem]) -> MergeResult:
        result = MergeResult()
        try:
            for item in todos:
                title = _clean_title(item.text)
                if not title:
                    result.skipped += 1
                    continue
                # Pending inserts of this batch are visible here, so repeated
                # titles within one payload produce a single task.
                if context.count(TaskFilters(title=title)):
                    result.skipped += 1
                    continue
                context.insert(
                    TaskCreate(title=title, details=None, is_completed=item.completed)
                )
                result.created += 1
            context.commit()
        except sqlite3.Error:
            context.rollback()
            raise
        return result

    # ------------------------------------------------------------------

    def _report_error(self, message: str) -> None:
        self.error_occurred.emit(message)
