"""Unit tests for TaskRepository.

The store is a real in-memory SQLite database; the remote source is an
AsyncMock so nothing touches the network.
"""

from __future__ import annotations

import asyncio
import sqlite3
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from todolist_cli.errors import TransportFailureError
from todolist_cli.models import TaskFilters
from todolist_cli.repositories import TaskRepository
from todolist_cli.services.remote import RemoteTodoItem


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _item(text: str, *, completed: bool = False, id_: int = 1) -> RemoteTodoItem:
    return RemoteTodoItem.model_validate(
        {"id": id_, "todo": text, "completed": completed, "userId": 7}
    )


def _source(items=None, *, error: Exception | None = None) -> AsyncMock:
    source = AsyncMock()
    if error is not None:
        source.fetch_todos.side_effect = error
    else:
        source.fetch_todos.return_value = list(items or [])
    return source


def _listen(repository: TaskRepository) -> tuple[MagicMock, MagicMock]:
    updated, errors = MagicMock(), MagicMock()
    repository.tasks_updated.connect(updated)
    repository.error_occurred.connect(errors)
    return updated, errors


def _failing_store(error: Exception) -> MagicMock:
    """A store whose main context raises *error* for any work."""
    store = MagicMock()
    store.main_context.return_value.perform_and_wait.side_effect = error
    return store


# ---------------------------------------------------------------------------
# load_tasks
# ---------------------------------------------------------------------------


class TestLoadTasks:
    def test_starts_empty(self, repository):
        assert repository.tasks == []
        assert repository.count == 0
        assert not repository.is_searching

    def test_loads_newest_first_and_notifies(self, repository):
        repository.create_task("first")
        repository.create_task("second")
        updated, errors = _listen(repository)

        repository.load_tasks()

        assert [t.title for t in repository.tasks] == ["second", "first"]
        updated.assert_called_once_with()
        errors.assert_not_called()

    def test_failure_keeps_previous_list(self):
        repository = TaskRepository(_failing_store(sqlite3.OperationalError("locked")))
        updated, errors = _listen(repository)

        repository.load_tasks()

        assert repository.tasks == []
        updated.assert_not_called()
        errors.assert_called_once_with("Failed to load tasks: locked")

    def test_tasks_property_is_a_copy(self, repository):
        repository.create_task("Buy milk")
        repository.tasks.clear()
        assert len(repository.tasks) == 1


# ---------------------------------------------------------------------------
# Local CRUD
# ---------------------------------------------------------------------------


class TestCreateTask:
    def test_persists_and_reloads(self, repository, store):
        updated, _ = _listen(repository)

        task = repository.create_task("  Buy milk  ", "  2 litres ")

        assert task.title == "Buy milk"
        assert task.details == "2 litres"
        assert task.is_completed is False
        assert repository.tasks == [task]
        assert store.main_context().get(task.id) == task
        assert not store.main_context().has_changes
        updated.assert_called_once_with()

    @pytest.mark.parametrize("title", ["", "   ", "\n\t"])
    def test_empty_title_is_silently_rejected(self, repository, title):
        updated, errors = _listen(repository)

        assert repository.create_task(title, "details") is None

        assert repository.tasks == []
        updated.assert_not_called()
        errors.assert_not_called()

    def test_blank_details_stored_as_none(self, repository):
        assert repository.create_task("Buy milk", "   ").details is None

    def test_duplicate_titles_allowed_locally(self, repository):
        repository.create_task("Buy milk")
        repository.create_task("Buy milk")
        assert repository.count == 2

    def test_save_failure_is_reported(self, repository, store):
        _, errors = _listen(repository)

        with patch.object(store, "save", return_value=False):
            repository.create_task("Buy milk")

        errors.assert_called_once_with("Failed to save changes (create task)")

    def test_write_failure_is_reported(self):
        repository = TaskRepository(_failing_store(sqlite3.OperationalError("readonly")))
        _, errors = _listen(repository)

        assert repository.create_task("Buy milk") is None
        errors.assert_called_once_with("Failed to create task: readonly")


class TestUpdateTask:
    def test_replaces_title_and_details(self, repository):
        task = repository.create_task("Buy milk", "2 litres")

        updated = repository.update_task(task, " Buy oat milk ", "")

        assert updated.id == task.id
        assert updated.title == "Buy oat milk"
        assert updated.details is None
        assert updated.created_at == task.created_at
        assert repository.tasks == [updated]

    def test_empty_title_is_rejected(self, repository):
        task = repository.create_task("Buy milk")

        assert repository.update_task(task, "  ", "details") is None
        assert repository.tasks[0].title == "Buy milk"

    def test_does_not_reorder(self, repository):
        older = repository.create_task("older")
        repository.create_task("newer")

        repository.update_task(older, "older, edited", None)

        assert [t.title for t in repository.tasks] == ["newer", "older, edited"]


class TestDeleteAndToggle:
    def test_delete(self, repository):
        task = repository.create_task("Buy milk")

        assert repository.delete_task(task) is True
        assert repository.tasks == []

    def test_delete_missing_is_noop(self, repository):
        task = repository.create_task("Buy milk")
        repository.delete_task(task)
        _, errors = _listen(repository)

        assert repository.delete_task(task) is False
        errors.assert_not_called()

    def test_toggle_twice_restores(self, repository):
        task = repository.create_task("Buy milk")

        assert repository.toggle_completed(task).is_completed is True
        assert repository.tasks[0].is_completed is True
        assert repository.toggle_completed(task).is_completed is False


class TestTaskAt:
    def test_bounds(self, repository):
        task = repository.create_task("Buy milk")

        assert repository.task_at(0) == task
        assert repository.task_at(1) is None
        assert repository.task_at(-1) is None


# ---------------------------------------------------------------------------
# Search
# ---------------------------------------------------------------------------


class TestSearch:
    @pytest.fixture()
    def seeded(self, repository):
        repository.create_task("Buy milk")
        repository.create_task("Crème brûlée", "dessert for Sunday")
        repository.create_task("Call mom")
        return repository

    @pytest.mark.asyncio
    async def test_filters_and_notifies(self, seeded):
        updated, _ = _listen(seeded)

        await seeded.update_search_results("MILK")

        assert seeded.is_searching
        assert [t.title for t in seeded.filtered_tasks] == ["Buy milk"]
        assert seeded.active_tasks == seeded.filtered_tasks
        assert seeded.count == 1
        assert len(seeded.tasks) == 3
        updated.assert_called_once_with()

    @pytest.mark.asyncio
    async def test_matches_details_ignoring_accents(self, seeded):
        await seeded.update_search_results("creme")
        assert [t.title for t in seeded.filtered_tasks] == ["Crème brûlée"]

        await seeded.update_search_results("sunday")
        assert [t.title for t in seeded.filtered_tasks] == ["Crème brûlée"]

    @pytest.mark.asyncio
    async def test_no_results(self, seeded):
        await seeded.update_search_results("groceries")

        assert seeded.is_searching
        assert seeded.filtered_tasks == []
        assert seeded.task_at(0) is None

    def test_empty_query_ends_search_synchronously(self, seeded):
        updated, _ = _listen(seeded)

        assert seeded.update_search_results("") is None

        assert not seeded.is_searching
        assert seeded.filtered_tasks == []
        assert seeded.count == 3
        updated.assert_called_once_with()

    def test_non_empty_query_needs_running_loop(self, seeded):
        with pytest.raises(RuntimeError):
            seeded.update_search_results("milk")

    @pytest.mark.asyncio
    async def test_stale_results_are_dropped(self, seeded):
        first = seeded.update_search_results("milk")
        second = seeded.update_search_results("mom")

        await asyncio.gather(first, second)

        assert [t.title for t in seeded.filtered_tasks] == ["Call mom"]

    @pytest.mark.asyncio
    async def test_clearing_discards_pending_search(self, seeded):
        pending = seeded.update_search_results("milk")
        seeded.update_search_results("")

        await pending

        assert not seeded.is_searching
        assert seeded.filtered_tasks == []

    @pytest.mark.asyncio
    async def test_search_failure_is_reported(self):
        repository = TaskRepository(_failing_store(sqlite3.OperationalError("corrupt")))
        _, errors = _listen(repository)

        await repository.update_search_results("milk")

        errors.assert_called_once_with("Failed to search tasks: corrupt")

    @pytest.mark.asyncio
    async def test_mutation_while_searching_refreshes_tasks_not_results(self, seeded):
        await seeded.update_search_results("milk")

        seeded.create_task("Buy more milk")

        assert [t.title for t in seeded.filtered_tasks] == ["Buy milk"]
        assert seeded.tasks[0].title == "Buy more milk"


# ---------------------------------------------------------------------------
# Network seeding
# ---------------------------------------------------------------------------


class TestLoadAndSaveTodosFromNetwork:
    @pytest.mark.asyncio
    async def test_creates_local_tasks(self, store):
        items = [_item("Memorize a poem", completed=True, id_=1), _item("Go jogging", id_=2)]
        repository = TaskRepository(store, _source(items))
        updated, errors = _listen(repository)

        result = await repository.load_and_save_todos_from_network()

        assert (result.created, result.skipped, result.received) == (2, 0, 2)
        by_title = {t.title: t for t in repository.tasks}
        assert by_title["Memorize a poem"].is_completed is True
        assert by_title["Go jogging"].is_completed is False
        assert all(t.details is None for t in repository.tasks)
        assert all(t.created_at is not None for t in repository.tasks)
        updated.assert_called_once_with()
        errors.assert_not_called()

    @pytest.mark.asyncio
    async def test_existing_titles_are_left_alone(self, store):
        repository = TaskRepository(store, _source([_item("Buy milk", completed=True)]))
        local = repository.create_task("Buy milk", "from the corner shop")

        result = await repository.load_and_save_todos_from_network()

        assert (result.created, result.skipped) == (0, 1)
        assert repository.tasks == [local]

    @pytest.mark.asyncio
    async def test_remote_text_is_trimmed_before_matching(self, store):
        items = [_item("  Walk the dog ", id_=1), _item("\tWater plants\n", id_=2)]
        repository = TaskRepository(store, _source(items))
        local = repository.create_task("Walk the dog")

        result = await repository.load_and_save_todos_from_network()

        assert (result.created, result.skipped) == (1, 1)
        assert sorted(t.title for t in repository.tasks) == ["Walk the dog", "Water plants"]
        assert local in repository.tasks

    @pytest.mark.asyncio
    async def test_second_seed_creates_nothing(self, store):
        repository = TaskRepository(store, _source([_item("a", id_=1), _item("b", id_=2)]))

        await repository.load_and_save_todos_from_network()
        result = await repository.load_and_save_todos_from_network()

        assert result.created == 0
        assert repository.count == 2

    @pytest.mark.asyncio
    async def test_duplicate_titles_in_one_payload_create_one_task(self, store):
        items = [_item("Same", id_=1), _item("Same", id_=2, completed=True)]
        repository = TaskRepository(store, _source(items))

        result = await repository.load_and_save_todos_from_network()

        assert (result.created, result.skipped) == (1, 1)
        assert store.main_context().count(TaskFilters(title="Same")) == 1

    @pytest.mark.asyncio
    async def test_blank_remote_text_is_skipped(self, store):
        repository = TaskRepository(store, _source([_item("   "), _item("Real", id_=2)]))

        result = await repository.load_and_save_todos_from_network()

        assert (result.created, result.skipped) == (1, 1)
        assert [t.title for t in repository.tasks] == ["Real"]

    @pytest.mark.asyncio
    async def test_network_failure_reports_once_and_changes_nothing(self, store):
        error = TransportFailureError("Request to https://dummyjson.com/todos failed")
        repository = TaskRepository(store, _source(error=error))
        updated, errors = _listen(repository)

        assert await repository.load_and_save_todos_from_network() is None

        errors.assert_called_once_with(f"Failed to load tasks: {error}")
        updated.assert_not_called()
        assert store.main_context().count() == 0

    @pytest.mark.asyncio
    async def test_save_failure_reports_once(self, store):
        repository = TaskRepository(store, _source([_item("Go jogging")]))
        updated, errors = _listen(repository)

        with patch.object(
            TaskRepository,
            "_merge_batch",
            side_effect=sqlite3.OperationalError("disk full"),
        ):
            assert await repository.load_and_save_todos_from_network() is None

        errors.assert_called_once_with("Failed to save tasks: disk full")
        updated.assert_not_called()

    @pytest.mark.asyncio
    async def test_without_source_raises(self, repository):
        with pytest.raises(RuntimeError):
            await repository.load_and_save_todos_from_network()

    @pytest.mark.asyncio
    async def test_background_context_is_closed(self, store):
        repository = TaskRepository(store, _source([_item("Go jogging")]))
        opened = []
        original = store.new_background_context

        def tracking():
            context = original()
            opened.append(context)
            return context

        with patch.object(store, "new_background_context", side_effect=tracking):
            await repository.load_and_save_todos_from_network()

        assert len(opened) == 1
        assert opened[0].closed


class TestMergeBatch:
    def test_failed_insert_rolls_back_whole_batch(self):
        context = MagicMock()
        context.count.return_value = 0
        context.insert.side_effect = [MagicMock(), sqlite3.IntegrityError("boom")]

        with pytest.raises(sqlite3.IntegrityError):
            TaskRepository._merge_batch(context, [_item("a", id_=1), _item("b", id_=2)])

        context.rollback.assert_called_once_with()
        context.commit.assert_not_called()

    def test_single_commit_per_batch(self):
        context = MagicMock()
        context.count.return_value = 0

        result = TaskRepository._merge_batch(
            context, [_item("a", id_=1), _item("b", id_=2), _item("c", id_=3)]
        )

        assert result.created == 3
        context.commit.assert_called_once_with()
