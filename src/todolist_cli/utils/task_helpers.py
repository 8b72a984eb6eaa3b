"""Task helper utilities."""

from todolist_cli.errors import TaskNotFoundError
from todolist_cli.models import Task
from todolist_cli.repositories import TaskRepository


def resolve_task_reference(repository: TaskRepository, reference: str) -> Task:
    """
    Resolve a row number, full task ID or ID suffix to a task.

    Row numbers are 1-based positions in the list the repository currently
    shows, the same numbers ``todolist list`` prints.

    Raises:
        TaskNotFoundError: If nothing matches or a suffix is ambiguous
    """
    reference = reference.strip()
    tasks = repository.active_tasks

    if reference.isdigit():
        task = repository.task_at(int(reference) - 1)
        if task is not None:
            return task

    for task in tasks:
        if task.id == reference:
            return task

    matches = [task for task in tasks if reference and task.id.endswith(reference)]
    if len(matches) == 1:
        return matches[0]
    if len(matches) > 1:
        raise TaskNotFoundError(
            f"Ambiguous task reference '{reference}' matches {len(matches)} tasks"
        )
    raise TaskNotFoundError(f"No task matching '{reference}'")
