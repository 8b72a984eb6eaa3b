"""Output formatters for messages and tasks."""

from datetime import datetime

from rich.table import Table
from rich.text import Text

from todolist_cli.models import Task
from todolist_cli.utils.ui.console import get_console

DEFAULT_ROW_DATE_FORMAT = "%d/%m/%y"


def calculate_unique_suffixes(task_ids: list[str]) -> dict[str, int]:
    """
    Calculate minimum unique suffix length for each task ID.

    Starts from length 1 and grows until unique among all IDs.

    Args:
        task_ids: List of full task IDs

    Returns:
        Dict mapping task_id -> required suffix length
    """
    result = {}

    for task_id in task_ids:
        for length in range(1, len(task_id) + 1):
            suffix = task_id[-length:]
            conflicts = [
                tid for tid in task_ids if tid != task_id and tid.endswith(suffix)
            ]
            if not conflicts:
                result[task_id] = length
                break
        else:
            result[task_id] = len(task_id)

    return result


def format_error(message: str) -> None:
    """Format and display an error message."""
    get_console().print(f"[bold red]Error:[/bold red] {message}")


def format_success(message: str) -> None:
    """Format and display a success message."""
    get_console().print(f"[bold green]Success:[/bold green] {message}")


def format_info(message: str) -> None:
    """Format and display an info message."""
    get_console().print(f"[bold blue]Info:[/bold blue] {message}")


def format_date(value: datetime | None, date_format: str = DEFAULT_ROW_DATE_FORMAT) -> str:
    """Render *value* in local time; empty string for a missing date."""
    if value is None:
        return ""
    return value.astimezone().strftime(date_format)


def format_task_cell(task: Task) -> Text:
    """Title line plus an optional dimmed details line.

    Completed tasks get a struck-through, dimmed title.
    """
    style = "dim strike" if task.is_completed else "bold"
    cell = Text(task.title, style=style)
    if task.details:
        cell.append("\n")
        cell.append(task.details, style="dim")
    return cell


def build_task_table(
    tasks: list[Task],
    date_format: str = DEFAULT_ROW_DATE_FORMAT,
    title: str | None = None,
) -> Table:
    """Build the task list table: row number, id suffix, task cell, date."""
    suffixes = calculate_unique_suffixes([task.id for task in tasks])

    table = Table(show_header=True, header_style="bold magenta", title=title)
    table.add_column("#", justify="right", style="cyan")
    table.add_column("ID", style="dim")
    table.add_column("Task")
    table.add_column("Created", justify="right")

    for row, task in enumerate(tasks, start=1):
        status = "[green]✓[/green]" if task.is_completed else " "
        table.add_row(
            f"{row} {status}",
            task.id[-suffixes.get(task.id, len(task.id)) :],
            format_task_cell(task),
            format_date(task.created_at, date_format),
        )

    return table


def format_single_task(task: Task, created: str) -> None:
    """Format a single task as key-value pairs."""
    table = Table(show_header=False, box=None)
    table.add_column("Key", style="cyan")
    table.add_column("Value", style="white")

    table.add_row("ID", task.id)
    table.add_row("Title", task.title)
    table.add_row("Details", task.details or "-")
    table.add_row("Created", created or "-")
    table.add_row("Completed", "✓" if task.is_completed else "✗")

    get_console().print(table)
