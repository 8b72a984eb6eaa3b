"""Main entry point for todolist-cli."""

import typer

from todolist_cli.commands import (
    add_command,
    config,
    delete_command,
    edit_command,
    list_command,
    search_command,
    share_command,
    show_command,
    sync_command,
    toggle_command,
    version_command,
)
from todolist_cli.utils.logger import get_logger
from todolist_cli.utils.typer_helpers import SuggestingGroup

app = typer.Typer(
    name="todolist",
    cls=SuggestingGroup,
    help="An offline-first to-do list for the terminal",
    no_args_is_help=True,
)

app.command("list")(list_command.list_tasks)
app.command("add")(add_command.add_task)
app.command("show")(show_command.show_task)
app.command("edit")(edit_command.edit_task)
app.command("delete")(delete_command.delete_task)
app.command("toggle")(toggle_command.toggle_task)
app.command("search")(search_command.search_tasks)
app.command("share")(share_command.share_task)
app.command("sync")(sync_command.sync_tasks)
app.command("version")(version_command.version)

app.add_typer(config.app, name="config", help="Configuration management")


def main():
    """Main entry point."""
    get_logger()
    app()


if __name__ == "__main__":
    main()
