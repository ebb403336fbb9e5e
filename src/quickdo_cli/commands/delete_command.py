"""Command 'delete' of quickdo"""

from typing import Annotated

import typer

from quickdo_cli.services.context_manager import get_task_store
from quickdo_cli.utils import exit_codes
from quickdo_cli.utils.ui.console import get_console
from quickdo_cli.utils.ui.formatters import format_success, short_id

from .decorators import command_wrapper

app = typer.Typer()
console = get_console()


@app.command("delete")
@command_wrapper
def delete_command(
    task_id: Annotated[str, typer.Argument(help="Task ID or ID prefix")],
    yes: Annotated[
        bool, typer.Option("--yes", "-y", help="Skip confirmation prompt")
    ] = False,
) -> None:
    """Delete a task permanently."""
    store = get_task_store()
    task = store.get(task_id)

    if not yes:
        confirmed = typer.confirm(f"Delete '{task.title}'?", default=False)
        if not confirmed:
            console.print("[yellow]Cancelled.[/yellow]")
            raise typer.Exit(exit_codes.SUCCESS)

    store.delete(task.id)
    format_success(f"Deleted {short_id(task.id)}: {task.title}")
