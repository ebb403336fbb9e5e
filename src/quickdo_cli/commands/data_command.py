"""Data management commands (export, import, reset)."""

from pathlib import Path

import typer

from quickdo_cli.models.exceptions import TaskImportError
from quickdo_cli.services.context_manager import get_task_store
from quickdo_cli.utils import exit_codes
from quickdo_cli.utils.typer_helpers import SuggestingGroup
from quickdo_cli.utils.ui.console import get_console
from quickdo_cli.utils.ui.formatters import format_success, format_warning

from .decorators import AppError, command_wrapper

app = typer.Typer(cls=SuggestingGroup, help="Data management commands")
console = get_console()


@app.command("export")
@command_wrapper
def export_data(
    output: str | None = typer.Option(
        None,
        "--output",
        "-o",
        help="Output file path (default: print to stdout)",
    ),
) -> None:
    """
    Export all tasks as a JSON array.

    Examples:
        quickdo data export > backup.json
        quickdo data export --output tasks-export.json
    """
    store = get_task_store()
    payload = store.export_json()

    if output is None:
        print(payload)
        return

    path = Path(output).expanduser()
    try:
        path.write_text(payload + "\n", encoding="utf-8")
    except OSError as e:
        raise AppError(f"Could not write {path}: {e}", exit_code=exit_codes.ERROR_STORAGE) from e
    format_success(f"Exported {len(store.tasks)} task(s) to {path}")


@app.command("import")
@command_wrapper
def import_data(
    input_file: str = typer.Argument(..., help="JSON file produced by 'data export'"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation prompt"),
) -> None:
    """
    Replace all tasks with the contents of a JSON export.

    Missing fields get defaults; a malformed file leaves your tasks untouched.
    """
    path = Path(input_file).expanduser()
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise TaskImportError(f"Could not read {path}: {e}") from e

    store = get_task_store()
    if store.tasks and not yes:
        confirmed = typer.confirm(
            f"Replace your {len(store.tasks)} existing task(s)?", default=False
        )
        if not confirmed:
            console.print("[yellow]Cancelled.[/yellow]")
            raise typer.Exit(exit_codes.SUCCESS)

    imported = store.import_json(text)
    format_success(f"Imported {len(imported)} task(s) from {path}")


@app.command("reset")
@command_wrapper
def reset_data(
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation prompt"),
) -> None:
    """Delete every task and the task file."""
    if not yes:
        format_warning("This permanently deletes all tasks.")
        confirmed = typer.confirm("Continue?", default=False)
        if not confirmed:
            console.print("[yellow]Cancelled.[/yellow]")
            raise typer.Exit(exit_codes.SUCCESS)

    store = get_task_store()
    store.reset()
    format_success("All tasks deleted")
