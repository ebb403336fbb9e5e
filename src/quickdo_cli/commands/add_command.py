"""Command 'add' of quickdo"""

import sys

import typer

from quickdo_cli.services.context_manager import get_task_store
from quickdo_cli.utils import exit_codes
from quickdo_cli.utils.timeutils import format_due
from quickdo_cli.utils.ui.console import get_console
from quickdo_cli.utils.ui.formatters import format_json, format_task_line

from .decorators import AppError, command_wrapper
from .utils import resolve_output

app = typer.Typer()
console = get_console()


@app.command("add")
@command_wrapper
def add(
    text: str | None = typer.Argument(None, help="Natural language task description"),
    notes: str | None = typer.Option(None, "--notes", "-n", help="Free-text notes"),
    output: str | None = typer.Option(
        None, "--output", "-o", help="Output format (pretty/json/table)"
    ),
    json_opt: bool = typer.Option(
        False, "--json", help="Output as JSON (alias for --output json)"
    ),
) -> None:
    """
    Add a task by typing naturally.

    Examples:
      quickdo add "Email Alex about Q3 report tomorrow 3pm #work !high"
      quickdo add "Buy milk next Friday #errands"
      quickdo add "Plan launch #proj:website"

    Syntax:
      #tag          - Add a tag (#proj:Name also sets the project)
      !high/!med/!low - Set priority explicitly
      Natural dates - today, tomorrow 3pm, next friday, in 3 days
    """
    output = resolve_output(output, json_opt)

    text = text.strip() if text else None
    if not text and not sys.stdin.isatty():
        text = sys.stdin.read().strip()
    if not text:
        raise AppError("Task text is required", exit_code=exit_codes.ERROR_INVALID_ARGS)

    store = get_task_store()
    task = store.ingest(text, notes=notes)

    if output == "json":
        format_json(task)
        return

    console.print("[bold green]✓[/bold green] Task created")
    console.print(format_task_line(task))
    details = []
    if task.due:
        details.append(f"📅 {format_due(task.due)}")
    if task.project:
        details.append(f"[magenta]📁 {task.project}[/magenta]")
    if details:
        console.print("  " + "  ".join(details))
