"""Command 'focus' of quickdo"""

from typing import Annotated

import typer

from quickdo_cli.services.context_manager import get_task_store
from quickdo_cli.services.organizer import FOCUS_LIMIT
from quickdo_cli.utils.ui.formatters import format_focus, format_info, format_json

from .decorators import command_wrapper
from .utils import resolve_output

app = typer.Typer()


@app.command("focus")
@command_wrapper
def focus_command(
    limit: Annotated[
        int, typer.Option("--limit", "-n", min=1, help="How many tasks to show")
    ] = FOCUS_LIMIT,
    output: Annotated[
        str | None, typer.Option("--output", "-o", help="Output format")
    ] = None,
    json_opt: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
) -> None:
    """Show the open tasks to work on next.

    Ranked by priority, then by nearest due date; list filters do not apply.
    """
    store = get_task_store()
    tasks = store.focus(limit)

    if resolve_output(output, json_opt) == "json":
        format_json(tasks)
        return

    format_focus(tasks, limit)
    if tasks:
        format_info("Break one down with: quickdo assist breakdown <ID>")
