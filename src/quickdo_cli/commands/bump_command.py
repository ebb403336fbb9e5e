"""Command 'bump' of quickdo"""

from typing import Annotated

import typer

from quickdo_cli.services.context_manager import get_task_store
from quickdo_cli.utils.ui.formatters import format_json, format_success, short_id

from .decorators import command_wrapper

app = typer.Typer()


@app.command("bump")
@command_wrapper
def bump_command(
    task_id: Annotated[str, typer.Argument(help="Task ID or ID prefix")],
    down: Annotated[
        bool, typer.Option("--down", "-d", help="Lower the priority instead")
    ] = False,
    json_opt: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
) -> None:
    """Raise (or with --down, lower) a task's priority by one step."""
    store = get_task_store()
    task = store.bump(task_id, -1 if down else 1)

    if json_opt:
        format_json(task)
        return
    format_success(f"{short_id(task.id)} priority is now {task.priority.value}")
