"""Command 'done' of quickdo"""

from typing import Annotated

import typer

from quickdo_cli.services.context_manager import get_task_store
from quickdo_cli.utils.ui.formatters import format_json, format_success, short_id

from .decorators import command_wrapper

app = typer.Typer()


@app.command("done")
@command_wrapper
def toggle_done_command(
    task_ids: Annotated[
        list[str], typer.Argument(help="Task ID(s) or ID prefixes - can specify multiple")
    ],
    json_opt: Annotated[
        bool, typer.Option("--json", help="Output as JSON")
    ] = False,
) -> None:
    """Toggle completion of one or more tasks."""
    store = get_task_store()
    updated = [store.toggle(task_id) for task_id in task_ids]

    if json_opt:
        format_json(updated)
        return
    for task in updated:
        state = "completed" if task.done else "reopened"
        format_success(f"{state} {short_id(task.id)}: {task.title}")
