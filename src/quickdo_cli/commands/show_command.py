"""Command 'show' of quickdo"""

from typing import Annotated

import typer

from quickdo_cli.services.context_manager import get_task_store

from .decorators import command_wrapper
from .utils import print_task, resolve_output

app = typer.Typer()


@app.command("show")
@command_wrapper
def show_command(
    task_id: Annotated[str, typer.Argument(help="Task ID or ID prefix")],
    output: Annotated[
        str | None, typer.Option("--output", "-o", help="Output format")
    ] = None,
    json_opt: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
) -> None:
    """Show one task with its notes and subtasks."""
    store = get_task_store()
    print_task(store.get(task_id), resolve_output(output, json_opt))
