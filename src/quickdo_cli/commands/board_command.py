"""Command 'board' of quickdo"""

import typer

from quickdo_cli.services.context_manager import get_task_store
from quickdo_cli.utils.ui.formatters import format_board, format_json

from .decorators import command_wrapper
from .utils import build_filters, resolve_output

app = typer.Typer()


@app.command("board")
@command_wrapper
def board(
    show_done: bool = typer.Option(
        False, "--all", "-a", help="Include the Done column's tasks"
    ),
    tag: str | None = typer.Option(None, "--tag", "-t", help="Only tasks with this tag"),
    project: str | None = typer.Option(
        None, "--project", "-p", help="Only tasks in this project"
    ),
    search: str | None = typer.Option(
        None, "--search", "-s", help="Search title, notes and tags"
    ),
    output: str | None = typer.Option(None, "--output", "-o", help="Output format"),
    json_opt: bool = typer.Option(
        False, "--json", help="Output as JSON (alias for --output json)"
    ),
) -> None:
    """Show tasks in Today / This Week / Later / Done columns."""
    output = resolve_output(output, json_opt)
    store = get_task_store()
    buckets = store.board(build_filters(show_done, tag, project, search))

    if output == "json":
        format_json(
            {key.value: [task.to_record() for task in tasks] for key, tasks in buckets.items()}
        )
        return
    format_board(buckets)
