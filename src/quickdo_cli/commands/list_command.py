"""Command 'list' of quickdo"""

import typer

from quickdo_cli.services.context_manager import get_task_store
from quickdo_cli.services.organizer import filter_summary

from .decorators import command_wrapper
from .utils import build_filters, print_tasks, resolve_output

app = typer.Typer()


@app.command("list")
@command_wrapper
def list_tasks(
    show_done: bool = typer.Option(
        False, "--all", "-a", help="Include completed tasks"
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
    """List tasks: open first, then by priority, due date and age."""
    output = resolve_output(output, json_opt)
    filters = build_filters(show_done, tag, project, search)

    store = get_task_store()
    print_tasks(store.listing(filters), output, summary=filter_summary(filters))
