"""Commands 'tags' and 'projects' of quickdo"""

import typer

from quickdo_cli.services.context_manager import get_task_store
from quickdo_cli.services.organizer import all_projects, all_tags
from quickdo_cli.utils.ui.console import get_console
from quickdo_cli.utils.ui.formatters import format_json

from .decorators import command_wrapper

app = typer.Typer()
console = get_console()


def _print_names(names: list[str], prefix: str, empty: str, json_opt: bool) -> None:
    if json_opt:
        format_json(names)
        return
    if not names:
        console.print(f"[yellow]{empty}[/yellow]")
        return
    for name in names:
        console.print(f"{prefix}{name}")


@app.command("tags")
@command_wrapper
def list_tags(
    json_opt: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """List every tag in use, alphabetically."""
    store = get_task_store()
    _print_names(all_tags(store.tasks), "#", "No tags yet", json_opt)


@app.command("projects")
@command_wrapper
def list_projects(
    json_opt: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """List every project (from #proj: tags), alphabetically."""
    store = get_task_store()
    _print_names(all_projects(store.tasks), "📁 ", "No projects yet", json_opt)
