"""Assistant commands of quickdo (day summary, task breakdown)."""

from datetime import datetime

import typer
from rich.markup import escape
from rich.panel import Panel

from quickdo_cli.services.assistant import parse_subtask_suggestions
from quickdo_cli.services.context_manager import get_configured_assistant, get_task_store
from quickdo_cli.utils.typer_helpers import SuggestingGroup
from quickdo_cli.utils.ui.console import get_console
from quickdo_cli.utils.ui.formatters import format_success, format_warning, short_id

from .decorators import command_wrapper

app = typer.Typer(cls=SuggestingGroup, help="Assistant commands")
console = get_console()


@app.command("summarize")
@command_wrapper
async def summarize_day() -> None:
    """Summarize today's open tasks and propose a short plan."""
    store = get_task_store()
    assistant = get_configured_assistant()

    with console.status("[bold green]Thinking..."):
        reply = await assistant.summarize_day(store.tasks, datetime.now())

    console.print(Panel(escape(reply), title="[bold]Today[/bold]", expand=False))


@app.command("breakdown")
@command_wrapper
async def break_down(
    task_id: str = typer.Argument(..., help="Task ID or ID prefix"),
    apply: bool = typer.Option(
        False, "--apply", help="Add the suggested steps as subtasks"
    ),
) -> None:
    """Ask for a subtask breakdown of one task."""
    store = get_task_store()
    task = store.get(task_id)
    assistant = get_configured_assistant()

    with console.status("[bold green]Thinking..."):
        reply = await assistant.break_down(task)

    console.print(Panel(escape(reply), title=f"[bold]{escape(task.title)}[/bold]", expand=False))

    if not apply:
        return
    titles = parse_subtask_suggestions(reply)
    if not titles:
        format_warning("No subtasks found in the reply")
        return
    updated = store.add_subtasks(task.id, titles)
    format_success(f"Added {len(titles)} subtask(s) to {short_id(updated.id)}")
