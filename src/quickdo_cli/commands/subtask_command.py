"""Subtask commands of quickdo."""

from typing import Annotated

import typer

from quickdo_cli.services.context_manager import get_task_store
from quickdo_cli.utils import exit_codes
from quickdo_cli.utils.typer_helpers import SuggestingGroup
from quickdo_cli.utils.ui.formatters import format_json, format_success, short_id

from .decorators import AppError, command_wrapper

app = typer.Typer(cls=SuggestingGroup, help="Subtask commands")


@app.command("add")
@command_wrapper
def add_subtasks(
    task_id: Annotated[str, typer.Argument(help="Task ID or ID prefix")],
    titles: Annotated[list[str], typer.Argument(help="One or more subtask titles")],
    json_opt: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
) -> None:
    """Append subtasks to a task."""
    if not any(title.strip() for title in titles):
        raise AppError(
            "At least one non-empty subtask title is required",
            exit_code=exit_codes.ERROR_INVALID_ARGS,
        )
    store = get_task_store()
    task = store.add_subtasks(task_id, titles)

    if json_opt:
        format_json(task)
        return
    format_success(f"{short_id(task.id)} now has {len(task.subtasks)} subtask(s)")


@app.command("toggle")
@command_wrapper
def toggle_subtask(
    task_id: Annotated[str, typer.Argument(help="Task ID or ID prefix")],
    subtask_id: Annotated[str, typer.Argument(help="Subtask ID or ID prefix")],
    json_opt: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
) -> None:
    """Check or uncheck a subtask."""
    store = get_task_store()
    task = store.toggle_subtask(task_id, subtask_id)

    if json_opt:
        format_json(task)
        return
    finished = sum(1 for sub in task.subtasks if sub.done)
    format_success(
        f"{short_id(task.id)}: {finished}/{len(task.subtasks)} subtasks done"
    )
