"""Command 'move' of quickdo"""

from typing import Annotated

import typer

from quickdo_cli.models import BucketKey
from quickdo_cli.services.context_manager import get_task_store
from quickdo_cli.utils.timeutils import format_due
from quickdo_cli.utils.ui.formatters import (
    BUCKET_TITLES,
    format_json,
    format_success,
    short_id,
)

from .decorators import command_wrapper

app = typer.Typer()


@app.command("move")
@command_wrapper
def move_command(
    task_id: Annotated[str, typer.Argument(help="Task ID or ID prefix")],
    bucket: Annotated[
        BucketKey, typer.Argument(help="Target column: today, week, later or done")
    ],
    json_opt: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
) -> None:
    """
    Move a task to a board column, rescheduling it.

    today -> due today at 17:00; week -> due in 3 days at 09:00;
    later -> due date cleared; done -> marked complete.
    """
    store = get_task_store()
    task = store.move(task_id, bucket)

    if json_opt:
        format_json(task)
        return
    message = f"{short_id(task.id)} moved to {BUCKET_TITLES[bucket]}"
    if task.due and bucket is not BucketKey.DONE:
        message += f" (due {format_due(task.due)})"
    format_success(message)
