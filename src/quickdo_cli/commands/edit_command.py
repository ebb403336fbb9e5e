"""Command 'edit' of quickdo - edit a task's fields via flags."""

from __future__ import annotations

import typer

from quickdo_cli.models import Priority
from quickdo_cli.services.context_manager import get_task_store
from quickdo_cli.utils import exit_codes
from quickdo_cli.utils.timeutils import to_epoch_ms
from quickdo_cli.utils.ui.formatters import format_json, format_success, short_id

from .decorators import AppError, command_wrapper

app = typer.Typer()


def _parse_tags(value: str) -> list[str]:
    return [tag.strip().lstrip("#") for tag in value.split(",") if tag.strip()]


@app.command("edit")
@command_wrapper
def edit_command(
    task_id: str = typer.Argument(..., help="Task ID or ID prefix"),
    title: str | None = typer.Option(None, "--title", help="New title"),
    notes: str | None = typer.Option(None, "--notes", "-n", help="New notes"),
    due: str | None = typer.Option(
        None, "--due", "-d", help="New due date in natural language (e.g. 'friday 5pm')"
    ),
    clear_due: bool = typer.Option(False, "--clear-due", help="Remove the due date"),
    tags: str | None = typer.Option(
        None, "--tags", help="Comma-separated tags, replacing the current ones"
    ),
    priority: Priority | None = typer.Option(None, "--priority", "-p", help="New priority"),
    json_opt: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """
    Edit a task's title, notes, due date, tags or priority.

    Examples:
      quickdo edit 3f2a --title "Email Alex the Q3 report"
      quickdo edit 3f2a --due "next monday 9am"
      quickdo edit 3f2a --tags work,proj:website --priority high
    """
    if due is not None and clear_due:
        raise AppError(
            "Use either --due or --clear-due, not both", exit_code=exit_codes.ERROR_INVALID_ARGS
        )

    store = get_task_store()
    task = store.get(task_id)
    changes: dict = {}

    if title is not None:
        if not title.strip():
            raise AppError("Title cannot be empty", exit_code=exit_codes.ERROR_INVALID_ARGS)
        changes["title"] = title.strip()
    if notes is not None:
        changes["notes"] = notes.strip()
    if due is not None:
        matches = store.pipeline.resolver.resolve(due, store.clock(), forward_bias=True)
        if not matches:
            raise AppError(
                f"Could not understand due date: {due}", exit_code=exit_codes.ERROR_INVALID_ARGS
            )
        changes["due"] = to_epoch_ms(matches[0].resolved)
    if clear_due:
        changes["due"] = None
    if tags is not None:
        changes["tags"] = _parse_tags(tags)
    if priority is not None:
        changes["priority"] = priority

    if not changes:
        raise AppError(
            "Nothing to change. Pass at least one option.", exit_code=exit_codes.ERROR_INVALID_ARGS
        )

    updated = store.edit(task.replace(**changes))
    if json_opt:
        format_json(updated)
        return
    format_success(f"Updated {short_id(updated.id)}: {updated.title}")
