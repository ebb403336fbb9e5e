"""Helpers shared by command modules."""

from __future__ import annotations

from quickdo_cli.models import Task, TaskFilters
from quickdo_cli.services.config_service import get_config_service
from quickdo_cli.utils.ui.formatters import (
    format_json,
    format_task_detail,
    format_tasks_pretty,
    format_tasks_table,
)

OUTPUT_FORMATS = ("pretty", "table", "json")


def resolve_output(output: str | None, json_opt: bool = False) -> str:
    """Pick the output format: ``--json`` wins, then ``--output``, then config."""
    if json_opt:
        return "json"
    if output:
        return output if output in OUTPUT_FORMATS else "pretty"
    return get_config_service().config.output.format


def build_filters(
    show_done: bool = False,
    tag: str | None = None,
    project: str | None = None,
    search: str | None = None,
) -> TaskFilters:
    """Normalize CLI filter options the way tags are stored (lowercase)."""
    return TaskFilters(
        show_done=show_done,
        tag=tag.lstrip("#").strip().lower() if tag else None,
        project=project.strip().lower() if project else None,
        search=(search or "").strip(),
    )


def print_tasks(tasks: list[Task], output: str, summary: str = "") -> None:
    if output == "json":
        format_json(tasks)
    elif output == "table":
        format_tasks_table(tasks, title=summary or None)
    else:
        format_tasks_pretty(tasks, summary=summary)


def print_task(task: Task, output: str) -> None:
    if output == "json":
        format_json(task)
    else:
        format_task_detail(task)
