"""Output formatters for tasks, boards and messages."""

import json
from collections.abc import Mapping, Sequence
from typing import Any

from rich.columns import Columns
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from quickdo_cli.models import BucketKey, Priority, Task
from quickdo_cli.utils.timeutils import format_due
from quickdo_cli.utils.ui.console import get_console

console = get_console()

SHORT_ID_LENGTH = 8

PRIORITY_ICONS = {
    Priority.HIGH: "🔴",
    Priority.MEDIUM: "🟡",
    Priority.LOW: "🟢",
}

PRIORITY_COLORS = {
    Priority.HIGH: "bold red",
    Priority.MEDIUM: "yellow",
    Priority.LOW: "green",
}

BUCKET_TITLES = {
    BucketKey.TODAY: "Today",
    BucketKey.WEEK: "This Week",
    BucketKey.LATER: "Later",
    BucketKey.DONE: "Done",
}

STATUS_ICONS = {
    "open": "⬜",
    "completed": "☑️",
}


def short_id(task_id: str) -> str:
    return task_id[:SHORT_ID_LENGTH]


def format_error(message: str) -> None:
    """Format and display an error message."""
    console.print(f"[bold red]Error:[/bold red] {escape(message)}")


def format_success(message: str) -> None:
    """Format and display a success message."""
    console.print(f"[bold green]Success:[/bold green] {escape(message)}")


def format_warning(message: str) -> None:
    """Format and display a warning message."""
    console.print(f"[bold yellow]Warning:[/bold yellow] {escape(message)}")


def format_info(message: str) -> None:
    """Format and display an info message."""
    console.print(f"[bold blue]Info:[/bold blue] {escape(message)}")


def format_json(data: Any) -> None:
    """Print *data* as indented JSON; tasks are written as their records."""
    if isinstance(data, Task):
        data = data.to_record()
    elif isinstance(data, Sequence) and not isinstance(data, str):
        data = [item.to_record() if isinstance(item, Task) else item for item in data]
    print(json.dumps(data, indent=2, default=str, ensure_ascii=False))


def format_task_line(task: Task, compact: bool = False) -> Text:
    """One-line rendering used by the pretty list and the board."""
    icon = STATUS_ICONS["completed"] if task.done else STATUS_ICONS["open"]
    title = escape(task.title)
    line = f"{icon} [dim]{short_id(task.id)}[/dim] "
    line += f"[dim strike]{title}[/dim strike]" if task.done else title

    if task.due:
        line += f" [cyan]📅 {format_due(task.due)}[/cyan]"
    if not compact:
        color = PRIORITY_COLORS[task.priority]
        line += f" [{color}]{PRIORITY_ICONS[task.priority]} {task.priority.value}[/{color}]"
    for tag in sorted(task.tags):
        line += f" [blue]#{escape(tag)}[/blue]"
    if task.subtasks:
        finished = sum(1 for sub in task.subtasks if sub.done)
        line += f" [dim]({finished}/{len(task.subtasks)})[/dim]"
    return Text.from_markup(line)


def format_tasks_pretty(tasks: Sequence[Task], summary: str = "") -> None:
    if summary:
        console.print(f"[dim]Filters: {escape(summary)}[/dim]")
    if not tasks:
        console.print("[yellow]No tasks found[/yellow]")
        return
    for task in tasks:
        console.print(format_task_line(task))


def format_tasks_table(tasks: Sequence[Task], title: str | None = None) -> None:
    """Format tasks as a Rich table."""
    if not tasks:
        console.print("[yellow]No tasks found[/yellow]")
        return

    table = Table(title=title, show_header=True, header_style="bold magenta")
    table.add_column("ID", style="dim")
    table.add_column("Done", justify="center")
    table.add_column("Title")
    table.add_column("Due", style="cyan")
    table.add_column("Priority")
    table.add_column("Tags", style="blue")
    table.add_column("Project", style="magenta")

    for task in tasks:
        color = PRIORITY_COLORS[task.priority]
        table.add_row(
            short_id(task.id),
            "✓" if task.done else "",
            escape(task.title),
            format_due(task.due) or "-",
            f"[{color}]{task.priority.value}[/{color}]",
            ", ".join(sorted(task.tags)) or "-",
            task.project or "-",
        )

    console.print(table)


def format_task_detail(task: Task) -> None:
    """Format a single task as key-value pairs plus its subtasks."""
    table = Table(show_header=False, box=None)
    table.add_column("Key", style="cyan")
    table.add_column("Value", style="white")

    table.add_row("ID", task.id)
    table.add_row("Title", escape(task.title))
    if task.notes:
        table.add_row("Notes", escape(task.notes))
    table.add_row("Due", format_due(task.due) or "-")
    table.add_row("Priority", f"{PRIORITY_ICONS[task.priority]} {task.priority.value}")
    table.add_row("Tags", ", ".join(sorted(task.tags)) or "-")
    table.add_row("Project", task.project or "-")
    table.add_row("Done", "✓" if task.done else "✗")
    console.print(table)

    for sub in task.subtasks:
        mark = STATUS_ICONS["completed"] if sub.done else STATUS_ICONS["open"]
        console.print(f"  {mark} [dim]{short_id(sub.id)}[/dim] {escape(sub.title)}")


def format_board(buckets: Mapping[BucketKey, Sequence[Task]]) -> None:
    """Render the four board columns side by side."""
    panels = []
    for key, tasks in buckets.items():
        body = Text("\n").join(format_task_line(task, compact=True) for task in tasks)
        if not tasks:
            body = Text("—", style="dim")
        panels.append(
            Panel(
                body,
                title=f"[bold]{BUCKET_TITLES[key]}[/bold] ({len(tasks)})",
                expand=True,
            )
        )
    console.print(Columns(panels, equal=True, expand=True))


def format_focus(tasks: Sequence[Task], limit: int) -> None:
    """Render the focus shortlist as one panel."""
    if not tasks:
        body = Text("Nothing open. Enjoy the quiet.", style="dim")
    else:
        lines = []
        for task in tasks:
            color = PRIORITY_COLORS[task.priority]
            due = f"Due {format_due(task.due)}" if task.due else "No due date"
            lines.append(
                f"[{color}]{PRIORITY_ICONS[task.priority]}[/{color}] "
                f"[dim]{short_id(task.id)}[/dim] [bold]{escape(task.title)}[/bold]\n"
                f"     [dim]{due}[/dim]"
            )
        body = Text.from_markup("\n".join(lines))
    console.print(
        Panel(
            body,
            title="[bold]⭐ Focus[/bold]",
            subtitle=f"[dim]Top {limit} by priority and urgency[/dim]",
            expand=True,
        )
    )
