"""Tests for task output formatters."""

import json
from datetime import datetime

import pytest
from rich.console import Console

from quickdo_cli.models import BucketKey, Priority, Subtask, Task
from quickdo_cli.utils.timeutils import to_epoch_ms
from quickdo_cli.utils.ui import formatters


@pytest.fixture
def console(monkeypatch):
    """Swap the module console for a recording one."""
    recorder = Console(record=True, width=200, color_system=None)
    monkeypatch.setattr(formatters, "console", recorder)
    return recorder


def _task(**kwargs):
    kwargs.setdefault("title", "Email Alex")
    kwargs.setdefault("created_at", 0)
    return Task(id="12345678-aaaa", **kwargs)


def test_short_id():
    assert formatters.short_id("12345678-aaaa-bbbb") == "12345678"


def test_messages_escape_markup(console):
    formatters.format_error("bad [red]input[/red]")
    assert "Error: bad [red]input[/red]" in console.export_text()


def test_task_line_contents():
    task = _task(
        priority=Priority.HIGH,
        tags=["work", "proj:site"],
        due=to_epoch_ms(datetime(2024, 3, 5, 15, 0)),
        subtasks=[Subtask(title="a", done=True), Subtask(title="b")],
    )
    text = formatters.format_task_line(task).plain
    assert "12345678" in text
    assert "Email Alex" in text
    assert "Mar 05, 03:00 PM" in text
    assert "high" in text
    assert "#proj:site #work" in text
    assert "(1/2)" in text


def test_compact_line_hides_priority():
    assert "medium" not in formatters.format_task_line(_task(), compact=True).plain


def test_title_with_brackets_is_literal():
    assert "[bold]x" in formatters.format_task_line(_task(title="[bold]x")).plain


def test_format_json_serializes_tasks(capsys):
    formatters.format_json([_task(tags=["Work"])])
    [record] = json.loads(capsys.readouterr().out)
    assert record["id"] == "12345678-aaaa"
    assert record["tags"] == ["work"]
    assert record["createdAt"] == 0


def test_format_json_passes_mappings_through(capsys):
    formatters.format_json({"today": []})
    assert json.loads(capsys.readouterr().out) == {"today": []}


def test_pretty_list_empty(console):
    formatters.format_tasks_pretty([], summary="#work")
    output = console.export_text()
    assert "Filters: #work" in output
    assert "No tasks found" in output


def test_table(console):
    formatters.format_tasks_table([_task(tags=["proj:site"])], title="Tasks")
    output = console.export_text()
    assert "Email Alex" in output
    assert "site" in output


def test_detail_shows_subtasks(console):
    formatters.format_task_detail(_task(notes="call first", subtasks=[Subtask(title="Draft")]))
    output = console.export_text()
    assert "call first" in output
    assert "Draft" in output


def test_board_has_all_columns(console):
    buckets = {key: [] for key in BucketKey}
    buckets[BucketKey.TODAY] = [_task()]
    formatters.format_board(buckets)
    output = console.export_text()
    for title in ("Today (1)", "This Week (0)", "Later (0)", "Done (0)"):
        assert title in output
