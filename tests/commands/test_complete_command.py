"""Unit tests for the 'done' command."""

from __future__ import annotations

import json
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from quickdo_cli.commands.complete_command import app

runner = CliRunner()


@pytest.fixture
def seeded(make_store):
    return make_store(
        [
            {"id": "aaaa-1111", "title": "Write release notes", "createdAt": 1},
            {"id": "bbbb-2222", "title": "Review PR", "done": True, "createdAt": 1},
        ]
    )


def _run(args, store):
    with patch("quickdo_cli.commands.complete_command.get_task_store", return_value=store):
        return runner.invoke(app, args)


def test_completes_by_prefix(seeded):
    result = _run(["aaaa"], seeded)
    assert result.exit_code == 0, result.output
    assert "completed" in result.output
    assert "Write release notes" in result.output
    assert seeded.get("aaaa").done is True


def test_reopens_done_task(seeded):
    result = _run(["bbbb"], seeded)
    assert "reopened" in result.output
    assert seeded.get("bbbb").done is False


def test_multiple_ids(seeded):
    result = _run(["aaaa", "bbbb", "--json"], seeded)
    assert result.exit_code == 0, result.output
    assert [r["done"] for r in json.loads(result.output)] == [True, False]


def test_unknown_id_exits_not_found(seeded):
    result = _run(["zzzz"], seeded)
    assert result.exit_code == 5
    assert "Task not found" in result.output
