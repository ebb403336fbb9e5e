"""Unit tests for the 'bump' command."""

from __future__ import annotations

import json
from unittest.mock import patch

from typer.testing import CliRunner

from quickdo_cli.commands.bump_command import app
from quickdo_cli.models import Priority

runner = CliRunner()


def _run(args, store):
    with patch("quickdo_cli.commands.bump_command.get_task_store", return_value=store):
        return runner.invoke(app, args)


def test_bump_up(make_store):
    store = make_store([{"id": "t1", "title": "x", "priority": "low", "createdAt": 1}])
    result = _run(["t1"], store)
    assert result.exit_code == 0, result.output
    assert "priority is now medium" in result.output
    assert store.get("t1").priority is Priority.MEDIUM


def test_bump_down_clamps(make_store):
    store = make_store([{"id": "t1", "title": "x", "priority": "low", "createdAt": 1}])
    result = _run(["t1", "--down", "--json"], store)
    assert json.loads(result.output)["priority"] == "low"


def test_bump_up_clamps_at_high(make_store):
    store = make_store([{"id": "t1", "title": "x", "priority": "high", "createdAt": 1}])
    _run(["t1"], store)
    assert store.get("t1").priority is Priority.HIGH
