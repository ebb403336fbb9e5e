"""Tests for the top-level quickdo application."""

from __future__ import annotations

import json
from unittest.mock import patch

from typer.testing import CliRunner

from quickdo_cli import __version__
from quickdo_cli.main import app

runner = CliRunner()


def test_help_lists_commands():
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    names = (
        "add", "list", "board", "focus", "done", "bump", "move", "edit",
        "subtask", "data", "assist", "config",
    )
    for name in names:
        assert name in result.output


def test_version(tmp_config):
    result = runner.invoke(app, ["version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_typo_suggestion(tmp_config):
    result = runner.invoke(app, ["lst"])
    assert result.exit_code == 2
    assert "Did you mean" in result.output


def test_add_then_list(tmp_config, tmp_path, monkeypatch):
    monkeypatch.setenv("QUICKDO_TASKS_FILE", str(tmp_path / "tasks.json"))
    tmp_config.set_value("parsing.use_dateparser", "false")

    with patch(
        "quickdo_cli.services.context_manager.get_config_service", return_value=tmp_config
    ):
        added = runner.invoke(app, ["add", "Buy milk #errands", "--json"])
        assert added.exit_code == 0, added.output
        listed = runner.invoke(app, ["list", "--json"])

    assert [t["title"] for t in json.loads(listed.output)] == ["Buy milk"]
    stored = json.loads((tmp_path / "tasks.json").read_text())
    assert stored[0]["tags"] == ["errands"]
