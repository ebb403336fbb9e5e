"""Unit tests for the 'config' command group."""

from __future__ import annotations

from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from quickdo_cli.commands.config import app

runner = CliRunner()


@pytest.fixture
def run(tmp_config):
    def _run(args, input=None):
        with patch("quickdo_cli.commands.config.get_config_service", return_value=tmp_config):
            return runner.invoke(app, args, input=input)

    return _run


def test_show_masks_api_key(run, tmp_config):
    tmp_config.set_value("assistant.api_key", "sk-secret")
    result = run(["show"])
    assert result.exit_code == 0, result.output
    assert "sk-secret" not in result.output
    assert "****" in result.output


def test_get_value(run):
    result = run(["get", "output.format"])
    assert result.exit_code == 0, result.output
    assert result.output.strip() == "pretty"


def test_get_unknown_key(run):
    result = run(["get", "nope.key"])
    assert result.exit_code == 5
    assert "Unknown config key" in result.output


def test_set_value(run, tmp_config):
    result = run(["set", "assistant.model", "llama3"])
    assert result.exit_code == 0, result.output
    assert tmp_config.config.assistant.model == "llama3"


def test_set_api_key_is_not_echoed(run):
    result = run(["set", "assistant.api_key", "sk-secret"])
    assert result.exit_code == 0, result.output
    assert "sk-secret" not in result.output


def test_set_invalid_value(run):
    result = run(["set", "output.format", "xml"])
    assert result.exit_code == 2
    assert "Invalid value" in result.output


def test_reset(run, tmp_config):
    tmp_config.set_value("output.format", "table")
    result = run(["reset", "--yes"])
    assert result.exit_code == 0, result.output
    assert tmp_config.config.output.format == "pretty"
