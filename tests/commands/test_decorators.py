"""Tests for command_wrapper error handling and exit codes."""

from __future__ import annotations

import pytest
import typer
from typer.testing import CliRunner

from quickdo_cli.commands.decorators import AppError, command_wrapper, exit_code_for
from quickdo_cli.models.exceptions import (
    EmptyTaskInputError,
    QuickdoError,
    StorageError,
    TaskImportError,
    TaskNotFoundError,
)
from quickdo_cli.utils import exit_codes

runner = CliRunner()


def _app(func) -> typer.Typer:
    app = typer.Typer()
    app.command()(command_wrapper(func))
    return app


@pytest.mark.parametrize(
    "error, code",
    [
        (TaskNotFoundError("x"), exit_codes.ERROR_NOT_FOUND),
        (TaskImportError("x"), exit_codes.ERROR_IMPORT),
        (EmptyTaskInputError("x"), exit_codes.ERROR_INVALID_ARGS),
        (StorageError("x"), exit_codes.ERROR_STORAGE),
        (QuickdoError("x"), exit_codes.ERROR_GENERAL),
    ],
)
def test_exit_code_for(error, code):
    assert exit_code_for(error) == code


def test_app_error_uses_its_exit_code():
    def fail():
        raise AppError("bad input", exit_code=2)

    result = runner.invoke(_app(fail))
    assert result.exit_code == 2
    assert "Error: bad input" in result.output


def test_domain_error_is_mapped():
    def fail():
        raise TaskNotFoundError("Task not found: abc")

    result = runner.invoke(_app(fail))
    assert result.exit_code == exit_codes.ERROR_NOT_FOUND


def test_unexpected_error():
    def fail():
        raise ZeroDivisionError("division by zero")

    result = runner.invoke(_app(fail))
    assert result.exit_code == 1
    assert "An unexpected error occurred: division by zero" in result.output


def test_async_command_is_run():
    async def hello():
        print("hello from coroutine")

    result = runner.invoke(_app(hello))
    assert result.exit_code == 0
    assert "hello from coroutine" in result.output


def test_typer_exit_passes_through():
    def stop():
        raise typer.Exit(0)

    assert runner.invoke(_app(stop)).exit_code == 0
