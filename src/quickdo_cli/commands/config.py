"""Configuration management commands."""

import typer

from quickdo_cli.services.config_service import get_config_service
from quickdo_cli.utils import exit_codes
from quickdo_cli.utils.typer_helpers import SuggestingGroup
from quickdo_cli.utils.ui.console import get_console
from quickdo_cli.utils.ui.formatters import format_json, format_success

from .decorators import AppError, command_wrapper

app = typer.Typer(cls=SuggestingGroup, help="Configuration management commands")
console = get_console()

_SECRET_KEYS = {"api_key"}


def _mask(data):
    if isinstance(data, dict):
        return {
            key: ("****" if key in _SECRET_KEYS and value else _mask(value))
            for key, value in data.items()
        }
    return data


@app.command("show")
@command_wrapper
def show_config() -> None:
    """Show the current configuration (API key masked)."""
    config_service = get_config_service()
    console.print(f"[dim]{config_service.config_path}[/dim]")
    format_json(_mask(config_service.config.model_dump()))
    console.print(f"[dim]Tasks file: {config_service.tasks_path}[/dim]")


@app.command("get")
@command_wrapper
def get_config(
    key: str = typer.Argument(..., help="Configuration key (e.g., assistant.model)"),
) -> None:
    """Get a configuration value."""
    config_service = get_config_service()
    try:
        value = config_service.get_value(key)
    except KeyError as e:
        raise AppError(str(e.args[0]), exit_code=exit_codes.ERROR_NOT_FOUND) from e
    if isinstance(value, dict | list):
        format_json(_mask(value))
    else:
        console.print(value)


@app.command("set")
@command_wrapper
def set_config(
    key: str = typer.Argument(..., help="Configuration key (e.g., assistant.model)"),
    value: str = typer.Argument(..., help="Configuration value ('none' to clear)"),
) -> None:
    """Set a configuration value."""
    config_service = get_config_service()
    try:
        stored = config_service.set_value(key, value)
    except KeyError as e:
        raise AppError(str(e.args[0]), exit_code=exit_codes.ERROR_NOT_FOUND) from e
    except ValueError as e:
        raise AppError(str(e), exit_code=exit_codes.ERROR_INVALID_ARGS) from e
    shown = "****" if key.endswith("api_key") and stored else stored
    format_success(f"Configuration '{key}' set to '{shown}'")


@app.command("reset")
@command_wrapper
def reset_config(
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Reset configuration to defaults."""
    if not yes:
        confirm = typer.confirm("Are you sure you want to reset the configuration?")
        if not confirm:
            console.print("[yellow]Cancelled.[/yellow]")
            raise typer.Exit(exit_codes.SUCCESS)

    get_config_service().reset_config()
    format_success("Configuration reset to defaults")
