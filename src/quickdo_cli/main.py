"""Main entry point for quickdo."""

import typer

from quickdo_cli import __version__
from quickdo_cli.commands import (
    add_command,
    assist_command,
    board_command,
    bump_command,
    complete_command,
    config,
    data_command,
    delete_command,
    edit_command,
    focus_command,
    list_command,
    reschedule_command,
    show_command,
    subtask_command,
    tags_command,
)
from quickdo_cli.services.config_service import get_config_service
from quickdo_cli.utils.typer_helpers import SuggestingGroup
from quickdo_cli.utils.ui.console import get_console

app = typer.Typer(
    name="quickdo",
    cls=SuggestingGroup,
    help="Capture tasks in plain language and organize them from the terminal",
    no_args_is_help=True,
)

console = get_console()


@app.callback()
def main_callback() -> None:
    """Apply output settings before any command runs."""
    if not get_config_service().config.output.color:
        console.no_color = True


# Top-level task commands (one Typer per module, merged without a group name)
for module in (
    add_command,
    list_command,
    board_command,
    focus_command,
    show_command,
    complete_command,
    bump_command,
    reschedule_command,
    edit_command,
    delete_command,
    tags_command,
):
    app.add_typer(module.app)

# Command groups
app.add_typer(subtask_command.app, name="subtask", help="Subtask commands")
app.add_typer(data_command.app, name="data", help="Data management (export, import, reset)")
app.add_typer(assist_command.app, name="assist", help="Assistant (summary, breakdown)")
app.add_typer(config.app, name="config", help="Configuration management")


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"[bold]quickdo[/bold] version [cyan]{__version__}[/cyan]")


def main():
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
