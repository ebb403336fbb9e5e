"""Command resolution helpers for the quickdo command groups."""

from difflib import get_close_matches

import click
import typer
from typer.core import TyperGroup

from quickdo_cli.utils import exit_codes
from quickdo_cli.utils.ui.console import get_console
from quickdo_cli.utils.ui.formatters import format_error

# Spellings people bring over from other todo tools
COMMAND_ALIASES = {
    "new": "add",
    "ls": "list",
    "complete": "done",
    "finish": "done",
    "rm": "delete",
    "del": "delete",
    "mv": "move",
    "reschedule": "move",
}


class SuggestingGroup(TyperGroup):
    """Typer group that accepts command aliases and suggests fixes for typos.

    ``quickdo ls`` runs ``list``. ``quickdo lsit`` prints "Did you mean
    this? list" and exits with the invalid-arguments code. Aliases only
    apply when their target command exists in the group.
    """

    aliases = COMMAND_ALIASES

    def get_command(self, ctx, cmd_name):
        command = super().get_command(ctx, cmd_name)
        if command is None and cmd_name in self.aliases:
            command = super().get_command(ctx, self.aliases[cmd_name])
        return command

    def suggest(self, attempted: str) -> list[str]:
        """Closest visible command names for *attempted*, aliases included."""
        visible = [name for name, cmd in self.commands.items() if not cmd.hidden]
        candidates = visible + [
            alias for alias, target in self.aliases.items() if target in visible
        ]
        suggestions: list[str] = []
        for match in get_close_matches(attempted, candidates, n=5, cutoff=0.6):
            name = self.aliases.get(match, match)
            if name not in suggestions:
                suggestions.append(name)
        return suggestions[:3]

    def resolve_command(self, ctx, args):
        try:
            return super().resolve_command(ctx, args)
        except click.UsageError as e:
            suggestions = self.suggest(args[0]) if args else []
            if not suggestions:
                raise

            format_error(f'unknown command "{args[0]}" for "{ctx.info_name}"')
            console = get_console()
            if len(suggestions) == 1:
                console.print("[yellow]Did you mean this?[/yellow]")
            else:
                console.print("[yellow]Did you mean one of these?[/yellow]")
            for suggestion in suggestions:
                console.print(f"  {suggestion}")
            raise typer.Exit(exit_codes.ERROR_INVALID_ARGS) from e
