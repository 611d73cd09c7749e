"""Help command - show available commands."""
from __future__ import annotations

from typing import TYPE_CHECKING

from fabric_admin.cli.commands.registry import command_registry

if TYPE_CHECKING:
    from fabric_admin.cli.commands.registry import CommandContext


@command_registry.register("help", "Show available commands", aliases=["?"])
def cmd_help(ctx: "CommandContext", args: list[str]):
    """Show help message."""
    print("\nCommands:")
    for entry in ctx.registry.all_commands():
        print(f"  {entry.usage:<28} - {entry.description}")
    if ctx.interactive:
        print(f"  {'quit()':<28} - Leave the interactive shell")
    print()
