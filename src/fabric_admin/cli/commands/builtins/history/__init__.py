"""History command - show the persisted shell history."""
from __future__ import annotations

from typing import TYPE_CHECKING

from fabric_admin.cli.commands.registry import command_registry
from fabric_admin.cli.interactive.history import HistoryStore

if TYPE_CHECKING:
    from fabric_admin.cli.commands.registry import CommandContext


@command_registry.register("history", "Show the shell history file", usage="history [n]")
def cmd_history(ctx: "CommandContext", args: list[str]):
    """Print the history file path and its last n entries (default 20)."""
    try:
        count = int(args[0]) if args else 20
    except ValueError:
        count = 20

    store = HistoryStore(ctx.storage_directory)
    entries = store.load()
    print(f"\nHistory file: {store.path}")
    if not entries:
        print("  (empty)")
    start = max(len(entries) - count, 0)
    for i, entry in enumerate(entries[start:], start + 1):
        print(f"  {i:>4}  {entry}")
    print()
