"""
Command system for the fabric-admin shell.

Commands are loaded from:
1. Package builtins
2. ~/.fabric_admin/commands/ (user-hackable)
"""

from __future__ import annotations

from fabric_admin.cli.commands.registry import (
    EXIT_FAILURE,
    EXIT_SUCCESS,
    CommandContext,
    CommandEntry,
    CommandRegistry,
    command_registry,
)
from fabric_admin.cli.commands.loader import load_all_commands

__all__ = [
    "EXIT_SUCCESS",
    "EXIT_FAILURE",
    "CommandContext",
    "CommandEntry",
    "CommandRegistry",
    "command_registry",
    "load_all_commands",
]
