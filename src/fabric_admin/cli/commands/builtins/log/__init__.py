"""Log command - emit a log record from the platform thread."""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fabric_admin.cli.commands.registry import command_registry
from fabric_admin.core.exceptions import CommandError

if TYPE_CHECKING:
    from fabric_admin.cli.commands.registry import CommandContext

logger = logging.getLogger("fabric_admin.device")

LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


@command_registry.register("log", "Emit a log message from the platform thread", usage="log <level> <message...>")
def cmd_log(ctx: "CommandContext", args: list[str]):
    if len(args) < 2 or args[0].lower() not in LEVELS:
        raise CommandError(f"expected one of {', '.join(LEVELS)} followed by a message")

    level = LEVELS[args[0].lower()]
    message = " ".join(args[1:])

    def emit():
        logger.log(level, message)

    if ctx.processor is not None and ctx.processor.is_running:
        ctx.processor.schedule_work(emit)
    else:
        emit()
