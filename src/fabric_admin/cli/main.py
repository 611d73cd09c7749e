#!/usr/bin/env python3
"""
CLI entry point for fabric-admin.

Without a command the interactive shell starts; otherwise the command is run
once and its status becomes the exit code.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

from fabric_admin.cli.commands import command_registry, load_all_commands
from fabric_admin.cli.interactive import InteractiveSession, resolve_storage_directory
from fabric_admin.config import get_config_manager
from fabric_admin.platform import DeferredCleanups, get_platform_manager, schedule_cleanup
from fabric_admin.platform.logging import (
    close_session_logging,
    configure_logging,
    configure_session_logging,
)

logger = logging.getLogger(__name__)

# How long the platform thread gets to finish deferred cleanups at exit
SHUTDOWN_TIMEOUT = 2.0

INTERACTIVE_START = ["interactive", "start"]


def build_parser(cfg) -> argparse.ArgumentParser:
    """Build the argument parser, with defaults taken from the config file."""
    cfg_mgr = get_config_manager()
    parser = argparse.ArgumentParser(
        prog="fabric-admin",
        description="Fabric administration shell",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Config file: {cfg_mgr.CONFIG_FILE}

Examples:
    fabric-admin                                  # Start the interactive shell
    fabric-admin interactive start                # Same as above
    fabric-admin --storage-directory ./fabric     # Keep storage and history in ./fabric
    fabric-admin help                             # Run one command and exit
        """,
    )
    parser.add_argument("--storage-directory", metavar="DIR",
                        default=cfg.get("storage_directory"),
                        help="Storage directory (default: $TMPDIR or /tmp)")
    parser.add_argument("--advertise-operational", dest="advertise_operational",
                        action=argparse.BooleanOptionalAction,
                        default=cfg.get("advertise_operational"),
                        help=f"Advertise operationally while running commands (default: {cfg.get('advertise_operational')})")
    parser.add_argument("--log-level", default=cfg.get("log_level"),
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"], type=str.upper,
                        help=f"Console log level (default: {cfg.get('log_level')})")
    parser.add_argument("--log-file", action="store_true", default=cfg.get("log_file"),
                        help="Also log to fabric_admin.log in the storage directory")
    parser.add_argument("--prompt", default=cfg.get("prompt"),
                        help="Interactive prompt")
    parser.add_argument("command", nargs=argparse.REMAINDER,
                        help="Command to run once instead of starting the shell")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point for the fabric-admin CLI."""
    cfg = get_config_manager().config
    args = build_parser(cfg).parse_args(argv)

    configure_logging(args.log_level)
    if args.log_file:
        configure_session_logging(resolve_storage_directory(args.storage_directory))

    load_all_commands()

    processor = get_platform_manager()
    processor.start_event_loop_task()
    cleanups = DeferredCleanups(processor)
    command_registry.bind(processor, cleanups)

    try:
        if not args.command or args.command == INTERACTIVE_START:
            session = InteractiveSession(
                command_registry,
                processor,
                cleanups,
                storage_directory=args.storage_directory,
                advertise_operational=args.advertise_operational,
                prompt=args.prompt,
            )
            try:
                status = session.run()
            finally:
                session.close()
            if not session.cleanup_scheduled:
                # Input was closed rather than quit(); cleanups still need to run
                schedule_cleanup(processor, cleanups)
        else:
            status = command_registry.run(
                args.command,
                storage_directory=args.storage_directory,
                advertise_operational=args.advertise_operational,
            )
            schedule_cleanup(processor, cleanups)

        if not processor.join(timeout=SHUTDOWN_TIMEOUT):
            logger.warning("Platform event loop did not stop in time")
    finally:
        close_session_logging()

    return status


if __name__ == "__main__":
    sys.exit(main())
