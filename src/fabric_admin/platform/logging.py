"""Logging configuration for fabric-admin.

Console logging goes through a StreamHandler on the ``fabric_admin`` logger.
Sessions may additionally log to <storage-directory>/fabric_admin.log.
"""
from __future__ import annotations

import logging
import sys
import traceback
from pathlib import Path
from typing import Optional

ROOT_LOGGER = "fabric_admin"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
LOG_FILE_NAME = "fabric_admin.log"

# Module-level state
_session_handler: Optional[logging.FileHandler] = None
_session_log_path: Optional[Path] = None


def make_formatter() -> logging.Formatter:
    """Formatter shared by console, file and coordinated handlers."""
    return logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)


def configure_logging(level: int | str = logging.INFO) -> logging.Logger:
    """Configure console logging for the fabric_admin logger tree.

    Replaces any console handler installed by a previous call.

    Args:
        level: Logging level name or number

    Returns:
        The configured ``fabric_admin`` logger
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    root = logging.getLogger(ROOT_LOGGER)
    for handler in list(root.handlers):
        if getattr(handler, "_fabric_admin_console", False):
            root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(make_formatter())
    handler._fabric_admin_console = True  # type: ignore[attr-defined]
    root.addHandler(handler)
    root.setLevel(level)
    root.propagate = False
    return root


def get_log_path(storage_directory: str | Path) -> Path:
    """Get the log file path for a storage directory."""
    return Path(storage_directory) / LOG_FILE_NAME


def configure_session_logging(
    storage_directory: str | Path,
    level: int = logging.DEBUG,
) -> Path:
    """Configure file logging for an interactive session.

    Args:
        storage_directory: Directory the log file is written to
        level: Logging level for file output (default DEBUG)

    Returns:
        Path to the log file
    """
    global _session_handler, _session_log_path

    log_path = get_log_path(storage_directory)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    # Remove existing session handler if any
    close_session_logging()

    _session_handler = logging.FileHandler(log_path, mode="a", encoding="utf-8")
    _session_handler.setLevel(level)
    _session_handler.setFormatter(make_formatter())

    root = logging.getLogger(ROOT_LOGGER)
    root.addHandler(_session_handler)
    root.setLevel(min(root.level or logging.DEBUG, level))

    _session_log_path = log_path
    root.info("=== Session started ===")
    return log_path


def close_session_logging() -> None:
    """Close the current session's file logging."""
    global _session_handler, _session_log_path

    if _session_handler is not None:
        root = logging.getLogger(ROOT_LOGGER)
        root.info("=== Session ended ===")

        root.removeHandler(_session_handler)
        _session_handler.close()
        _session_handler = None
        _session_log_path = None


def get_current_log_path() -> Optional[Path]:
    """Get the current session's log file path, or None."""
    return _session_log_path


def log_error_on_failure(
    error: Exception,
    context: str = "",
    include_traceback: bool = False,
) -> str:
    """Log an error and return a user-facing message for it.

    Args:
        error: The exception to log
        context: What was being attempted when it failed
        include_traceback: Whether to include the current traceback in the log

    Returns:
        User-friendly error message (without traceback)
    """
    logger = logging.getLogger(ROOT_LOGGER)

    error_type = type(error).__name__
    error_msg = str(error)

    if context:
        user_msg = f"{context}: {error_msg}"
    else:
        user_msg = f"{error_type}: {error_msg}"

    if include_traceback:
        tb_str = traceback.format_exc()
        logger.error(f"{user_msg}\n\nTraceback:\n{tb_str}")
    else:
        logger.error(user_msg)

    return user_msg
