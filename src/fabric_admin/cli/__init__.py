"""
CLI module for the fabric_admin package.

Provides the interactive shell and the fabric-admin command-line entry point.
"""

from fabric_admin.cli.interactive import InteractiveSession
from fabric_admin.cli.main import main

__all__ = [
    "InteractiveSession",
    "main",
]
