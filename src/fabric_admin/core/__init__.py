"""Core types shared across fabric-admin."""

from fabric_admin.core.exceptions import (
    CommandError,
    FabricAdminError,
    SchedulingError,
)

__all__ = [
    "FabricAdminError",
    "SchedulingError",
    "CommandError",
]
