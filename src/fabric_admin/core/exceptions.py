"""
Exception classes for fabric-admin.
"""


class FabricAdminError(Exception):
    """Base exception for fabric-admin errors."""


class SchedulingError(FabricAdminError):
    """Work could not be queued on the platform event loop."""


class CommandError(FabricAdminError):
    """A command was invoked with invalid arguments."""
