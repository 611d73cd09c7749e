"""Platform layer: event loop thread, deferred cleanups and logging setup."""

from fabric_admin.platform.cleanup import DeferredCleanups, schedule_cleanup
from fabric_admin.platform.processor import PlatformManager, get_platform_manager

__all__ = [
    "PlatformManager",
    "get_platform_manager",
    "DeferredCleanups",
    "schedule_cleanup",
]
