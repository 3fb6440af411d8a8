"""Service layer exports."""

from .command_surface import CommandSurface
from .lifecycle import DesktopLifecycle, wait_until_healthy

__all__ = [
    "CommandSurface",
    "DesktopLifecycle",
    "wait_until_healthy",
]
