"""Core infrastructure: settings, logging, paths and the backend process/HTTP seams."""

from .command_proxy import CommandProxy
from .config import DesktopSettings, get_settings
from .health import HealthProbe
from .logging_config import configure_logging, get_logger
from .supervisor import ProcessSupervisor

__all__ = [
    "CommandProxy",
    "DesktopSettings",
    "HealthProbe",
    "ProcessSupervisor",
    "configure_logging",
    "get_logger",
    "get_settings",
]
