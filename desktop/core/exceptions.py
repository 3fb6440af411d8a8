"""Custom exception hierarchy for the desktop shell."""

from pathlib import Path


class DesktopError(Exception):
    """Base exception for desktop-shell issues."""


class ConfigurationError(DesktopError):
    """Raised when configuration is invalid or missing."""


class UnknownCommand(DesktopError):
    """Raised when the host asks for a command that is not registered."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown command: {name}")
        self.name = name


class StartupError(DesktopError):
    """Failures that abort application launch."""


class NotResolvable(StartupError):
    """Raised when a backend path cannot be computed."""

    def __init__(self, target: str, reason: str) -> None:
        super().__init__(f"Unable to resolve {target} path: {reason}")
        self.target = target
        self.reason = reason


class BinaryNotFound(StartupError):
    """Raised when the resolved backend binary does not exist on disk."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"Hyper binary not found at {path}")
        self.path = path


class SpawnFailed(StartupError):
    """Raised when the OS refuses to launch the backend binary."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Failed to start Hyper server from {path}: {reason}")
        self.path = path
        self.reason = reason


class SupervisorStopped(StartupError):
    """Raised when start is attempted on a supervisor that was already stopped."""

    def __init__(self) -> None:
        super().__init__("Process supervisor has been stopped and cannot be restarted")


class ExternalServiceError(DesktopError):
    """Raised when the backend responds with an error or cannot be reached."""


class HealthCheckError(ExternalServiceError):
    """Base class for health probe outcomes other than healthy."""


class Unhealthy(HealthCheckError):
    """The backend answered the health probe with a non-success status."""

    def __init__(self, status_code: int, reason_phrase: str = "") -> None:
        status = f"{status_code} {reason_phrase}".strip()
        super().__init__(f"Server returned status: {status}")
        self.status_code = status_code


class RequestFailed(HealthCheckError):
    """The health probe never got an HTTP response."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"Health check failed: {reason}")
        self.reason = reason


class ProxyError(ExternalServiceError):
    """Base class for tool-call failures."""


class ToolCallFailed(ProxyError):
    """The backend answered a tool call with a non-success status."""

    def __init__(self, name: str, status_code: int, reason_phrase: str = "") -> None:
        status = f"{status_code} {reason_phrase}".strip()
        super().__init__(f"MCP tool call {name!r} failed: {status}")
        self.name = name
        self.status_code = status_code


class TransportFailed(ProxyError):
    """The tool call never got an HTTP response."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"Failed to call MCP tool: {reason}")
        self.reason = reason


class InvalidResponse(ProxyError):
    """The backend answered with a success status but the body was not JSON."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"MCP tool returned an unreadable response: {reason}")
        self.reason = reason
