"""Shared type definitions."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Protocol


class RuntimeMode(str, Enum):
    DEVELOPMENT = "development"
    PACKAGED = "packaged"


class SupervisorState(str, Enum):
    NOT_STARTED = "not_started"
    RUNNING = "running"
    STOPPED = "stopped"


class ProcessHandle(Protocol):
    """The subset of ``subprocess.Popen`` the supervisor relies on."""

    pid: int

    def poll(self) -> int | None: ...

    def terminate(self) -> None: ...

    def kill(self) -> None: ...

    def wait(self, timeout: float | None = None) -> int: ...


@dataclass(frozen=True, slots=True)
class ResolvedPaths:
    """Filesystem locations of the backend binary and its optional config file."""

    binary_path: Path
    config_path: Path
    mode: RuntimeMode


@dataclass(slots=True)
class SupervisedProcess:
    handle: ProcessHandle
    pid: int


@dataclass(slots=True)
class ToolInvocation:
    """A named backend operation plus its arguments, sent as one request."""

    name: str
    arguments: dict[str, Any] = field(default_factory=dict)

    def to_payload(self) -> dict[str, Any]:
        return {"name": self.name, "arguments": self.arguments}
