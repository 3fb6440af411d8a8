"""Locate the backend binary and its optional config file.

Two layouts are supported:

* development: the shell runs from ``<repo>/desktop-app`` and the backend is
  built into ``<repo>/bin``, so everything resolves against the parent of the
  current working directory;
* packaged: the installer places the binary and ``.env.hyper`` directly in the
  application's resource directory.

Nothing here is cached and nothing touches the filesystem beyond reading the
current working directory, so resolution can be repeated freely.
"""

from __future__ import annotations

import os
import sys
from collections.abc import Callable
from pathlib import Path

from .config import DesktopSettings, get_settings
from .exceptions import NotResolvable
from .types import ResolvedPaths, RuntimeMode

ResourceDirProvider = Callable[[], Path]


def binary_filename(base_name: str = "hyper", os_name: str = os.name) -> str:
    """Return the platform-specific executable name."""

    if os_name == "nt":
        return f"{base_name}.exe"
    return base_name


def detect_runtime_mode(settings: DesktopSettings | None = None) -> RuntimeMode:
    """Pick the runtime mode from settings, falling back to ``sys.frozen``."""

    settings = settings or get_settings()
    if settings.runtime_mode:
        return RuntimeMode(settings.runtime_mode)
    if getattr(sys, "frozen", False):
        return RuntimeMode.PACKAGED
    return RuntimeMode.DEVELOPMENT


def default_resource_dir(settings: DesktopSettings | None = None) -> Path:
    """Return the directory bundled resources were installed into."""

    override = (settings or get_settings()).resource_dir
    if override:
        return Path(override).expanduser()

    bundle_dir = getattr(sys, "_MEIPASS", None)
    if bundle_dir:
        return Path(bundle_dir)

    if not getattr(sys, "frozen", False):
        raise RuntimeError("not running from a packaged bundle and RESOURCE_DIR is unset")
    return Path(sys.executable).resolve().parent


def _base_dir(mode: RuntimeMode, resource_dir_provider: ResourceDirProvider, target: str) -> Path:
    if mode is RuntimeMode.DEVELOPMENT:
        try:
            cwd = Path.cwd()
        except OSError as exc:
            raise NotResolvable(target, f"cannot read current directory: {exc}") from exc
        return cwd.parent / "bin"

    try:
        return Path(resource_dir_provider())
    except Exception as exc:
        raise NotResolvable(target, f"resource directory unavailable: {exc}") from exc


def resolve_binary_path(
    mode: RuntimeMode,
    resource_dir_provider: ResourceDirProvider = default_resource_dir,
    *,
    binary_name: str | None = None,
    os_name: str = os.name,
) -> Path:
    """Return where the backend binary should live for ``mode``."""

    name = binary_name or get_settings().binary_name
    base = _base_dir(mode, resource_dir_provider, "binary")
    return base / binary_filename(name, os_name)


def resolve_config_path(
    mode: RuntimeMode,
    resource_dir_provider: ResourceDirProvider = default_resource_dir,
    *,
    env_file_name: str | None = None,
) -> Path:
    """Return where the backend's optional ``.env.hyper`` should live for ``mode``."""

    name = env_file_name or get_settings().env_file_name
    return _base_dir(mode, resource_dir_provider, "config") / name


def resolve_paths(
    mode: RuntimeMode,
    resource_dir_provider: ResourceDirProvider = default_resource_dir,
    *,
    settings: DesktopSettings | None = None,
    os_name: str = os.name,
) -> ResolvedPaths:
    settings = settings or get_settings()
    return ResolvedPaths(
        binary_path=resolve_binary_path(
            mode, resource_dir_provider, binary_name=settings.binary_name, os_name=os_name
        ),
        config_path=resolve_config_path(
            mode, resource_dir_provider, env_file_name=settings.env_file_name
        ),
        mode=mode,
    )
