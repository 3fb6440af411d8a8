"""Shared helpers for tool wrappers."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any


def build_arguments(required: Mapping[str, Any] | None = None, **optional: Any) -> dict[str, Any]:
    """Merge required arguments with the optional ones the caller actually supplied.

    ``None`` marks an optional argument as absent and its key is left out of the
    payload entirely. Any other value, empty strings and empty lists included,
    is sent as given.
    """

    arguments = dict(required or {})
    for key, value in optional.items():
        if value is not None:
            arguments[key] = value
    return arguments
