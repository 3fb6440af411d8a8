"""Typed coordinator tool wrappers grouped by domain."""

from . import knowledge, tasks  # noqa: F401

__all__ = ["knowledge", "tasks"]
