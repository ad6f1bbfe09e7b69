"""Exceptions raised by monobump."""

from __future__ import annotations


class MonobumpError(Exception):
    """Base class for all monobump errors."""


class GraphIntegrityError(MonobumpError):
    """The dependency graph is incomplete or inconsistent.

    Raised for edges pointing at packages that are not in the graph,
    duplicate packages or edges, and explicit releases naming unknown
    packages. Propagation never runs on a graph that raised this.
    """


class AmbiguousRangeError(MonobumpError, ValueError):
    """A declared version range could not be parsed."""

    def __init__(self, declared_range: str, reason: str = "") -> None:
        self.declared_range = declared_range
        message = f"Cannot interpret version range {declared_range!r}"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class WorkspaceFileError(MonobumpError):
    """A workspace description file is malformed."""
