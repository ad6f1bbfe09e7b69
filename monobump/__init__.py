"""monobump: release propagation for monorepos.

Given a dependency graph and a set of explicitly requested bumps, work out
every package that has to be released and at which severity.
"""

from __future__ import annotations

from .errors import (
    AmbiguousRangeError,
    GraphIntegrityError,
    MonobumpError,
    WorkspaceFileError,
)
from .graph import DependencyGraph
from .models import (
    BumpType,
    Changeset,
    DependencyEdge,
    DependencyKind,
    PackageInfo,
    Release,
    ReleasePlan,
)
from .propagation import PropagationSession, compute_release_plan

__all__ = [
    "AmbiguousRangeError",
    "BumpType",
    "Changeset",
    "DependencyEdge",
    "DependencyGraph",
    "DependencyKind",
    "GraphIntegrityError",
    "MonobumpError",
    "PackageInfo",
    "PropagationSession",
    "Release",
    "ReleasePlan",
    "WorkspaceFileError",
    "compute_release_plan",
]
