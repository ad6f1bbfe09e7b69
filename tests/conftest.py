"""Shared test fixtures."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from monobump.graph import DependencyGraph
from monobump.models import DependencyKind


@pytest.fixture
def make_peer_graph() -> Callable[[str], DependencyGraph]:
    """Build the two-package peer dependency workspace for a given range.

    has-peer-dep declares ``peer_range`` on depended-upon; both are 1.0.0.
    """

    def _make(peer_range: str) -> DependencyGraph:
        graph = DependencyGraph()
        graph.add_package("depended-upon", "1.0.0")
        graph.add_package("has-peer-dep", "1.0.0")
        graph.add_dependency(
            "has-peer-dep", "depended-upon", peer_range, DependencyKind.PEER
        )
        return graph

    return _make


@pytest.fixture
def transitive_graph() -> DependencyGraph:
    """pkg-b depends on pkg-a and pkg-c; pkg-c peer-depends on pkg-a."""
    graph = DependencyGraph()
    graph.add_package("pkg-a", "1.0.0")
    graph.add_package("pkg-b", "1.0.0")
    graph.add_package("pkg-c", "1.0.0")
    graph.add_dependency("pkg-b", "pkg-a", "^1.0.0")
    graph.add_dependency("pkg-b", "pkg-c", "^1.0.0")
    graph.add_dependency("pkg-c", "pkg-a", "^1.0.0", DependencyKind.PEER)
    return graph


@pytest.fixture
def workspace_toml() -> str:
    """Workspace description matching transitive_graph, with a default release."""
    return """\
[packages.pkg-a]
version = "1.0.0"

[packages.pkg-b]
version = "1.0.0"
dependencies = { pkg-a = "^1.0.0", pkg-c = "^1.0.0" }

[packages.pkg-c]
version = "1.0.0"
peerDependencies = { pkg-a = "^1.0.0" }

[releases]
pkg-a = "minor"
"""


@pytest.fixture
def workspace_file(tmp_path: Path, workspace_toml: str) -> Path:
    """Write workspace_toml to a temporary file."""
    path = tmp_path / "workspace.toml"
    path.write_text(workspace_toml)
    return path
