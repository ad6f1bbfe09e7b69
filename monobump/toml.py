"""TOML workspace descriptions.

A workspace file lists packages with their versions and dependency ranges,
using the same section names as npm manifests:

    [packages.pkg-b]
    version = "1.0.0"
    dependencies = { pkg-a = "^1.0.0" }
    peerDependencies = { pkg-c = "^1.0.0" }

    [releases]
    pkg-a = "minor"

Uses tomlkit for parsing, like the rest of the toolchain.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import tomlkit
from tomlkit.exceptions import TOMLKitError

from .errors import WorkspaceFileError
from .graph import DependencyGraph
from .models import BumpType, DependencyKind

# Manifest section → edge kind, in the order edges are declared
DEPENDENCY_SECTIONS: dict[str, DependencyKind] = {
    "dependencies": DependencyKind.NORMAL,
    "devDependencies": DependencyKind.DEV,
    "peerDependencies": DependencyKind.PEER,
}


def load_workspace(path: Path) -> tuple[DependencyGraph, dict[str, BumpType]]:
    """Load a workspace file from disk.

    Returns:
        The dependency graph and the default explicit releases from the
        optional [releases] table.

    Raises:
        WorkspaceFileError: If the file is missing or malformed.
    """
    try:
        text = path.read_text()
    except OSError as exc:
        raise WorkspaceFileError(f"Cannot read {path}: {exc}") from exc
    return parse_workspace(text, source=str(path))


def parse_workspace(
    text: str, source: str = "<string>"
) -> tuple[DependencyGraph, dict[str, BumpType]]:
    """Parse a workspace description from a string.

    Dependencies on packages missing from [packages] are kept, so that
    DependencyGraph.validate() reports them instead of silently dropping
    the edge.
    """
    try:
        doc = tomlkit.parse(text).unwrap()
    except TOMLKitError as exc:
        raise WorkspaceFileError(f"{source}: invalid TOML: {exc}") from exc

    packages = _table(doc.get("packages", {}), f"{source}: [packages]")
    if not packages:
        raise WorkspaceFileError(f"{source}: no [packages] defined")

    graph = DependencyGraph()
    for name, entry in packages.items():
        entry = _table(entry, f"{source}: [packages.{name}]")
        version = entry.get("version")
        if not isinstance(version, str):
            raise WorkspaceFileError(f"{source}: package {name} has no version")
        try:
            graph.add_package(name, version)
        except ValueError as exc:
            raise WorkspaceFileError(
                f"{source}: package {name} has invalid version {version!r}"
            ) from exc

    for name, entry in packages.items():
        for section, kind in DEPENDENCY_SECTIONS.items():
            declared = _table(entry.get(section, {}), f"{source}: {name}.{section}")
            for dep_name, dep_range in declared.items():
                graph.add_dependency(name, dep_name, str(dep_range), kind)

    releases: dict[str, BumpType] = {}
    for name, bump in _table(doc.get("releases", {}), f"{source}: [releases]").items():
        try:
            releases[name] = BumpType.parse(bump)
        except ValueError as exc:
            raise WorkspaceFileError(f"{source}: [releases] {name}: {exc}") from exc

    return graph, releases


def _table(value: Any, where: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise WorkspaceFileError(f"{where} must be a table")
    return value
