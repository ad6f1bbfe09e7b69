"""Dependency graph model.

Holds the packages of a workspace and the typed edges between them
(normal, dev and peer dependencies, each with the range the dependent
declared). The graph may contain cycles; nothing here assumes a DAG.
"""

from __future__ import annotations

from collections.abc import Collection, Iterator

from .errors import GraphIntegrityError
from .models import DependencyEdge, DependencyKind, PackageInfo


class DependencyGraph:
    """Packages and dependency edges of a monorepo.

    Edges are stored in declaration order, and every query returns results
    in that order so propagation output is deterministic.

    Example:
        graph = DependencyGraph()
        graph.add_package("pkg-a", "1.0.0")
        graph.add_package("pkg-b", "1.0.0")
        graph.add_dependency("pkg-b", "pkg-a", "^1.0.0")
        graph.dependents_of("pkg-a") → ["pkg-b"]
    """

    def __init__(self) -> None:
        self._packages: dict[str, PackageInfo] = {}
        self._edges: list[DependencyEdge] = []
        self._edge_keys: set[tuple[str, str, DependencyKind]] = set()
        # Reverse and forward indexes, each list in declaration order
        self._edges_to: dict[str, list[DependencyEdge]] = {}
        self._edges_from: dict[str, list[DependencyEdge]] = {}

    def add_package(self, name: str, version: str) -> PackageInfo:
        """Register a package.

        Raises:
            GraphIntegrityError: If a package with that name already exists.
        """
        if name in self._packages:
            raise GraphIntegrityError(f"Duplicate package: {name}")
        info = PackageInfo(name=name, version=version)
        self._packages[name] = info
        return info

    def add_dependency(
        self,
        dependent: str,
        dependency: str,
        declared_range: str = "*",
        kind: DependencyKind | str = DependencyKind.NORMAL,
    ) -> DependencyEdge:
        """Declare that ``dependent`` depends on ``dependency``.

        Either end may be registered later; dangling edges are only
        reported by validate().

        Raises:
            GraphIntegrityError: If the same edge kind is declared twice
                between the pair, or a package depends on itself.
        """
        kind = DependencyKind(kind)
        if dependent == dependency:
            raise GraphIntegrityError(f"{dependent} cannot depend on itself")
        key = (dependent, dependency, kind)
        if key in self._edge_keys:
            raise GraphIntegrityError(
                f"Duplicate {kind} dependency: {dependent} → {dependency}"
            )
        edge = DependencyEdge(
            dependent=dependent, dependency=dependency, kind=kind, range=declared_range
        )
        self._edge_keys.add(key)
        self._edges.append(edge)
        self._edges_to.setdefault(dependency, []).append(edge)
        self._edges_from.setdefault(dependent, []).append(edge)
        return edge

    def validate(self) -> None:
        """Check that every edge references known packages.

        Raises:
            GraphIntegrityError: Listing every dangling edge found.
        """
        problems = []
        for edge in self._edges:
            missing = [
                n for n in (edge.dependent, edge.dependency) if n not in self._packages
            ]
            for name in missing:
                problems.append(
                    f"{edge.dependent} → {edge.dependency} ({edge.kind}) "
                    f"references unknown package {name}"
                )
        if problems:
            raise GraphIntegrityError(
                "Dependency graph is incomplete:\n  " + "\n  ".join(problems)
            )

    def __contains__(self, name: object) -> bool:
        return name in self._packages

    def __iter__(self) -> Iterator[PackageInfo]:
        return iter(self._packages.values())

    def __len__(self) -> int:
        return len(self._packages)

    def package(self, name: str) -> PackageInfo:
        """Look up a package by name.

        Raises:
            GraphIntegrityError: If the package is not in the graph.
        """
        try:
            return self._packages[name]
        except KeyError:
            raise GraphIntegrityError(f"Unknown package: {name}") from None

    @property
    def edges(self) -> list[DependencyEdge]:
        return list(self._edges)

    def edges_to(
        self, dependency: str, kind: DependencyKind | Collection[DependencyKind] | None = None
    ) -> list[DependencyEdge]:
        """Edges whose dependency is ``dependency``, optionally filtered by kind."""
        kinds = _kinds(kind)
        return [e for e in self._edges_to.get(dependency, []) if e.kind in kinds]

    def edges_from(self, dependent: str) -> list[DependencyEdge]:
        """Edges declared by ``dependent``."""
        return list(self._edges_from.get(dependent, []))

    def dependents_of(
        self, name: str, kind: DependencyKind | Collection[DependencyKind] | None = None
    ) -> list[str]:
        """Names of packages declaring a dependency of the given kind(s) on ``name``.

        With no kind filter all kinds are included. Each dependent appears
        once, at the position of its first matching edge.
        """
        seen: dict[str, None] = {}
        for edge in self.edges_to(name, kind):
            seen.setdefault(edge.dependent, None)
        return list(seen)

    def dependencies_of(self, name: str) -> list[str]:
        """Names of packages ``name`` depends on, in declaration order."""
        seen: dict[str, None] = {}
        for edge in self.edges_from(name):
            seen.setdefault(edge.dependency, None)
        return list(seen)

    def edges_between(self, dependent: str, dependency: str) -> list[DependencyEdge]:
        """All edges (at most one per kind) from ``dependent`` to ``dependency``."""
        return [
            e
            for e in self._edges_from.get(dependent, [])
            if e.dependency == dependency
        ]


def _kinds(
    kind: DependencyKind | Collection[DependencyKind] | None,
) -> frozenset[DependencyKind]:
    if kind is None:
        return frozenset(DependencyKind)
    if isinstance(kind, str):
        return frozenset({DependencyKind(kind)})
    return frozenset(DependencyKind(k) for k in kind)
