"""Tests for monobump.graph."""

from __future__ import annotations

import pytest

from monobump.errors import GraphIntegrityError
from monobump.graph import DependencyGraph
from monobump.models import DependencyKind


@pytest.fixture
def graph() -> DependencyGraph:
    """core ← ui (normal), core ← app (dev + peer), ui ← app (normal)."""
    g = DependencyGraph()
    for name in ("core", "ui", "app"):
        g.add_package(name, "1.0.0")
    g.add_dependency("ui", "core", "^1.0.0")
    g.add_dependency("app", "core", "~1.0.0", DependencyKind.DEV)
    g.add_dependency("app", "core", "^1.0.0", DependencyKind.PEER)
    g.add_dependency("app", "ui", "1.0.0")
    return g


class TestPackages:
    def test_add_and_lookup(self, graph: DependencyGraph) -> None:
        assert graph.package("ui").version == "1.0.0"
        assert "ui" in graph
        assert "nope" not in graph
        assert len(graph) == 3

    def test_iterates_in_insertion_order(self, graph: DependencyGraph) -> None:
        assert [p.name for p in graph] == ["core", "ui", "app"]

    def test_duplicate_package_raises(self, graph: DependencyGraph) -> None:
        with pytest.raises(GraphIntegrityError, match="Duplicate package"):
            graph.add_package("core", "2.0.0")

    def test_unknown_package_raises(self, graph: DependencyGraph) -> None:
        with pytest.raises(GraphIntegrityError, match="Unknown package"):
            graph.package("nope")


class TestDependentsOf:
    def test_all_kinds(self, graph: DependencyGraph) -> None:
        assert graph.dependents_of("core") == ["ui", "app"]

    def test_dependent_listed_once_across_kinds(self, graph: DependencyGraph) -> None:
        assert graph.dependents_of("core").count("app") == 1

    def test_filter_single_kind(self, graph: DependencyGraph) -> None:
        assert graph.dependents_of("core", DependencyKind.PEER) == ["app"]
        assert graph.dependents_of("core", DependencyKind.NORMAL) == ["ui"]

    def test_filter_kind_by_name(self, graph: DependencyGraph) -> None:
        assert graph.dependents_of("core", "dev") == ["app"]

    def test_filter_several_kinds(self, graph: DependencyGraph) -> None:
        kinds = [DependencyKind.NORMAL, DependencyKind.DEV]
        assert graph.dependents_of("core", kinds) == ["ui", "app"]

    def test_no_dependents(self, graph: DependencyGraph) -> None:
        assert graph.dependents_of("app") == []


class TestEdges:
    def test_edges_between(self, graph: DependencyGraph) -> None:
        edges = graph.edges_between("app", "core")
        assert [(e.kind, e.range) for e in edges] == [
            (DependencyKind.DEV, "~1.0.0"),
            (DependencyKind.PEER, "^1.0.0"),
        ]

    def test_edges_between_unrelated(self, graph: DependencyGraph) -> None:
        assert graph.edges_between("core", "app") == []

    def test_edges_to_with_kind(self, graph: DependencyGraph) -> None:
        edges = graph.edges_to("core", DependencyKind.PEER)
        assert [e.dependent for e in edges] == ["app"]

    def test_dependencies_of(self, graph: DependencyGraph) -> None:
        assert graph.dependencies_of("app") == ["core", "ui"]

    def test_indexes_keep_declaration_order(self) -> None:
        g = DependencyGraph()
        g.add_dependency("z", "lib", "^1.0.0")
        g.add_dependency("a", "other")
        g.add_dependency("m", "lib", "~1.0.0", DependencyKind.DEV)
        g.add_dependency("a", "lib", "1.0.0", DependencyKind.PEER)
        g.add_dependency("z", "other")

        assert [e.dependent for e in g.edges_to("lib")] == ["z", "m", "a"]
        assert g.dependencies_of("a") == ["other", "lib"]
        assert g.dependencies_of("z") == ["lib", "other"]
        assert g.edges_to("nobody") == []
        assert g.edges_from("nobody") == []

    def test_returned_edge_lists_are_copies(self, graph: DependencyGraph) -> None:
        graph.edges_from("app").clear()
        graph.edges_to("core").clear()
        assert graph.dependencies_of("app") == ["core", "ui"]
        assert graph.dependents_of("core") == ["ui", "app"]

    def test_same_pair_different_kinds_allowed(self) -> None:
        g = DependencyGraph()
        g.add_dependency("b", "a", "^1.0.0")
        g.add_dependency("b", "a", "^1.0.0", DependencyKind.PEER)
        assert len(g.edges) == 2

    def test_duplicate_edge_kind_raises(self, graph: DependencyGraph) -> None:
        with pytest.raises(GraphIntegrityError, match="Duplicate peer dependency"):
            graph.add_dependency("app", "core", "^1.0.0", DependencyKind.PEER)

    def test_self_dependency_raises(self, graph: DependencyGraph) -> None:
        with pytest.raises(GraphIntegrityError, match="itself"):
            graph.add_dependency("core", "core")


class TestValidate:
    def test_valid_graph(self, graph: DependencyGraph) -> None:
        graph.validate()

    def test_cycles_are_valid(self) -> None:
        g = DependencyGraph()
        g.add_package("a", "1.0.0")
        g.add_package("b", "1.0.0")
        g.add_dependency("a", "b")
        g.add_dependency("b", "a")
        g.validate()

    def test_dangling_dependency_raises(self, graph: DependencyGraph) -> None:
        graph.add_dependency("app", "ghost", "^1.0.0")
        with pytest.raises(GraphIntegrityError, match="unknown package ghost"):
            graph.validate()

    def test_dangling_dependent_raises(self, graph: DependencyGraph) -> None:
        graph.add_dependency("phantom", "core", "^1.0.0")
        with pytest.raises(GraphIntegrityError, match="unknown package phantom"):
            graph.validate()

    def test_reports_every_problem(self, graph: DependencyGraph) -> None:
        graph.add_dependency("app", "ghost")
        graph.add_dependency("ui", "spectre")
        with pytest.raises(GraphIntegrityError) as exc_info:
            graph.validate()
        assert "ghost" in str(exc_info.value)
        assert "spectre" in str(exc_info.value)
