"""Bump propagation: explicit requests → full release plan.

Starting from the explicitly requested releases, repeatedly look at the
dependents of every package whose decision changed in the previous pass,
and decide whether each one has to be released too (see ``rules``). A
package re-enters the next pass only when it is newly added or its bump
gets more severe. Since a bump can only move up the patch → minor → major
scale, the number of passes is bounded by three times the package count,
cycles included.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

from pydantic import BaseModel, Field

from .errors import GraphIntegrityError
from .graph import DependencyGraph
from .models import BumpType, Release, ReleasePlan
from .rules import DEFAULT_RULES, RuleTable, required_bump

logger = logging.getLogger(__name__)


class _Decision(BaseModel):
    """Release decision for one package while propagation is running."""

    bump: BumpType
    explicit: bool = False
    triggers: list[str] = Field(default_factory=list)

    def add_trigger(self, name: str) -> None:
        if name not in self.triggers:
            self.triggers.append(name)


class PropagationSession:
    """Computes release plans over one dependency graph.

    The graph is validated on every run and treated as read-only. All
    decision state lives in the mapping built by ``run()``, so a session
    can be reused and always gives the same answer for the same input.

    Args:
        graph: Workspace dependency graph.
        rules: Propagation policy table (defaults to ``DEFAULT_RULES``).
    """

    def __init__(self, graph: DependencyGraph, rules: RuleTable = DEFAULT_RULES) -> None:
        self.graph = graph
        self.rules = rules

    def run(self, explicit_releases: Mapping[str, BumpType | str]) -> ReleasePlan:
        """Propagate the explicit releases to a fixed point.

        Args:
            explicit_releases: Map of package name → requested bump.

        Returns:
            The release plan: explicit releases first, then propagated ones
            in discovery order.

        Raises:
            GraphIntegrityError: If the graph has dangling edges or an
                explicit release names an unknown package.
            ValueError: If a requested bump type is not recognised.
        """
        self.graph.validate()
        decisions = self._seed(explicit_releases)

        frontier = list(decisions)
        passes = 0
        while frontier:
            passes += 1
            changed: dict[str, None] = {}
            for name in frontier:
                for dependent in self._propagate(name, decisions):
                    changed.setdefault(dependent, None)
            logger.debug(
                "Pass %d: %d package(s) processed, %d added or escalated",
                passes,
                len(frontier),
                len(changed),
            )
            frontier = list(changed)

        return self._finalize(decisions, passes)

    def _seed(
        self, explicit_releases: Mapping[str, BumpType | str]
    ) -> dict[str, _Decision]:
        unknown = [name for name in explicit_releases if name not in self.graph]
        if unknown:
            raise GraphIntegrityError(
                f"Release requested for unknown package(s): {', '.join(unknown)}"
            )
        return {
            name: _Decision(bump=BumpType.parse(bump), explicit=True)
            for name, bump in explicit_releases.items()
        }

    def _propagate(self, name: str, decisions: dict[str, _Decision]) -> list[str]:
        """Apply the rules to every dependent of ``name``.

        Returns:
            Dependents whose decision was added or escalated.
        """
        bump = decisions[name].bump
        old_version = self.graph.package(name).version
        changed: list[str] = []
        for edge in self.graph.edges_to(name):
            needed = required_bump(edge, old_version, bump, self.rules)
            if needed is None:
                continue
            if self._record(decisions, edge.dependent, needed, name):
                changed.append(edge.dependent)
        return changed

    def _record(
        self,
        decisions: dict[str, _Decision],
        name: str,
        needed: BumpType,
        trigger: str,
    ) -> bool:
        """Merge a required bump into the decisions, keeping the most severe.

        Returns:
            True if ``name`` was newly added or its bump increased.
        """
        current = decisions.get(name)
        if current is None:
            logger.debug("%s: %s (triggered by %s)", name, needed, trigger)
            decisions[name] = _Decision(bump=needed, triggers=[trigger])
            return True
        if needed > current.bump:
            logger.debug(
                "%s: %s → %s (triggered by %s)", name, current.bump, needed, trigger
            )
            current.bump = needed
            current.add_trigger(trigger)
            return True
        if needed == current.bump and not current.explicit:
            current.add_trigger(trigger)
        return False

    def _finalize(self, decisions: dict[str, _Decision], passes: int) -> ReleasePlan:
        releases: list[Release] = []
        for name, decision in decisions.items():
            dependencies: list[str] = []
            # Explicit releases never carry dependencies, even when escalated
            if not decision.explicit:
                dependencies = list(decision.triggers)
                # Other released dependencies ride along after the triggers
                for dep in self.graph.dependencies_of(name):
                    if dep in decisions and dep not in dependencies:
                        dependencies.append(dep)
            releases.append(
                Release(name=name, type=decision.bump, dependencies=dependencies)
            )
        return ReleasePlan(
            releases=releases,
            explicit=[name for name, d in decisions.items() if d.explicit],
            passes=passes,
        )


def compute_release_plan(
    graph: DependencyGraph,
    explicit_releases: Mapping[str, BumpType | str],
    rules: RuleTable = DEFAULT_RULES,
) -> ReleasePlan:
    """Compute every release required by ``explicit_releases``.

    Example:
        pkg-c peer-depends on pkg-a ("^1.0.0"), pkg-b depends on both:

        compute_release_plan(graph, {"pkg-a": "minor"}).as_records() →
            [{"name": "pkg-a", "type": "minor"},
             {"name": "pkg-c", "type": "major", "dependencies": ["pkg-a"]},
             {"name": "pkg-b", "type": "patch",
              "dependencies": ["pkg-c", "pkg-a"]}]
    """
    return PropagationSession(graph, rules).run(explicit_releases)
