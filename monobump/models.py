"""Data models for monobump.

These Pydantic models represent the packages and edges of a workspace
graph, and the release plan computed from it.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class BumpType(str, Enum):
    """Severity of a version bump.

    Ordering follows severity (patch < minor < major) rather than the
    alphabetical order of the underlying strings, so ``max()`` picks the
    most severe bump.
    """

    PATCH = "patch"
    MINOR = "minor"
    MAJOR = "major"

    @property
    def severity(self) -> int:
        return _SEVERITY[self]

    @classmethod
    def parse(cls, value: BumpType | str) -> BumpType:
        """Convert a bump name ("patch", "Minor", ...) to a BumpType.

        Raises:
            ValueError: If the value names no known bump type.
        """
        try:
            return cls(value.lower())
        except (AttributeError, ValueError):
            choices = ", ".join(b.value for b in cls)
            raise ValueError(
                f"Invalid bump type {value!r} (expected one of: {choices})"
            ) from None

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, BumpType):
            return NotImplemented
        return self.severity < other.severity

    def __le__(self, other: object) -> bool:
        if not isinstance(other, BumpType):
            return NotImplemented
        return self.severity <= other.severity

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, BumpType):
            return NotImplemented
        return self.severity > other.severity

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, BumpType):
            return NotImplemented
        return self.severity >= other.severity

    def __str__(self) -> str:
        return self.value


_SEVERITY = {BumpType.PATCH: 1, BumpType.MINOR: 2, BumpType.MAJOR: 3}


class DependencyKind(str, Enum):
    """How a dependent declares a dependency.

    Values match the manifest sections they come from: ``dependencies``,
    ``devDependencies`` and ``peerDependencies``.
    """

    NORMAL = "normal"
    DEV = "dev"
    PEER = "peer"

    def __str__(self) -> str:
        return self.value


class PackageInfo(BaseModel):
    """A single package in the monorepo workspace.

    Attributes:
        name: Unique package name.
        version: Current version string. Incomplete versions ("1.2") are
                 accepted and padded when parsed.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    version: str

    @field_validator("version")
    @classmethod
    def _check_version(cls, value: str) -> str:
        from .versions import parse_version

        parse_version(value)
        return value


class DependencyEdge(BaseModel):
    """A directed edge: ``dependent`` declares ``range`` on ``dependency``.

    Attributes:
        dependent: Name of the package that declares the dependency.
        dependency: Name of the package being depended upon.
        kind: Manifest section the declaration lives in.
        range: The npm-style version range as written by the dependent.
    """

    model_config = ConfigDict(frozen=True)

    dependent: str
    dependency: str
    kind: DependencyKind = DependencyKind.NORMAL
    range: str = "*"


class Release(BaseModel):
    """A release decision for one package.

    Attributes:
        name: Package being released.
        type: Final bump severity.
        dependencies: Released dependencies that caused (or accompany) this
                      release. Always empty for explicit releases.
    """

    name: str
    type: BumpType
    dependencies: list[str] = Field(default_factory=list)


class ChangesetRelease(BaseModel):
    name: str
    type: BumpType


class ChangesetDependent(BaseModel):
    name: str
    type: BumpType
    dependencies: list[str]


class Changeset(BaseModel):
    """The record handed to whatever persists changesets.

    ``releases`` holds the explicitly requested packages, ``dependents``
    the ones pulled in by propagation.
    """

    summary: str
    releases: list[ChangesetRelease] = Field(default_factory=list)
    dependents: list[ChangesetDependent] = Field(default_factory=list)


class ReleasePlan(BaseModel):
    """Final output of propagation.

    Attributes:
        releases: Release records, explicit requests first (in request
                  order) followed by propagated packages in discovery order.
        explicit: Names of the explicitly requested packages.
        passes: Number of propagation passes it took to reach a fixed point.
    """

    releases: list[Release] = Field(default_factory=list)
    explicit: list[str] = Field(default_factory=list)
    passes: int = 0

    def get(self, name: str) -> Release | None:
        for release in self.releases:
            if release.name == name:
                return release
        return None

    def names(self) -> list[str]:
        return [r.name for r in self.releases]

    @property
    def dependents(self) -> list[Release]:
        """Releases that were not explicitly requested."""
        explicit = set(self.explicit)
        return [r for r in self.releases if r.name not in explicit]

    def as_records(self) -> list[dict[str, Any]]:
        """Plain ``{name, type, dependencies}`` dicts.

        The ``dependencies`` key is omitted when the list is empty.
        """
        records: list[dict[str, Any]] = []
        for release in self.releases:
            record: dict[str, Any] = {"name": release.name, "type": release.type.value}
            if release.dependencies:
                record["dependencies"] = list(release.dependencies)
            records.append(record)
        return records

    def to_changeset(self, summary: str) -> Changeset:
        explicit = set(self.explicit)
        return Changeset(
            summary=summary,
            releases=[
                ChangesetRelease(name=r.name, type=r.type)
                for r in self.releases
                if r.name in explicit
            ],
            dependents=[
                ChangesetDependent(
                    name=r.name, type=r.type, dependencies=list(r.dependencies)
                )
                for r in self.releases
                if r.name not in explicit
            ],
        )
