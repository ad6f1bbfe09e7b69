"""Propagation policy.

Which bump a dependent needs when one of its dependencies is released is
decided by a lookup table keyed by (edge kind, upstream bump, range shape).
Keeping the policy as data makes it auditable and lets it be swapped out
in tests.

The default policy:

- normal and dev dependencies: the dependent gets a patch release when
  the dependency's new version falls outside the declared range.
- peer dependencies bumped by patch: same as above.
- peer dependencies bumped by minor or major: the dependent always gets a
  major release, whatever its declared range.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from enum import Enum

from .errors import AmbiguousRangeError
from .models import BumpType, DependencyEdge, DependencyKind
from .versions import RangeShape, bump_version, classify_range, range_admits

logger = logging.getLogger(__name__)


class Effect(str, Enum):
    """What a released dependency does to its dependent."""

    RANGE = "range"  # patch if the new version leaves the declared range
    MAJOR = "major"  # always major

    def __str__(self) -> str:
        return self.value


RuleKey = tuple[DependencyKind, BumpType, RangeShape]
RuleTable = Mapping[RuleKey, Effect]


def _default_effect(kind: DependencyKind, bump: BumpType) -> Effect:
    if kind is DependencyKind.PEER and bump >= BumpType.MINOR:
        return Effect.MAJOR
    return Effect.RANGE


DEFAULT_RULES: RuleTable = {
    (kind, bump, shape): _default_effect(kind, bump)
    for kind in DependencyKind
    for bump in BumpType
    for shape in RangeShape
}


def required_bump(
    edge: DependencyEdge,
    old_version: str,
    bump: BumpType,
    rules: RuleTable = DEFAULT_RULES,
) -> BumpType | None:
    """Work out the bump ``edge.dependent`` needs when ``edge.dependency`` is released.

    Args:
        edge: The dependency edge being followed.
        old_version: Current version of the dependency.
        bump: Severity the dependency is being released with.
        rules: Policy table to consult.

    Returns:
        The bump required of the dependent, or None if this edge does not
        force a release.

    Raises:
        KeyError: If the table has no entry for the edge.
    """
    shape = classify_range(edge.range, old_version)
    effect = rules[(edge.kind, bump, shape)]
    if effect is Effect.MAJOR:
        return BumpType.MAJOR

    new_version = bump_version(old_version, bump)
    try:
        admitted = range_admits(edge.range, new_version)
    except AmbiguousRangeError as exc:
        # Unknown ranges never force a release through range breakage
        logger.debug("%s; assuming %s is admitted", exc, new_version)
        return None
    return None if admitted else BumpType.PATCH
