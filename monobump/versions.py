"""Version parsing, bumping and range utilities.

Versions are handled with ``semver`` (with special handling for incomplete
version strings, e.g. "1.0" → "1.0.0"). Declared ranges are npm-style and
are evaluated with ``semantic_version.NpmSpec``.
"""

from __future__ import annotations

import logging
from enum import Enum
from functools import lru_cache

import semantic_version
import semver

from .errors import AmbiguousRangeError
from .models import BumpType

logger = logging.getLogger(__name__)


class RangeShape(str, Enum):
    """How much movement a declared range tolerates from the current version."""

    PINNED = "pinned"
    TILDE = "tilde"
    CARET = "caret"
    OTHER = "other"

    def __str__(self) -> str:
        return self.value


def parse_version(version_str: str) -> semver.Version:
    """Parse a version string into a semver.Version object.

    Handles incomplete versions by padding with zeros:
    - "1" → "1.0.0"
    - "1.2" → "1.2.0"
    - "1.2.3" → "1.2.3"

    Only the first 3 components are used (major.minor.patch).

    Raises:
        ValueError: If the version carries prerelease or build metadata
            ("1.0.0-beta.1", "1.0.0+abc"), or is not a valid version.
    """
    if "-" in version_str or "+" in version_str:
        raise ValueError(
            f"Prerelease and build versions are not supported: {version_str!r}"
        )
    parts = version_str.split(".")
    # Pad with zeros to ensure we have at least 3 parts
    while len(parts) < 3:
        parts.append("0")
    return semver.Version.parse(".".join(parts[:3]))


def bump_version(version_str: str, bump: BumpType | str) -> str:
    """Apply a bump of the given severity and return the new version string.

    Examples:
        bump_version("1.2.3", "patch") → "1.2.4"
        bump_version("1.2.3", "minor") → "1.3.0"
        bump_version("1.2", "major") → "2.0.0"
    """
    version = parse_version(version_str)
    bump = BumpType.parse(bump)
    if bump is BumpType.MAJOR:
        return str(version.bump_major())
    if bump is BumpType.MINOR:
        return str(version.bump_minor())
    return str(version.bump_patch())


@lru_cache(maxsize=512)
def _npm_spec(declared_range: str) -> semantic_version.NpmSpec:
    # npm treats an empty range as "any version"
    text = declared_range.strip() or "*"
    try:
        return semantic_version.NpmSpec(text)
    except ValueError as exc:
        raise AmbiguousRangeError(declared_range, str(exc)) from exc


def range_admits(declared_range: str, version_str: str) -> bool:
    """Return True if the npm-style range admits the given version.

    Raises:
        AmbiguousRangeError: If the range cannot be parsed.
    """
    spec = _npm_spec(declared_range)
    return spec.match(semantic_version.Version(str(parse_version(version_str))))


def classify_range(declared_range: str, old_version: str) -> RangeShape:
    """Classify a declared range by the bumps of ``old_version`` it admits.

    The range is tested against the old version and its patch, minor and
    major bumps:

    - admits old but not old+patch → PINNED   ("1.0.0")
    - admits old+patch, not old+minor → TILDE ("~1.0.0", "^0.1.0")
    - admits old+minor, not old+major → CARET ("^1.0.0")
    - anything else → OTHER ("*", ">=1.0.0", unparseable ranges, or
      ranges that do not even admit the old version)
    """
    try:
        spec = _npm_spec(declared_range)
    except AmbiguousRangeError as exc:
        logger.debug("%s; classifying as %s", exc, RangeShape.OTHER)
        return RangeShape.OTHER

    old = parse_version(old_version)
    candidates = (old, old.bump_patch(), old.bump_minor(), old.bump_major())
    admits = [spec.match(semantic_version.Version(str(v))) for v in candidates]

    if not admits[0]:
        return RangeShape.OTHER
    if not admits[1]:
        return RangeShape.PINNED
    if not admits[2]:
        return RangeShape.TILDE
    if not admits[3]:
        return RangeShape.CARET
    return RangeShape.OTHER
