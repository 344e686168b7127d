"""Version parsing and bumping utilities.

Wraps semver to provide the increment behaviour release tooling expects:
pre-* bumps start a numeric pre-release ("1.2.3" premajor → "2.0.0-0"),
and a plain bump of a pre-release version releases it
("2.0.0-1" major → "2.0.0").
"""

from __future__ import annotations

import semver

from .errors import VersionError
from .models import BumpType

# Baseline used when the repository has no version tag yet.
INITIAL_VERSION = "0.0.0"


def parse_version(version_str: str) -> semver.Version:
    """Parse a strict "major.minor.patch[-pre][+build]" string.

    Raises:
        VersionError: If the string is not a valid semantic version.
    """
    try:
        return semver.Version.parse(version_str)
    except (ValueError, TypeError) as exc:
        raise VersionError(str(exc)) from exc


def increment(version_str: str, bump: BumpType) -> str:
    """Apply `bump` to a version string and return the new version.

    Examples:
        increment("1.2.3", BumpType.MINOR) → "1.3.0"
        increment("1.2.3", BumpType.PREPATCH) → "1.2.4-0"
        increment("1.2.4-0", BumpType.PRERELEASE) → "1.2.4-1"

    Raises:
        VersionError: If version_str is not a valid semantic version.
    """
    v = parse_version(version_str)

    if bump in (BumpType.MAJOR, BumpType.MINOR, BumpType.PATCH):
        return str(v.next_version(bump.value))
    if bump is BumpType.PREMAJOR:
        return str(v.bump_major().replace(prerelease="0"))
    if bump is BumpType.PREMINOR:
        return str(v.bump_minor().replace(prerelease="0"))
    if bump is BumpType.PREPATCH:
        return str(v.bump_patch().replace(prerelease="0"))
    # prerelease: continue an existing pre-release, else start one on the next patch
    if v.prerelease:
        return str(v.bump_prerelease(token=None))
    return str(v.bump_patch().replace(prerelease="0"))
