"""Exceptions raised by autotag.

Anything derived from AutotagError is an expected failure and is reported
to the runner as a single error line by pipeline.run().
"""

from __future__ import annotations


class AutotagError(Exception):
    """Base class for all autotag failures."""


class ConfigError(AutotagError):
    """A required input or environment variable is missing or invalid."""


class NothingToBumpError(AutotagError):
    """Neither the commits nor the default bump yield a bump type."""


class VersionError(AutotagError):
    """The previous tag is not a version semver can increment."""


class RemoteError(AutotagError):
    """A GitHub API call failed."""

    def __init__(self, message: str, stderr: str = "") -> None:
        super().__init__(f"{message}: {stderr.strip()}" if stderr.strip() else message)
        self.stderr = stderr


class ChangelogError(AutotagError):
    """git-cliff could not render the release notes."""

    def __init__(self, message: str, stderr: str = "") -> None:
        super().__init__(f"{message}: {stderr.strip()}" if stderr.strip() else message)
        self.stderr = stderr
