"""Data models for autotag.

These Pydantic models represent the core data structures passed between
the git gateway, the commit classifier and the tagging pipeline.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class BumpType(str, Enum):
    """Semver increment kinds understood by versions.increment()."""

    MAJOR = "major"
    MINOR = "minor"
    PATCH = "patch"
    PREMAJOR = "premajor"
    PREMINOR = "preminor"
    PREPATCH = "prepatch"
    PRERELEASE = "prerelease"


class Commit(BaseModel):
    """A single commit as extracted from `git log`.

    Attributes:
        message: Subject and body joined by a newline, with quoting
                 artifacts already stripped. Never empty.

    Sequences of commits keep `git log` order, newest first.
    """

    message: str


class ParsedCommit(BaseModel):
    """A commit message broken into its conventional-commit parts.

    Attributes:
        type: Commit type, e.g. "feat" or "fix".
        scope: Optional scope from "type(scope): ...".
        subject: Description after the colon.
        breaking: Whether the commit declares a breaking change.
        breaking_notes: Text of any BREAKING CHANGE footers.
        raw: The original message.
    """

    type: str
    subject: str
    scope: str | None = None
    breaking: bool = False
    breaking_notes: list[str] = Field(default_factory=list)
    raw: str = ""


class CommandResult(BaseModel):
    """Captured outcome of an external command.

    Commands never raise; callers inspect stdout (and, rarely, code).

    Attributes:
        code: Process exit status, 1 if the process could not be started.
        stdout: Captured standard output.
        stderr: Captured standard error.
        error: Description of a launch failure, if any.
    """

    code: int
    stdout: str = ""
    stderr: str = ""
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.code == 0 and self.error is None


class VersionPlan(BaseModel):
    """The version computed for this run.

    Attributes:
        previous_tag: Tag found before this run, or "0.0.0".
        bump: The effective bump applied.
        new_version: Incremented version, with a pre-release suffix on
                     non-release branches.
        new_tag: Tag prefix + new_version.
    """

    previous_tag: str
    bump: BumpType
    new_version: str
    new_tag: str
