"""Commit log parsing and bump classification.

Turns raw `git log` text into Commit models, and decides which semver bump
a set of commits calls for. Message grammars are pluggable: a preset name
selects a CommitParser from PRESETS, and analyze_commits() applies the
release rules to whatever the parser recognises.

Release rules (highest wins across all commits):
- breaking change → major
- feat → minor
- fix, perf, revert → patch
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable, Sequence
from typing import Protocol

from .errors import ConfigError
from .models import BumpType, Commit, ParsedCommit

# Placed after each log record; long enough never to appear in a message.
SEPARATOR = "=" * 46

RELEASE_RULES: dict[str, BumpType] = {
    "feat": BumpType.MINOR,
    "fix": BumpType.PATCH,
    "perf": BumpType.PATCH,
    "revert": BumpType.PATCH,
}

# Lower index = more severe.
SEVERITY: list[BumpType] = [BumpType.MAJOR, BumpType.MINOR, BumpType.PATCH]

_QUOTE_ARTIFACTS = re.compile(r"^['\s]+|['\s]+$")
_REVERT_HEADER = re.compile(r'^Revert "(?P<subject>.+)"$')


def parse_log(text: str) -> list[Commit]:
    """Split raw log text into commits.

    Some CI shells leave single quotes around each record, so leading and
    trailing quotes are stripped along with whitespace. Empty records are
    dropped and `git log` order (newest first) is preserved.
    """
    commits: list[Commit] = []
    for record in text.split(SEPARATOR):
        message = _QUOTE_ARTIFACTS.sub("", record.strip())
        if message:
            commits.append(Commit(message=message))
    return commits


class CommitParser(Protocol):
    """Parses one commit message, or returns None if it doesn't match."""

    def parse(self, message: str) -> ParsedCommit | None: ...


class ConventionalCommitParser:
    """Parser for `type(scope)!: subject` messages.

    Args:
        allow_bang: Treat "!" before the colon as a breaking change.
        breaking_pattern: Regex for the footer token that introduces a
                          breaking-change note.
    """

    header = re.compile(
        r"^(?P<type>\w+)(?:\((?P<scope>[^()\r\n]*)\))?(?P<bang>!)?: (?P<subject>.+)$"
    )

    def __init__(
        self, *, allow_bang: bool = True, breaking_pattern: str = r"BREAKING[ -]CHANGE"
    ) -> None:
        self.allow_bang = allow_bang
        self.breaking_footer = re.compile(
            rf"^(?:{breaking_pattern}):\s*(?P<note>.*)", re.MULTILINE | re.DOTALL
        )

    def parse(self, message: str) -> ParsedCommit | None:
        subject_line, _, body = message.partition("\n")
        subject_line = subject_line.strip()

        revert = _REVERT_HEADER.match(subject_line)
        if revert:
            return ParsedCommit(type="revert", subject=revert["subject"], raw=message)

        match = self.header.match(subject_line)
        if not match:
            return None
        if match["bang"] and not self.allow_bang:
            return None

        notes: list[str] = []
        footer = self.breaking_footer.search(body)
        if footer and footer["note"].strip():
            notes.append(footer["note"].strip())
        elif match["bang"]:
            notes.append(match["subject"])

        return ParsedCommit(
            type=match["type"].lower(),
            scope=match["scope"] or None,
            subject=match["subject"],
            breaking=bool(footer or match["bang"]),
            breaking_notes=notes,
            raw=message,
        )


PRESETS: dict[str, Callable[[], CommitParser]] = {
    "conventionalcommits": ConventionalCommitParser,
    "angular": lambda: ConventionalCommitParser(
        allow_bang=False, breaking_pattern="BREAKING CHANGE"
    ),
}


def get_parser(preset: str) -> CommitParser:
    """Instantiate the parser registered under `preset`.

    Raises:
        ConfigError: If no parser is registered for the preset.
    """
    try:
        return PRESETS[preset]()
    except KeyError:
        known = ", ".join(sorted(PRESETS))
        raise ConfigError(
            f"Unknown message_parser_preset {preset!r} (known: {known})"
        ) from None


def parse_commits(preset: str, commits: Iterable[Commit]) -> list[ParsedCommit]:
    """Parse every commit, skipping those the preset doesn't recognise."""
    parser = get_parser(preset)
    parsed = (parser.parse(c.message) for c in commits)
    return [p for p in parsed if p is not None]


def commit_bump(commit: ParsedCommit) -> BumpType | None:
    if commit.breaking:
        return BumpType.MAJOR
    return RELEASE_RULES.get(commit.type)


def max_bump(a: BumpType | None, b: BumpType | None) -> BumpType | None:
    """Return the more severe of two bumps; None loses to anything."""
    if a is None:
        return b
    if b is None:
        return a
    return SEVERITY[min(SEVERITY.index(a), SEVERITY.index(b))]


def analyze_commits(
    preset: str,
    commits: Sequence[Commit],
    log: Callable[[str], None] = print,
) -> BumpType | None:
    """Determine the bump required by a set of commits.

    Args:
        preset: Name of the message grammar (see PRESETS).
        commits: Commits since the previous tag, in `git log` order
            (newest first), as returned by parse_log().
        log: Receives one line per analysed commit.

    Returns:
        The most severe bump implied by any commit, or None if no commit
        calls for a release.
    """
    parser = get_parser(preset)
    bump: BumpType | None = None
    for commit in commits:
        log(f"Analyzing commit: {commit.message}")
        parsed = parser.parse(commit.message)
        this = commit_bump(parsed) if parsed else None
        if this is None:
            log("The commit should not trigger a release")
            continue
        log(f"The release type for the commit is {this.value}")
        bump = max_bump(bump, this)
    outcome = bump.value if bump else "no"
    log(f"Analysis of {len(commits)} commits complete: {outcome} release")
    return bump
