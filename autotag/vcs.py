"""Git queries and mutations used by the tagging pipeline.

Every function goes through shell.git(), which captures results instead of
raising. Callers look at stdout content only: a failed command and a
command with no output mean the same thing here.
"""

from __future__ import annotations

from .commits import SEPARATOR
from .shell import git

LOG_FORMAT = f"--pretty=format:%s%n%b{SEPARATOR}"


def is_shallow() -> bool:
    """Whether the checkout was cloned with limited depth."""
    return "true" in git("rev-parse", "--is-shallow-repository").stdout


def unshallow() -> None:
    git("fetch", "--unshallow")


def fetch_tags() -> None:
    git("fetch", "--tags")


def has_tags() -> bool:
    return bool(git("tag").stdout.strip())


def latest_tag_sha(prefix: str) -> str:
    """Commit sha of the most recent tag matching prefix, in topological order."""
    return git(
        "rev-list", f"--tags={prefix}*", "--topo-order", "--max-count=1"
    ).stdout.strip()


def describe_tag(sha: str) -> str:
    """Resolve a commit sha to the tag name pointing at it."""
    return git("describe", "--tags", sha).stdout.strip()


def log_since(tag: str | None) -> str:
    """Raw log text from tag (exclusive) to HEAD, or the whole history.

    Each record is "subject\\nbody" followed by commits.SEPARATOR.
    """
    revs = [f"{tag}..HEAD"] if tag else []
    return git("log", *revs, LOG_FORMAT, "--abbrev-commit").stdout.strip()


def tag_exists(name: str) -> bool:
    return bool(git("tag", "-l", name).stdout.strip())
