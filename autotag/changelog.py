"""Release notes generation via git-cliff.

git-cliff renders the commits of the release, using the project's
cliff.toml or [tool.git-cliff] table when present and its built-in
template otherwise. When git-cliff is not installed, a simple markdown
changelog in the conventional-changelog layout is rendered instead.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date

from .commits import parse_commits
from .errors import ChangelogError
from .models import Commit, ParsedCommit
from .shell import exec_command
from .versions import INITIAL_VERSION

SECTIONS: dict[str, str] = {
    "feat": "Features",
    "fix": "Bug Fixes",
    "perf": "Performance Improvements",
    "revert": "Reverts",
}


def _bullet(commit: ParsedCommit, text: str) -> str:
    scope = f"**{commit.scope}:** " if commit.scope else ""
    return f"* {scope}{text}"


def _heading(
    new_version: str,
    previous_tag: str,
    new_tag: str,
    repository_url: str,
    today: date,
) -> str:
    if repository_url:
        compare = f"{repository_url}/compare/{previous_tag}...{new_tag}"
        return f"## [{new_version}]({compare}) ({today.isoformat()})"
    return f"## {new_version} ({today.isoformat()})"


def generate_fallback_notes(
    *,
    preset: str,
    commits: Sequence[Commit],
    previous_tag: str,
    new_tag: str,
    new_version: str,
    repository_url: str = "",
    today: date | None = None,
) -> str:
    """Render release notes without git-cliff.

    Args:
        preset: Commit message grammar used to read the commits.
        commits: Commits included in the release.
        previous_tag: Tag of the last release, or the "0.0.0" sentinel.
        new_tag: Tag being released.
        new_version: Version being released.
        repository_url: Base URL for compare links; omitted when empty.
        today: Release date, defaults to the current date.

    Returns:
        Markdown release notes.
    """
    parsed = parse_commits(preset, commits)

    today = today or date.today()
    lines = [_heading(new_version, previous_tag, new_tag, repository_url, today), ""]

    breaking = [(pc, note) for pc in parsed for note in pc.breaking_notes]
    if breaking:
        lines += ["", "### ⚠ BREAKING CHANGES", ""]
        lines += [_bullet(pc, note) for pc, note in breaking]

    for commit_type, title in SECTIONS.items():
        entries = [pc for pc in parsed if pc.type == commit_type]
        if entries:
            lines += ["", f"### {title}", ""]
            lines += [_bullet(pc, pc.subject) for pc in entries]

    return "\n".join(lines).rstrip() + "\n"


def git_cliff_args(
    previous_tag: str, new_tag: str, github_repo: str = ""
) -> list[str]:
    """Build the git-cliff command line for one release.

    Commits after previous_tag are rendered under new_tag. With no
    previous release (the "0.0.0" baseline) every unreleased commit is.
    """
    args = ["git-cliff", "--tag", new_tag, "--strip", "all"]
    if github_repo:
        args += ["--github-repo", github_repo]
    if previous_tag == INITIAL_VERSION:
        args.append("--unreleased")
    else:
        args.append(f"{previous_tag}..HEAD")
    return args


def generate_notes(
    *,
    preset: str,
    commits: Sequence[Commit],
    previous_tag: str,
    new_tag: str,
    new_version: str,
    repository: str = "",
    repository_url: str = "",
    token: str = "",
    today: date | None = None,
) -> str:
    """Generate the changelog for a release.

    Args:
        preset: Commit message grammar, used by the fallback renderer.
        commits: Commits included in the release.
        previous_tag: Tag of the last release, or the "0.0.0" sentinel.
        new_tag: Tag being released.
        new_version: Version being released.
        repository: "owner/name", handed to git-cliff as --github-repo.
        repository_url: Base URL for compare links in the fallback.
        token: Exported as GITHUB_TOKEN for git-cliff's remote lookups.
        today: Release date for the fallback, defaults to the current date.

    Returns:
        Markdown release notes.

    Raises:
        ChangelogError: If git-cliff is installed but fails.
    """
    result = exec_command(
        *git_cliff_args(previous_tag, new_tag, repository),
        env={"GITHUB_TOKEN": token} if token else None,
    )
    if result.error is not None:
        # git-cliff missing from PATH
        return generate_fallback_notes(
            preset=preset,
            commits=commits,
            previous_tag=previous_tag,
            new_tag=new_tag,
            new_version=new_version,
            repository_url=repository_url,
            today=today,
        )
    if result.code != 0:
        raise ChangelogError(
            f"git-cliff failed with exit code {result.code}", result.stderr
        )
    return result.stdout.strip() + "\n"
