"""Tagging pipeline: classify → fetch → log → bump → version → notes → tag.

This module orchestrates a single autotag run:
1. Decide whether the current branch is a release branch
2. Fetch tags and find the previous version tag
3. Read the commits since that tag
4. Resolve the bump type from the commit messages (or the default)
5. Compute the new version and tag name
6. Generate the changelog
7. Create and push the tag, unless the run is a pre-release, the tag
   already exists, or this is a dry run

Every stop other than a failure is a normal return. Failures raise
AutotagError subclasses, which run() reports through the action context.
"""

from __future__ import annotations

import re
from collections.abc import Sequence

from .actions import ActionContext
from .changelog import generate_notes
from .commits import analyze_commits, parse_log
from .config import ActionConfig, load_config
from .errors import ConfigError, NothingToBumpError, VersionError
from .github import create_ref, create_tag_object
from .models import BumpType, Commit, VersionPlan
from .toml import load_tool_defaults
from .vcs import (
    describe_tag,
    fetch_tags,
    has_tags,
    is_shallow,
    latest_tag_sha,
    log_since,
    tag_exists,
    unshallow,
)
from .versions import INITIAL_VERSION, increment


def is_prerelease_branch(ref: str, release_branches: str) -> bool:
    """Whether `ref` matches none of the release branch patterns.

    Patterns are comma-separated regular expressions searched anywhere in
    the branch name, so "main" also matches "maintenance".

    Args:
        ref: Git ref, e.g. "refs/heads/main".
        release_branches: e.g. "main,release/.*".
    """
    branch = ref.removeprefix("refs/heads/")
    patterns = release_branches.split(",")
    return not any(re.search(pattern, branch) for pattern in patterns)


def prepare_checkout(ctx: ActionContext) -> None:
    """Make sure the local clone has full history and all tags."""
    ctx.step("Fetching history and tags")
    if is_shallow():
        ctx.info("Shallow clone detected, fetching full history")
        unshallow()
    fetch_tags()


def find_previous_tag(tag_prefix: str) -> tuple[str, str]:
    """Find the most recent tag matching the prefix.

    Returns:
        (tag, commit sha), or (INITIAL_VERSION, "") when no such tag exists.
    """
    if not has_tags():
        return INITIAL_VERSION, ""
    sha = latest_tag_sha(tag_prefix)
    if not sha:
        return INITIAL_VERSION, ""
    return describe_tag(sha), sha


def resolve_bump(
    ctx: ActionContext, config: ActionConfig, commits: Sequence[Commit]
) -> BumpType:
    """Bump implied by the commits, falling back to the configured default.

    Raises:
        NothingToBumpError: If neither source yields a bump.
    """
    bump = analyze_commits(config.message_parser_preset, commits, log=ctx.info)
    ctx.debug(f"Bump type from commits: {bump.value if bump else None}")

    bump = bump or config.default_bump
    if bump is None:
        raise NothingToBumpError("Nothing to bump - not building release")

    ctx.info(f"Effective bump type: {bump.value}")
    return bump


def compute_version(
    previous_tag: str,
    bump: BumpType,
    *,
    tag_prefix: str,
    sha: str,
    prerelease: bool,
) -> VersionPlan:
    """Compute the next version and tag name.

    On pre-release branches the first 7 characters of the commit sha are
    appended (e.g. "1.3.0-abc1234") so every build gets a distinct version.

    Raises:
        VersionError: If the previous tag isn't a semantic version.
    """
    raw_version = previous_tag.removeprefix(tag_prefix)
    try:
        incremented = increment(raw_version, bump)
    except VersionError as exc:
        raise VersionError(f"SemVer inc rejected tag {previous_tag}") from exc

    new_version = f"{incremented}-{sha[:7]}" if prerelease else incremented
    return VersionPlan(
        previous_tag=previous_tag,
        bump=bump,
        new_version=new_version,
        new_tag=f"{tag_prefix}{new_version}",
    )


def publish_tag(ctx: ActionContext, config: ActionConfig, new_tag: str) -> None:
    """Create the tag on GitHub, then fetch it back into the checkout.

    Annotated tags need a tag object first; the ref then points at that
    object instead of the commit.
    """
    if not config.repository:
        raise ConfigError("Missing GITHUB_REPOSITORY")

    ctx.step(f"Creating tag {new_tag}")
    ref = f"refs/tags/{new_tag}"
    if config.create_annotated_tag:
        ctx.debug("Creating annotated tag")
        tag_sha = create_tag_object(
            config.repository,
            new_tag,
            new_tag,
            config.sha,
            config.github_token,
            host=config.api_host,
        )
        ctx.debug("Pushing annotated tag to the repo")
        create_ref(
            config.repository, ref, tag_sha, config.github_token, host=config.api_host
        )
    else:
        ctx.debug("Pushing new tag to the repo")
        create_ref(
            config.repository, ref, config.sha, config.github_token, host=config.api_host
        )

    ctx.info("Fetching generated tag")
    fetch_tags()


def run_tag(ctx: ActionContext, config: ActionConfig) -> VersionPlan | None:
    """Execute the full tagging pipeline.

    Returns:
        The computed version plan, or None if there were no new commits
        since the previous tag.

    Raises:
        AutotagError: On any failure; outputs recorded so far are kept.
    """
    if not config.ref:
        raise ConfigError("Missing GITHUB_REF")
    if not config.sha:
        raise ConfigError("Missing GITHUB_SHA")

    prerelease = is_prerelease_branch(config.ref, config.release_branches)
    ctx.debug(f"Pre-release branch: {prerelease}")

    # Phase 1: previous tag and commits
    prepare_checkout(ctx)
    previous_tag, previous_sha = find_previous_tag(config.tag_prefix)
    ctx.set_output("previous_tag", previous_tag)

    if previous_sha == config.sha:
        ctx.debug("No new commits since previous tag. Skipping...")
        return None

    ctx.info(f"Current tag is {previous_tag}")
    logs = log_since(previous_tag if previous_sha else None)
    commits = parse_log(logs)
    ctx.debug(f"Commits: {[c.message for c in commits]}")

    # Phase 2: version
    ctx.step("Analyzing commits")
    bump = resolve_bump(ctx, config, commits)
    plan = compute_version(
        previous_tag,
        bump,
        tag_prefix=config.tag_prefix,
        sha=config.sha,
        prerelease=prerelease,
    )
    ctx.set_output("new_version", plan.new_version)
    ctx.set_output("new_tag", plan.new_tag)
    ctx.debug(f"New tag: {plan.new_tag}")

    changelog = generate_notes(
        preset=config.message_parser_preset,
        commits=commits,
        previous_tag=previous_tag,
        new_tag=plan.new_tag,
        new_version=plan.new_version,
        repository=config.repository,
        repository_url=config.repository_url,
        token=config.github_token,
    )
    ctx.set_output("changelog", changelog)

    # Phase 3: tag
    if prerelease:
        ctx.debug("This branch is not a release branch. Skipping the tag creation.")
        return plan

    if tag_exists(plan.new_tag):
        ctx.debug("This tag already exists. Skipping the tag creation.")
        return plan

    ctx.info(f"dry_run: {config.dry_run}")
    if config.dry_run:
        ctx.set_output("dry_run", "true")
        ctx.info("Dry run: not performing tag action.")
        return plan

    publish_tag(ctx, config, plan.new_tag)
    ctx.info(f"Tagged {plan.new_tag}")
    return plan


def run(*, dry_run: bool = False) -> None:
    """Entry point for a CI step: read the environment and run the pipeline.

    Any error ends the process with exit status 1 and an ::error:: line;
    every other outcome exits normally.

    Args:
        dry_run: Force a dry run regardless of the dry_run input.
    """
    with ActionContext.from_env() as ctx:
        try:
            ctx.defaults = load_tool_defaults()
            config = load_config(ctx)
            if dry_run:
                config = config.model_copy(update={"dry_run": True})
            run_tag(ctx, config)
        except Exception as exc:
            ctx.set_failed(str(exc))
