"""Shared test fixtures."""

from __future__ import annotations

from collections.abc import Iterator
from unittest.mock import MagicMock, patch

import pytest

from autotag.actions import ActionContext
from autotag.config import ActionConfig
from autotag.models import CommandResult

HEAD_SHA = "abc1234def5678abc1234def5678abc1234def56"
TAG_SHA = "0123456789abcdef0123456789abcdef01234567"

GIT_FUNCTIONS = (
    "is_shallow",
    "unshallow",
    "fetch_tags",
    "has_tags",
    "latest_tag_sha",
    "describe_tag",
    "log_since",
    "tag_exists",
)


@pytest.fixture
def ctx() -> ActionContext:
    """An action context with an empty environment (outputs echo to stdout)."""
    return ActionContext(env={})


@pytest.fixture
def config() -> ActionConfig:
    """A release-branch configuration with a "v" tag prefix."""
    return ActionConfig(
        default_bump=None,
        tag_prefix="v",
        release_branches="main,release/.*",
        github_token="ghs_test",
        ref="refs/heads/main",
        sha=HEAD_SHA,
        repository="octo/widgets",
    )


@pytest.fixture
def git_mocks() -> Iterator[dict[str, MagicMock]]:
    """Patch every git query used by the pipeline.

    Defaults describe a full clone with previous tag v1.2.3 and no
    candidate tag already present. git-cliff is reported as not installed,
    so changelogs come from the built-in renderer.
    """
    patchers = {name: patch(f"autotag.pipeline.{name}") for name in GIT_FUNCTIONS}
    patchers["git_cliff"] = patch("autotag.changelog.exec_command")
    mocks = {name: p.start() for name, p in patchers.items()}
    mocks["is_shallow"].return_value = False
    mocks["has_tags"].return_value = True
    mocks["latest_tag_sha"].return_value = TAG_SHA
    mocks["describe_tag"].return_value = "v1.2.3"
    mocks["log_since"].return_value = ""
    mocks["tag_exists"].return_value = False
    mocks["git_cliff"].return_value = CommandResult(
        code=1, error="No such file or directory: 'git-cliff'"
    )
    yield mocks
    for p in patchers.values():
        p.stop()


@pytest.fixture
def github_mocks() -> Iterator[dict[str, MagicMock]]:
    """Patch the GitHub API calls used by the pipeline."""
    with (
        patch("autotag.pipeline.create_tag_object") as mock_tag,
        patch("autotag.pipeline.create_ref") as mock_ref,
    ):
        mock_tag.return_value = "f" * 40
        yield {"create_tag_object": mock_tag, "create_ref": mock_ref}
