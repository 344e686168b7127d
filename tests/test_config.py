"""Tests for autotag.config."""

from __future__ import annotations

import pytest

from autotag.actions import ActionContext
from autotag.config import ActionConfig, load_config, parse_bump
from autotag.errors import ConfigError
from autotag.models import BumpType


class TestParseBump:
    def test_valid(self) -> None:
        assert parse_bump("minor") is BumpType.MINOR
        assert parse_bump("prerelease") is BumpType.PRERELEASE

    def test_disabled(self) -> None:
        assert parse_bump("") is None
        assert parse_bump("false") is None

    def test_invalid(self) -> None:
        with pytest.raises(ConfigError, match="Invalid default_bump 'huge'"):
            parse_bump("huge")


class TestLoadConfig:
    def test_full_environment(self) -> None:
        ctx = ActionContext(
            env={
                "INPUT_DEFAULT_BUMP": "patch",
                "INPUT_MESSAGE_PARSER_PRESET": "angular",
                "INPUT_TAG_PREFIX": "v",
                "INPUT_RELEASE_BRANCHES": "main,release/.*",
                "INPUT_CREATE_ANNOTATED_TAG": "true",
                "INPUT_DRY_RUN": "false",
                "INPUT_GITHUB_TOKEN": "ghs_x",
                "GITHUB_REF": "refs/heads/main",
                "GITHUB_SHA": "abc",
                "GITHUB_REPOSITORY": "octo/widgets",
                "GITHUB_SERVER_URL": "https://ghe.example.com/",
            }
        )

        config = load_config(ctx)

        assert config.default_bump is BumpType.PATCH
        assert config.message_parser_preset == "angular"
        assert config.tag_prefix == "v"
        assert config.create_annotated_tag is True
        assert config.dry_run is False
        assert config.repository_url == "https://ghe.example.com/octo/widgets"

    def test_defaults(self) -> None:
        config = load_config(ActionContext(env={}))

        assert config.default_bump is None
        assert config.message_parser_preset == "conventionalcommits"
        assert config.tag_prefix == ""
        assert config.dry_run is False
        assert config.ref == ""
        assert config.repository_url == ""

    def test_only_true_enables_flags(self) -> None:
        config = load_config(ActionContext(env={"INPUT_DRY_RUN": "yes"}))

        assert config.dry_run is False

    def test_project_defaults(self) -> None:
        ctx = ActionContext(env={}, defaults={"dry_run": "true", "tag_prefix": "v"})

        config = load_config(ctx)

        assert config.dry_run is True
        assert config.tag_prefix == "v"


def test_repository_url_defaults_to_github() -> None:
    assert ActionConfig(repository="octo/widgets").repository_url == (
        "https://github.com/octo/widgets"
    )


def test_api_host_only_for_enterprise() -> None:
    assert ActionConfig().api_host is None
    assert ActionConfig(server_url="https://github.example.com/").api_host == (
        "github.example.com"
    )
