"""Tests for autotag.vcs."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

from autotag.commits import SEPARATOR
from autotag.models import CommandResult
from autotag.vcs import (
    describe_tag,
    has_tags,
    is_shallow,
    latest_tag_sha,
    log_since,
    tag_exists,
)


def _out(stdout: str, code: int = 0) -> CommandResult:
    return CommandResult(code=code, stdout=stdout)


class TestIsShallow:
    @patch("autotag.vcs.git")
    def test_shallow(self, mock_git: MagicMock) -> None:
        mock_git.return_value = _out("true\n")

        assert is_shallow()
        mock_git.assert_called_once_with("rev-parse", "--is-shallow-repository")

    @patch("autotag.vcs.git")
    def test_full_clone(self, mock_git: MagicMock) -> None:
        mock_git.return_value = _out("false\n")

        assert not is_shallow()


class TestTags:
    @patch("autotag.vcs.git")
    def test_has_tags(self, mock_git: MagicMock) -> None:
        mock_git.return_value = _out("v1.0.0\nv1.1.0\n")

        assert has_tags()

    @patch("autotag.vcs.git")
    def test_failed_command_means_no_tags(self, mock_git: MagicMock) -> None:
        """A failing git is indistinguishable from an empty result."""
        mock_git.return_value = _out("", code=128)

        assert not has_tags()

    @patch("autotag.vcs.git")
    def test_latest_tag_sha(self, mock_git: MagicMock) -> None:
        mock_git.return_value = _out("abc123\n")

        assert latest_tag_sha("v") == "abc123"
        mock_git.assert_called_once_with(
            "rev-list", "--tags=v*", "--topo-order", "--max-count=1"
        )

    @patch("autotag.vcs.git")
    def test_describe_tag(self, mock_git: MagicMock) -> None:
        mock_git.return_value = _out("v1.2.3\n")

        assert describe_tag("abc123") == "v1.2.3"
        mock_git.assert_called_once_with("describe", "--tags", "abc123")

    @patch("autotag.vcs.git")
    def test_tag_exists(self, mock_git: MagicMock) -> None:
        mock_git.return_value = _out("v1.2.4\n")

        assert tag_exists("v1.2.4")
        mock_git.assert_called_once_with("tag", "-l", "v1.2.4")

    @patch("autotag.vcs.git")
    def test_tag_missing(self, mock_git: MagicMock) -> None:
        mock_git.return_value = _out("")

        assert not tag_exists("v1.2.4")


class TestLogSince:
    @patch("autotag.vcs.git")
    def test_since_tag(self, mock_git: MagicMock) -> None:
        mock_git.return_value = _out(f"feat: a\n{SEPARATOR}\n")

        assert log_since("v1.2.3") == f"feat: a\n{SEPARATOR}"
        mock_git.assert_called_once_with(
            "log", "v1.2.3..HEAD", f"--pretty=format:%s%n%b{SEPARATOR}", "--abbrev-commit"
        )

    @patch("autotag.vcs.git")
    def test_whole_history(self, mock_git: MagicMock) -> None:
        mock_git.return_value = _out("")

        log_since(None)

        mock_git.assert_called_once_with(
            "log", f"--pretty=format:%s%n%b{SEPARATOR}", "--abbrev-commit"
        )
