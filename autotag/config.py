"""Typed configuration for a tagging run."""

from __future__ import annotations

from urllib.parse import urlparse

from pydantic import BaseModel

from .actions import ActionContext
from .errors import ConfigError
from .models import BumpType

DEFAULT_PRESET = "conventionalcommits"
DEFAULT_SERVER_URL = "https://github.com"


class ActionConfig(BaseModel):
    """Action inputs plus the runner environment the pipeline needs.

    Attributes:
        default_bump: Bump used when no commit implies one.
        message_parser_preset: Name of the commit-message grammar.
        tag_prefix: Prepended to versions to form tag names (e.g. "v").
        release_branches: Comma-separated branch patterns that publish tags.
        create_annotated_tag: Create a tag object before the ref.
        dry_run: Compute everything but never publish.
        github_token: Token for the GitHub API.
        ref: GITHUB_REF, e.g. "refs/heads/main".
        sha: GITHUB_SHA of the commit being tagged.
        repository: GITHUB_REPOSITORY, "owner/name".
        server_url: GITHUB_SERVER_URL, used for changelog links and to
            reach GitHub Enterprise Server.
    """

    default_bump: BumpType | None = None
    message_parser_preset: str = DEFAULT_PRESET
    tag_prefix: str = ""
    release_branches: str = ""
    create_annotated_tag: bool = False
    dry_run: bool = False
    github_token: str = ""
    ref: str = ""
    sha: str = ""
    repository: str = ""
    server_url: str = DEFAULT_SERVER_URL

    @property
    def repository_url(self) -> str:
        if not self.repository:
            return ""
        return f"{self.server_url.rstrip('/')}/{self.repository}"

    @property
    def api_host(self) -> str | None:
        """Hostname for gh (GH_HOST), or None when the server is github.com."""
        host = urlparse(self.server_url).netloc
        if not host or host == "github.com":
            return None
        return host


def parse_bump(value: str) -> BumpType | None:
    """Convert a bump input to BumpType; "" or "false" means no default."""
    if not value or value == "false":
        return None
    try:
        return BumpType(value)
    except ValueError:
        valid = ", ".join(b.value for b in BumpType)
        raise ConfigError(
            f"Invalid default_bump {value!r} (expected one of: {valid})"
        ) from None


def load_config(ctx: ActionContext) -> ActionConfig:
    """Read every input and environment value the pipeline uses.

    Raises:
        ConfigError: If an input is blank or default_bump is not a bump type.
    """
    return ActionConfig(
        default_bump=parse_bump(ctx.get_input("default_bump")),
        message_parser_preset=ctx.get_input("message_parser_preset") or DEFAULT_PRESET,
        tag_prefix=ctx.get_input("tag_prefix"),
        release_branches=ctx.get_input("release_branches"),
        create_annotated_tag=ctx.get_input("create_annotated_tag") == "true",
        dry_run=ctx.get_input("dry_run") == "true",
        github_token=ctx.get_input("github_token"),
        ref=ctx.get_env("GITHUB_REF"),
        sha=ctx.get_env("GITHUB_SHA"),
        repository=ctx.get_env("GITHUB_REPOSITORY"),
        server_url=ctx.get_env("GITHUB_SERVER_URL") or DEFAULT_SERVER_URL,
    )
