"""GitHub API calls for publishing tags.

Uses `gh api`, authenticated with the token passed in, to create the git
tag object and reference. A host routes the call to a GitHub Enterprise
Server instead of github.com. Failures raise RemoteError; nothing is retried.
"""

from __future__ import annotations

import json

from .errors import RemoteError
from .shell import gh


def _post(
    path: str, fields: dict[str, str], token: str, host: str | None = None
) -> dict:
    args = ["api", "--method", "POST", path]
    for key, value in fields.items():
        args += ["-f", f"{key}={value}"]
    result = gh(*args, token=token, host=host)
    if not result.ok:
        raise RemoteError(f"POST {path} failed", result.stderr or result.error or "")
    try:
        return json.loads(result.stdout or "{}")
    except json.JSONDecodeError as exc:
        raise RemoteError(f"POST {path} returned invalid JSON: {exc}") from exc


def create_tag_object(
    repository: str,
    tag: str,
    message: str,
    sha: str,
    token: str,
    host: str | None = None,
) -> str:
    """Create an annotated tag object pointing at a commit.

    Args:
        repository: "owner/name".
        tag: Tag name.
        message: Tag message.
        sha: Commit the tag annotates.
        token: GitHub token.
        host: GitHub Enterprise hostname; None targets github.com.

    Returns:
        Sha of the new tag object.
    """
    data = _post(
        f"repos/{repository}/git/tags",
        {"tag": tag, "message": message, "object": sha, "type": "commit"},
        token,
        host,
    )
    tag_sha = data.get("sha")
    if not tag_sha:
        raise RemoteError(f"Tag object for {tag} was created without a sha")
    return tag_sha


def create_ref(
    repository: str, ref: str, sha: str, token: str, host: str | None = None
) -> None:
    """Create a reference (e.g. "refs/tags/v1.0.0") pointing at sha."""
    _post(f"repos/{repository}/git/refs", {"ref": ref, "sha": sha}, token, host)
