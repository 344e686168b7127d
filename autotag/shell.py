"""Shell and git utilities.

Provides simple wrappers around subprocess calls for running git and gh,
plus output formatting helpers.
"""

from __future__ import annotations

import os
import subprocess
import sys
from collections.abc import Mapping

from .models import CommandResult


def exec_command(*args: str, env: Mapping[str, str] | None = None) -> CommandResult:
    """Run a command and capture its output.

    Never raises: a non-zero exit is reported through CommandResult.code,
    and a command that cannot be started at all (e.g. git missing from
    PATH) comes back with code 1 and the OS error in CommandResult.error.

    Args:
        *args: Command and arguments (e.g., "git", "tag").
        env: Extra environment variables layered over os.environ.
    """
    full_env = {**os.environ, **env} if env else None
    try:
        result = subprocess.run(
            args, capture_output=True, text=True, check=False, env=full_env
        )
    except OSError as exc:
        return CommandResult(code=1, error=str(exc))
    return CommandResult(
        code=result.returncode, stdout=result.stdout or "", stderr=result.stderr or ""
    )


def git(*args: str) -> CommandResult:
    """Run a git command and return the captured result.

    Args:
        *args: Arguments to pass to git (e.g., "fetch", "--tags").
    """
    return exec_command("git", *args)


def gh(
    *args: str, token: str | None = None, host: str | None = None
) -> CommandResult:
    """Run a GitHub CLI command and return the captured result.

    Args:
        *args: Arguments to pass to gh (e.g., "api", "repos/o/r").
        token: Token exported as GH_TOKEN for this call only.
        host: GitHub Enterprise hostname, exported as GH_HOST.
    """
    env: dict[str, str] = {}
    if token:
        env["GH_TOKEN"] = token
    if host:
        env["GH_HOST"] = host
    return exec_command("gh", *args, env=env or None)


def step(msg: str) -> None:
    """Print a visually distinct step header.

    Used to separate the phases of a tagging run in the job log.
    """
    print(f"\n{'─' * 60}\n{msg}\n{'─' * 60}")


def fatal(msg: str) -> None:
    """Print an error message and exit with code 1.

    Uses the ::error:: workflow command so the runner annotates the job.
    """
    print(f"::error::{msg}")
    sys.exit(1)
