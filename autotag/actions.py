"""GitHub Actions runtime adapter.

All reads of action inputs and environment variables, and all writes of
step outputs, go through ActionContext. The pipeline never touches
os.environ directly, which keeps it testable with a plain dict.
"""

from __future__ import annotations

import os
import uuid
from collections.abc import Mapping
from types import TracebackType

from .errors import ConfigError
from .shell import fatal, step


class ActionContext:
    """Inputs, environment and outputs for a single tagging run.

    Use as a context manager so that recorded outputs are written to
    $GITHUB_OUTPUT on every exit path, including set_failed().
    """

    def __init__(
        self,
        env: Mapping[str, str],
        defaults: Mapping[str, str] | None = None,
    ) -> None:
        self.env = env
        self.defaults = defaults or {}
        self.outputs: dict[str, str] = {}
        self._flushed: set[str] = set()

    @classmethod
    def from_env(cls) -> ActionContext:
        """Build a context from os.environ.

        Project defaults are left empty; run() loads them once failures can
        be reported through the context.
        """
        return cls(dict(os.environ))

    def __enter__(self) -> ActionContext:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.flush()

    def get_input(self, key: str) -> str:
        """Return the action input `key`.

        Inputs arrive as INPUT_<KEY> variables and are returned unchanged.
        A variable that is present but empty is an error; an absent one
        falls back to the project default, or "".

        Raises:
            ConfigError: If the input is set to an empty string.
        """
        name = f"INPUT_{key.replace(' ', '_').upper()}"
        if name in self.env:
            value = self.env[name]
            if value == "":
                raise ConfigError(f"No {key} in env.")
            return value
        return self.defaults.get(key, "")

    def get_env(self, name: str) -> str:
        """Return a plain environment variable, "" when unset."""
        return self.env.get(name, "")

    def set_output(self, key: str, value: str) -> None:
        self.outputs[key] = value
        self._flushed.discard(key)

    def set_failed(self, message: str) -> None:
        """Report a failure and terminate the run with exit status 1."""
        self.flush()
        fatal(message)

    def info(self, message: str) -> None:
        print(message)

    def debug(self, message: str) -> None:
        print(f"::debug::{message}")

    def step(self, message: str) -> None:
        step(message)

    def flush(self) -> None:
        """Write outputs recorded since the last flush.

        Values go to $GITHUB_OUTPUT in the heredoc form, which is safe for
        multi-line values such as the changelog. Outside a runner they are
        echoed as name=value lines instead.
        """
        pending = {k: v for k, v in self.outputs.items() if k not in self._flushed}
        if not pending:
            return

        output_path = self.env.get("GITHUB_OUTPUT")
        if output_path:
            with open(output_path, "a") as fh:
                for name, value in pending.items():
                    delimiter = f"ghadelimiter_{uuid.uuid4()}"
                    fh.write(f"{name}<<{delimiter}\n{value}\n{delimiter}\n")
        else:
            for name, value in pending.items():
                print(f"OUTPUT: {name}={value}")

        self._flushed.update(pending)
