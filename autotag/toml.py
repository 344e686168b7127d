"""TOML reading utilities.

Projects can keep their tagging defaults next to the rest of their tool
configuration in pyproject.toml:

    [tool.autotag]
    tag_prefix = "v"
    release_branches = "main,release/.*"

Action inputs always take precedence over these values.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path

import tomlkit
from tomlkit.exceptions import ParseError

from .errors import ConfigError


def load_pyproject(path: Path) -> tomlkit.TOMLDocument:
    """Load and parse a pyproject.toml file.

    Raises:
        ConfigError: If the file is not valid TOML.
    """
    try:
        return tomlkit.parse(path.read_text())
    except ParseError as exc:
        raise ConfigError(f"Invalid {path.name}: {exc}") from exc


def get_tool_defaults(doc: tomlkit.TOMLDocument) -> dict[str, str]:
    """Extract [tool.autotag] as a flat map of input name → string value.

    Booleans are rendered the way action inputs spell them ("true"/"false")
    so both sources go through the same parsing in config.load_config().

    Raises:
        ConfigError: If tool or tool.autotag is not a table.
    """
    tool = doc.get("tool", {})
    table = tool.get("autotag", {}) if isinstance(tool, Mapping) else None
    if not isinstance(table, Mapping):
        raise ConfigError("[tool.autotag] in pyproject.toml must be a table")
    defaults: dict[str, str] = {}
    for key, value in table.items():
        if isinstance(value, bool):
            defaults[key] = "true" if value else "false"
        elif isinstance(value, list):
            # release_branches may be written as an array
            defaults[key] = ",".join(str(v) for v in value)
        else:
            defaults[key] = str(value)
    return defaults


def load_tool_defaults(root: Path | None = None) -> dict[str, str]:
    """Read [tool.autotag] from root/pyproject.toml, if the file exists."""
    pyproject = (root or Path.cwd()) / "pyproject.toml"
    if not pyproject.exists():
        return {}
    return get_tool_defaults(load_pyproject(pyproject))
