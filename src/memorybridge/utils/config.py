"""Config utility for persistent memorybridge settings.

Stores the last used bridge (source directory and prefix mapping) in
~/.config/memorybridge/config.toml so scan/link/unlink can run without flags.
Uses tomli/tomli-w for TOML parsing and writing.
"""

from pathlib import Path
from typing import Optional, TypeVar, Any, cast
import os
import contextlib

import tomli
import tomli_w

# Determine config directory respecting XDG_CONFIG_HOME if set.
_xdg_config_home = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))
# Path like ~/.config/memorybridge or $XDG_CONFIG_HOME/memorybridge
CONFIG_DIR = _xdg_config_home / "memorybridge"
CONFIG_FILE = CONFIG_DIR / "config.toml"

ENV_PREFIX = "MEMORYBRIDGE_"


def default_projects_dir() -> Path:
    """Return the local Claude projects directory, ``~/.claude/projects``."""
    return Path.home() / ".claude" / "projects"


def save_bridge(source: str, map_spec: str, encoded_remote: bool = False) -> None:
    """Persist the bridge source and mapping in config.toml.

    Args:
        source (str): Remote projects directory.
        map_spec (str): ``REMOTE=LOCAL`` mapping text.
        encoded_remote (bool): Whether REMOTE is an encoded prefix.
    """
    CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    data = _read_config_file()
    if "bridge" not in data:
        data["bridge"] = {}
    data["bridge"]["source"] = source
    data["bridge"]["map"] = map_spec
    data["bridge"]["encoded_remote"] = encoded_remote
    with CONFIG_FILE.open("wb") as f:
        tomli_w.dump(data, f)


# ---------------------------------------------------------------------------
# Generic configuration resolution
# ---------------------------------------------------------------------------

T = TypeVar("T")


def _read_config_file() -> dict[str, Any]:
    """Read the TOML config file if it exists, returning a (nested) dict."""

    if not CONFIG_FILE.exists():
        return {}
    with CONFIG_FILE.open("rb") as f:
        return tomli.load(f)


def _lookup_nested(data: dict[str, Any], dotted_key: str) -> Any | None:
    """Retrieve a nested value from *data* given a dotted key path.

    Example: dotted_key="bridge.source" will attempt
    ``data["bridge"]["source"]`` returning None if any level is missing.
    """

    current: Any = data
    for part in dotted_key.split("."):
        if not isinstance(current, dict):
            return None
        current = current.get(part)
        if current is None:
            return None
    return current


def _make_env_var_name(dotted_key: str, prefix: str = ENV_PREFIX) -> str:
    """Convert a dotted key path to an uppercase ENV var name.

    Example: "paths.projects_dir" -> "MEMORYBRIDGE_PATHS_PROJECTS_DIR".
    """

    return prefix + dotted_key.replace(".", "_").upper()


def _coerce(value: Any, default: Any) -> Any:
    if isinstance(default, bool):
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            return value.lower() in {"1", "true", "yes", "on"}
        return default
    if isinstance(default, int):
        if isinstance(value, int):
            return value
        with contextlib.suppress(ValueError, TypeError):
            return int(value)
        return default
    return value


def resolve_setting(
    key: str,
    *,
    default: T,
    cli_value: T | None = None,
) -> T:
    """Resolve a configuration *key* using precedence CLI > env > config > default.

    Args:
        key: Dotted key path, e.g. ``"bridge.source"``.
        default: Value to fall back to when no overrides found.
        cli_value: Value passed from CLI option (may be ``None`` when not provided).

    Returns:
        The resolved value, coerced to the type of *default* for bool/int.
    """

    # 1. CLI value wins if provided (and not ``None`` to mimic Typer semantics).
    if cli_value is not None:
        return cli_value

    # 2. Environment variable
    env_var = _make_env_var_name(key)
    if env_var in os.environ:
        return cast(T, _coerce(os.environ[env_var], default))

    # 3. Config file lookup
    file_val = _lookup_nested(_read_config_file(), key)
    if file_val is not None:
        return cast(T, _coerce(file_val, default))

    # 4. Default
    return default


def resolve_projects_dir(cli_value: Optional[Path] = None) -> Path:
    """Resolve the local projects directory (``paths.projects_dir``)."""
    value = resolve_setting(
        "paths.projects_dir",
        default=str(default_projects_dir()),
        cli_value=str(cli_value) if cli_value is not None else None,
    )
    return Path(value).expanduser()
