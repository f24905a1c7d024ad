"""Persistent renamepics settings.

Settings live in ``$XDG_CONFIG_HOME/renamepics/config.toml`` (default
``~/.config/renamepics/config.toml``) and can be overridden per key with
``RENAMEPICS_<KEY>`` environment variables. Uses tomli/tomli-w for TOML
parsing and writing.
"""

import contextlib
import os
from pathlib import Path
from typing import Any, TypeVar, cast

import tomli
import tomli_w

_xdg_config_home = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))
CONFIG_DIR = _xdg_config_home / "renamepics"
CONFIG_FILE = CONFIG_DIR / "config.toml"

ENV_PREFIX = "RENAMEPICS_"

# Keys accepted by ``renamepics config`` and the type they are stored as.
SETTINGS: dict[str, type] = {
    "rename.max_digits": int,
    "rename.sort": str,
    "rename.report_file": str,
}

T = TypeVar("T")


def _read_config_file() -> dict[str, Any]:
    """Read the TOML config file if it exists, returning a (nested) dict."""
    if not CONFIG_FILE.exists():
        return {}
    with CONFIG_FILE.open("rb") as f:
        return tomli.load(f)


def _lookup_nested(data: dict[str, Any], dotted_key: str) -> Any | None:
    """Retrieve a nested value from *data* given a dotted key path.

    Example: ``"rename.max_digits"`` looks up ``data["rename"]["max_digits"]``.
    """
    current: Any = data
    for part in dotted_key.split("."):
        if not isinstance(current, dict):
            return None
        current = current.get(part)
        if current is None:
            return None
    return current


def _make_env_var_name(dotted_key: str) -> str:
    """Convert ``"rename.max_digits"`` to ``"RENAMEPICS_RENAME_MAX_DIGITS"``."""
    return ENV_PREFIX + dotted_key.replace(".", "_").upper()


def _coerce(raw: Any, default: T) -> T:
    """Coerce *raw* to the type of *default*, falling back to *default*."""
    if isinstance(default, int):
        if isinstance(raw, int) and not isinstance(raw, bool):
            return cast(T, raw)
        if isinstance(raw, str):
            with contextlib.suppress(ValueError):
                return cast(T, int(raw))
        return default
    if isinstance(default, str):
        return cast(T, str(raw))
    return cast(T, raw)


def resolve_setting(key: str, *, default: T, cli_value: T | None = None) -> T:
    """Resolve a configuration *key* using precedence CLI > env > config > default.

    Args:
        key: Dotted key path, e.g. ``"rename.max_digits"``.
        default: Value to fall back to when no overrides found.
        cli_value: Value passed from a CLI option (``None`` when not given).

    Returns:
        The resolved value, coerced to the type of *default* when possible.
    """
    if cli_value is not None:
        return cli_value

    env_var = _make_env_var_name(key)
    if env_var in os.environ:
        return _coerce(os.environ[env_var], default)

    file_val = _lookup_nested(_read_config_file(), key)
    if file_val is not None:
        return _coerce(file_val, default)

    return default


def set_setting(key: str, value: Any) -> Path:
    """Persist *value* under the dotted *key* in config.toml.

    Returns:
        Path of the written config file.
    """
    CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    data = _read_config_file()
    *parents, leaf = key.split(".")
    section = data
    for part in parents:
        child = section.get(part)
        if not isinstance(child, dict):
            child = {}
            section[part] = child
        section = child
    section[leaf] = value
    with CONFIG_FILE.open("wb") as f:
        tomli_w.dump(data, f)
    return CONFIG_FILE
