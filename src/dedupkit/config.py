"""
Copyright (c) 2026 initumX (initum.x@gmail.com)
Licensed under the MIT License

config.py
Optional TOML file with default values for CLI options.

Lookup order: explicit path, $DEDUPKIT_CONFIG, ~/.dedupkit.toml, ./.dedupkit.toml.
Only the [dedupe] table is read. Command-line flags always win over it.

Example:
    [dedupe]
    by = "hash"
    recursive = true
    trash = true
    workers = 4
"""
import os
import logging
from pathlib import Path
from typing import Any, Dict, Optional

try:
    import tomllib  # Python 3.11+
except ImportError:
    import tomli as tomllib  # Python < 3.11: pip install tomli

from dedupkit.core.errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "DEDUPKIT_CONFIG"
CONFIG_FILENAME = ".dedupkit.toml"
CONFIG_SECTION = "dedupe"

# option name -> (allowed type, allowed values or None)
CONFIG_SCHEMA = {
    "by": (str, ("hash", "name")),
    "action": (str, ("list", "delete")),
    "output": (str, ("plain", "json")),
    "dry_run": (bool, None),
    "recursive": (bool, None),
    "trash": (bool, None),
    "prescreen": (bool, None),
    "workers": (int, None),
}


def find_config_file(explicit: Optional[str] = None) -> Optional[Path]:
    """
    Returns the config file to use, or None.
    An explicit path (argument or env var) must exist; default locations are optional.
    """
    explicit = explicit or os.environ.get(CONFIG_ENV_VAR)
    if explicit:
        path = Path(explicit).expanduser()
        if not path.is_file():
            raise ConfigError(f"Config file not found: {explicit}")
        return path

    for candidate in (Path.home() / CONFIG_FILENAME, Path.cwd() / CONFIG_FILENAME):
        if candidate.is_file():
            return candidate
    return None


def load_config(explicit: Optional[str] = None) -> Dict[str, Any]:
    """Reads and validates the [dedupe] table. Returns {} when no file is found."""
    path = find_config_file(explicit)
    if path is None:
        return {}

    logger.debug(f"Using config file: {path}")
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e

    section = data.get(CONFIG_SECTION, {})
    if not isinstance(section, dict):
        raise ConfigError(f"[{CONFIG_SECTION}] in {path} must be a table")
    return validate_config(section, source=str(path))


def validate_config(section: Dict[str, Any], source: str = "config") -> Dict[str, Any]:
    for key, value in section.items():
        if key not in CONFIG_SCHEMA:
            raise ConfigError(f"Unknown option '{key}' in {source}")

        expected_type, choices = CONFIG_SCHEMA[key]
        # bool is a subclass of int, don't let `workers = true` through
        if not isinstance(value, expected_type) or (expected_type is int and isinstance(value, bool)):
            raise ConfigError(
                f"Option '{key}' in {source} must be {expected_type.__name__}, got {type(value).__name__}"
            )
        if choices is not None and value not in choices:
            raise ConfigError(
                f"Option '{key}' in {source} must be one of: {', '.join(choices)}"
            )
    return dict(section)
