"""Configuration loading and auto-discovery."""
from pathlib import Path
from typing import Any, Dict, Optional
import os

try:  # Python 3.11+
    import tomllib
except ImportError:  # pragma: no cover - fallback for older environments
    import tomli as tomllib

from scout.exceptions import ConfigError


def config_paths() -> list:
    """
    Candidate config files, highest priority first.

    1. SCOUT_CONFIG environment variable
    2. ./scout.toml (project config)
    3. ~/.config/scout/config.toml (user config)
    """
    paths = []

    env_config = os.environ.get("SCOUT_CONFIG")
    if env_config:
        paths.append(Path(env_config))

    paths.append(Path("scout.toml"))
    paths.append(Path.home() / ".config" / "scout" / "config.toml")
    return paths


def load_config() -> Optional[Dict[str, Any]]:
    """
    Load configuration from the first config file that exists.

    Returns:
        Configuration dict or None if no config found

    Raises:
        ConfigError: the file exists but is not valid TOML
    """
    for path in config_paths():
        if path.exists():
            try:
                with open(path, "rb") as f:
                    return tomllib.load(f)
            except tomllib.TOMLDecodeError as e:
                raise ConfigError(f"Invalid config file {path}: {e}") from e

    return None


def get_config_value(key: str, default: Any = None) -> Any:
    """
    Get a configuration value by dot-notation key.

    Example:
        get_config_value("limits.max_file_size", 1_000_000)
        get_config_value("docs.exclude", [])
    """
    config = load_config()
    if config is None:
        return default

    parts = key.split(".")
    value = config

    for part in parts:
        if isinstance(value, dict) and part in value:
            value = value[part]
        else:
            return default

    return value


DEFAULTS = {
    "paths": {
        "allowed": [],  # Empty means the current working directory
    },
    "limits": {
        "max_file_size": 1_000_000,
        "docs_response_chars": 90_000,  # check_docs response budget
    },
    "docs": {
        "exclude": [],  # Extra gitignore-style patterns, added to the defaults
    },
}


def get_setting(key: str) -> Any:
    """Config value with the DEFAULTS entry as fallback."""
    default = DEFAULTS
    for part in key.split("."):
        default = default[part]
    return get_config_value(key, default)
