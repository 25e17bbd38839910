"""User-level configuration for nodeforge defaults.

Reads from ~/.config/nodeforge/config.yaml and provides the defaults offered
by the interactive prompts, plus the package manager used for generation.
"""

import logging
from enum import Enum
from pathlib import Path
from typing import Any

import yaml

from nodeforge.models import ApiType, Language, PackageManager

logger = logging.getLogger(__name__)

CONFIG_DIR = Path.home() / ".config" / "nodeforge"
CONFIG_FILE = CONFIG_DIR / "config.yaml"

# Keys that map to enum types for validation
_ENUM_FIELDS: dict[str, type[Enum]] = {
    "language": Language,
    "api_type": ApiType,
    "package_manager": PackageManager,
}

_BOOL_FIELDS = ("add_gitignore", "enable_cors")

# Keys that seed prompt defaults
ANSWER_KEYS = ("project_name", "language", "add_gitignore", "enable_cors", "api_type")


def get_config_path() -> Path:
    """Return the path to the user config file."""
    return CONFIG_FILE


def load_user_config() -> dict[str, Any]:
    """Load user configuration from disk.

    Returns an empty dict if the file doesn't exist or is invalid.
    """
    config_path = get_config_path()
    if not config_path.exists():
        return {}

    try:
        with open(config_path) as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        logger.warning(f"Failed to load user config from {config_path}: {e}")
        return {}

    if not isinstance(data, dict):
        logger.warning(f"User config is not a mapping: {config_path}")
        return {}

    validated: dict[str, Any] = {}
    for key, value in data.items():
        if key in _ENUM_FIELDS and value is not None:
            try:
                _ENUM_FIELDS[key](value)
            except ValueError:
                valid = [e.value for e in _ENUM_FIELDS[key]]
                logger.warning(
                    f"Invalid value '{value}' for '{key}' in user config. Valid: {valid}"
                )
                continue
        if key in _BOOL_FIELDS and not isinstance(value, bool):
            logger.warning(f"Invalid value '{value}' for '{key}' in user config. Expected bool")
            continue
        if key == "project_name" and not (isinstance(value, str) and value.strip()):
            logger.warning(f"Invalid value '{value}' for 'project_name' in user config")
            continue
        validated[key] = value

    return validated


def get_answer_defaults(user_cfg: dict[str, Any] | None = None) -> dict[str, Any]:
    """Return the prompt defaults configured by the user.

    Reads the config file unless an already loaded config is given.
    """
    if user_cfg is None:
        user_cfg = load_user_config()
    return {key: user_cfg[key] for key in ANSWER_KEYS if user_cfg.get(key) is not None}


def get_package_manager(user_cfg: dict[str, Any] | None = None) -> PackageManager:
    """Return the configured package manager, npm if unset."""
    if user_cfg is None:
        user_cfg = load_user_config()
    value = user_cfg.get("package_manager")
    return PackageManager(value) if value else PackageManager.NPM


def save_user_config(config: dict[str, Any]) -> Path:
    """Save configuration to the user config file.

    Returns the path written to.
    """
    config_path = get_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)
    with open(config_path, "w") as f:
        yaml.safe_dump(config, f, default_flow_style=False, sort_keys=False)
    return config_path


def coerce_config_value(value: str) -> str | int | bool:
    """Coerce a value given on the command line to its YAML type."""
    lowered = value.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    try:
        return int(value)
    except ValueError:
        return value


def get_default_config_template() -> dict[str, Any]:
    """Return an example config for scaffolding."""
    return {
        "project_name": "server",
        "language": Language.JAVASCRIPT.value,
        "add_gitignore": True,
        "enable_cors": True,
        "api_type": ApiType.REST.value,
        "package_manager": PackageManager.NPM.value,
    }
