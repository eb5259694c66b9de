"""Configuration for TZ Journal.

Settings live in ``~/.config/tzjournal/config.toml``; set ``TZJOURNAL_HOME``
to use another directory.
"""

import copy
import logging
import os
from pathlib import Path
from typing import Optional

import toml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = {
    "storage": {
        "db_path": "",  # empty -> journal.db in the config directory
    },
    "display": {
        "currency": "$",
    },
    "attachments": {
        "max_image_bytes": 2_000_000,
    },
}


def get_config_dir() -> Path:
    """Directory holding config.toml and, by default, the journal database."""
    override = os.environ.get("TZJOURNAL_HOME")
    if override:
        return Path(override).expanduser()
    return Path.home() / ".config" / "tzjournal"


def get_config_path() -> Path:
    return get_config_dir() / "config.toml"


def load_config(config_path: Optional[Path] = None) -> dict:
    """Load configuration merged over the defaults.

    Args:
        config_path: Explicit config file. Defaults to get_config_path().

    Returns:
        Configuration dictionary with every default section present.
    """
    config = copy.deepcopy(DEFAULT_CONFIG)
    path = config_path or get_config_path()

    if not path.exists():
        return config

    try:
        loaded = toml.load(path)
    except (OSError, toml.TomlDecodeError) as e:
        logger.warning("Ignoring unreadable config %s: %s", path, e)
        return config

    for section, values in loaded.items():
        if isinstance(values, dict) and isinstance(config.get(section), dict):
            config[section].update(values)
        else:
            config[section] = values
    return config


def get_db_path(config: dict) -> Path:
    """Resolve the journal database path from configuration."""
    configured = config.get("storage", {}).get("db_path")
    if configured:
        return Path(configured).expanduser()
    return get_config_dir() / "journal.db"


def create_template_config(config_path: Optional[Path] = None) -> Path:
    """Write a template config file with the default settings."""
    path = config_path or get_config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        toml.dump(DEFAULT_CONFIG, f)
    return path
