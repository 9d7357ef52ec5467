from __future__ import annotations

"""
Configuration Domain Management.

Handles the default conversion settings and their persistent storage as
JSON in the user data directory. Unknown or corrupted files fall back to
defaults; newly introduced keys are merged in on load.
"""

import json
import logging
import os
from typing import Any, Dict

from orgoutline.infra.fs import get_user_data_dir

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# Constants & Defaults
# -----------------------------------------------------------------------------
CONFIG_FILE_NAME = "config.json"
CURRENT_CONFIG_VERSION = "1.0.0"

INPUT_FORMATS = ("auto", "records", "outline")
OUTLINE_EXTENSIONS = (".md", ".markdown", ".outline")


def get_config_file() -> str:
    """Absolute path of the persisted configuration file."""
    return os.path.join(get_user_data_dir(), CONFIG_FILE_NAME)


# -----------------------------------------------------------------------------
# Configuration Models (Dict-based)
# -----------------------------------------------------------------------------
def get_default_config() -> Dict[str, Any]:
    """
    Generate the default conversion configuration.

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    return {
        # IO Paths
        "input_path": "",
        "output_path": "",
        "input_format": "auto",

        # Record Columns
        "path_column": "DistinguishedName",
        "type_column": "ObjectClass",
        "category_column": "ObjectCategory",
        "enabled_column": "Enabled",
        "csv_delimiter": ",",

        # Conversion
        "include_disabled": False,
        "strip_computer_suffix": True,

        # Preview
        "print_tree": False,
    }


# -----------------------------------------------------------------------------
# Persistence Logic
# -----------------------------------------------------------------------------
def load_config() -> Dict[str, Any]:
    """
    Load the persisted configuration merged over the defaults.

    Returns:
        Dict[str, Any]: Effective configuration; defaults on any failure.
    """
    config = get_default_config()
    path = get_config_file()

    if not os.path.exists(path):
        logger.debug("Config file not found. Returning defaults.")
        return config

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.error(f"Failed to load config: {e}. Using defaults.")
        return config

    if not isinstance(data, dict):
        logger.warning("Corrupted config file. Resetting to defaults.")
        return config

    settings = data.get("settings", {})
    if isinstance(settings, dict):
        config.update({k: v for k, v in settings.items() if k in config})
    return config


def save_config(config: Dict[str, Any]) -> bool:
    """
    Persist the configuration with a version stamp.

    Args:
        config: The configuration dictionary to save.

    Returns:
        bool: True when the file was written.
    """
    path = get_config_file()
    state = {
        "version": CURRENT_CONFIG_VERSION,
        "settings": {k: v for k, v in config.items() if k in get_default_config()},
    }
    try:
        os.makedirs(os.path.dirname(path), exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(state, f, ensure_ascii=False, indent=4)
    except OSError as e:
        logger.error(f"Failed to save configuration: {e}")
        return False

    logger.debug(f"Configuration saved to {path}")
    return True
