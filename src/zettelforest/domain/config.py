from __future__ import annotations

"""
Configuration Domain Management.

Handles the default settings of the compaction workflow and their
persistent storage as JSON in the user data directory. Missing or corrupt
files fall back to defaults.
"""

import json
import logging
import os
from typing import Any, Dict, Optional

from zettelforest.domain.constants import (
    CURRENT_CONFIG_VERSION,
    DEFAULT_NOTE_EXTENSIONS,
    DEFAULT_TEMP_SUFFIX,
    DUPLICATE_POLICY_LAST,
)
from zettelforest.infra.fs import get_user_data_dir

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = "config.json"

# -----------------------------------------------------------------------------
# Configuration Models (Dict-based)
# -----------------------------------------------------------------------------

def get_default_config() -> Dict[str, Any]:
    """
    Generate the default runtime configuration.

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    return {
        # Record source
        "notes_folder": os.getcwd(),
        "extensions": list(DEFAULT_NOTE_EXTENSIONS),
        "recursive": True,

        # Forest building
        "duplicate_policy": DUPLICATE_POLICY_LAST,

        # Rename workflow
        "temp_suffix": DEFAULT_TEMP_SUFFIX,
        "dry_run": False,

        # Diagnostics
        "log_level": "INFO",
        "log_file": "",
    }


def get_config_path() -> str:
    return os.path.join(get_user_data_dir(), CONFIG_FILE_NAME)

# -----------------------------------------------------------------------------
# Persistence Logic
# -----------------------------------------------------------------------------

def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load configuration from disk, merged over the defaults.

    Args:
        path: Optional config file path; defaults to the user data dir.

    Returns:
        Dict[str, Any]: The loaded configuration or defaults on failure.
    """
    config_file = path or get_config_path()
    config = get_default_config()

    if not os.path.exists(config_file):
        logger.debug("Config file not found. Returning defaults.")
        return config

    try:
        with open(config_file, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.error(f"Failed to load config: {e}. Using defaults.")
        return config

    if not isinstance(data, dict):
        logger.warning("Corrupted config file. Resetting to defaults.")
        return config

    data.pop("version", None)
    config.update(data)
    return config


def save_config(config: Dict[str, Any], path: Optional[str] = None) -> bool:
    """
    Persist configuration to disk.

    Args:
        config: The configuration dictionary to save.
        path: Optional config file path; defaults to the user data dir.

    Returns:
        bool: True if the file was written.
    """
    config_file = path or get_config_path()
    payload = dict(config)
    payload["version"] = CURRENT_CONFIG_VERSION

    try:
        os.makedirs(os.path.dirname(os.path.abspath(config_file)), exist_ok=True)
        with open(config_file, "w", encoding="utf-8") as f:
            json.dump(payload, f, ensure_ascii=False, indent=4)
    except OSError as e:
        logger.error(f"Failed to save configuration: {e}")
        return False

    logger.debug(f"Configuration saved to {config_file}")
    return True
