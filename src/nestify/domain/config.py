from __future__ import annotations

"""
Configuration Domain Management.

Handles the default runtime configuration and its JSON persistence in the
user data directory.
"""

import json
import logging
import os
from typing import Any, Dict

from nestify.domain.constants import (
    CURRENT_CONFIG_VERSION,
    DEFAULT_EXCLUDE_PATTERNS,
    DEFAULT_EXTENSIONS,
)
from nestify.infra.fs import get_user_data_dir

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = "config.json"


# -----------------------------------------------------------------------------
# Configuration Models (Dict-based)
# -----------------------------------------------------------------------------
def get_default_config() -> Dict[str, Any]:
    """
    Generate the default runtime configuration.
    This dictionary drives the behavior of the pipeline.

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    return {
        # Discovery
        "root_path": os.getcwd(),
        "extensions": list(DEFAULT_EXTENSIONS),
        "exclude_patterns": list(DEFAULT_EXCLUDE_PATTERNS),
        "respect_gitignore": True,

        # Graph construction
        "on_parse_error": "abort",
        "reject_duplicates": False,

        # Ownership resolution
        "max_visits": 0,

        # Output
        "show_tree": False,
        "moved_only": False,
    }


def get_config_path() -> str:
    return os.path.join(get_user_data_dir(), CONFIG_FILE_NAME)


# -----------------------------------------------------------------------------
# Persistence Logic
# -----------------------------------------------------------------------------
def load_config() -> Dict[str, Any]:
    """
    Retrieve the last saved session merged over the defaults.

    A missing or corrupted file yields the defaults.

    Returns:
        Dict[str, Any]: The active configuration.
    """
    config = get_default_config()
    config_file = get_config_path()

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

    session = data.get("last_session", {})
    if isinstance(session, dict):
        config.update(session)
    return config


def save_config(config: Dict[str, Any]) -> None:
    """
    Persist the provided config as the last session.

    Args:
        config: The configuration dictionary to save.
    """
    config_file = get_config_path()
    state = {"version": CURRENT_CONFIG_VERSION, "last_session": config}
    try:
        os.makedirs(os.path.dirname(config_file), exist_ok=True)
        with open(config_file, "w", encoding="utf-8") as f:
            json.dump(state, f, ensure_ascii=False, indent=4)
        logger.debug(f"Configuration saved to {config_file}")
    except OSError as e:
        logger.error(f"Failed to save configuration: {e}")
