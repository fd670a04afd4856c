from __future__ import annotations

"""
Configuration Domain Management.

Provides the default runtime configuration and loads persisted user
preferences from a JSON file in the application data directory.
"""

import json
import logging
import os
from typing import Any, Dict, Optional

from codexreport.infra.fs import get_config_path

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# Constants & Defaults
# -----------------------------------------------------------------------------
DEFAULT_TARGET_MODEL = "gpt-4o"
DEFAULT_LOG_LEVEL = "WARNING"

CONFIG_KEYS = (
    "output_path",
    "expand_dirs",
    "respect_repoignore",
    "count_tokens",
    "target_model",
    "log_level",
    "log_file",
)


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
        # Output
        "output_path": "",

        # Input expansion
        "expand_dirs": False,
        "respect_repoignore": True,

        # Metrics
        "count_tokens": False,
        "target_model": DEFAULT_TARGET_MODEL,

        # Diagnostics
        "log_level": DEFAULT_LOG_LEVEL,
        "log_file": "",
    }


# -----------------------------------------------------------------------------
# Persistence Logic
# -----------------------------------------------------------------------------
def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load the persisted configuration, merged over the defaults.

    Unknown keys are dropped. Missing or unreadable files yield the defaults.

    Args:
        path: Optional explicit config file. Defaults to the user data dir.

    Returns:
        Dict[str, Any]: The effective configuration.
    """
    config = get_default_config()
    config_path = path or get_config_path()

    if not os.path.exists(config_path):
        logger.debug(f"Config file not found at {config_path}. Using defaults.")
        return config

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.error(f"Failed to load config: {e}. Using defaults.")
        return config

    if not isinstance(data, dict):
        logger.warning("Corrupted config file. Resetting to defaults.")
        return config

    for key in CONFIG_KEYS:
        if key in data:
            config[key] = data[key]

    ignored = sorted(k for k in data if k not in CONFIG_KEYS)
    if ignored:
        logger.debug(f"Ignoring unknown config keys: {', '.join(ignored)}")

    return config
