from __future__ import annotations

"""
Configuration Domain Management.

Provides the dict-based runtime configuration that drives crate
unification, with optional JSON file persistence merged over the defaults.
"""

import json
import logging
import os
from typing import Any, Dict, Optional

from crateunify.domain.constants import CRATE_KIND_BIN, DEFAULT_MAX_DEPTH

logger = logging.getLogger(__name__)

# Keys accepted from JSON files and CLI overrides
CONFIG_KEYS = ("crate_path", "crate_kind", "max_depth")


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
        "crate_path": os.getcwd(),
        "crate_kind": CRATE_KIND_BIN,
        "max_depth": DEFAULT_MAX_DEPTH,
    }


# -----------------------------------------------------------------------------
# Persistence Logic
# -----------------------------------------------------------------------------
def load_config(config_file: Optional[str] = None) -> Dict[str, Any]:
    """
    Load configuration from a JSON file merged over the defaults.

    Unknown keys are ignored. A missing, unreadable or malformed file is
    reported as a warning and the defaults are returned.

    Args:
        config_file: Path to a JSON document, or None for plain defaults.

    Returns:
        Dict[str, Any]: Merged configuration.
    """
    config = get_default_config()
    if not config_file:
        return config

    try:
        with open(config_file, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.warning(f"Could not load config file '{config_file}': {e}. Using defaults.")
        return config

    if not isinstance(data, dict):
        logger.warning(f"Config file '{config_file}' is not a JSON object. Using defaults.")
        return config

    for key in CONFIG_KEYS:
        if key in data:
            config[key] = data[key]

    logger.debug(f"Configuration loaded from {config_file}")
    return config
