from __future__ import annotations

"""
Configuration Validation Service.

Ensures the configuration dictionary conforms to the expected schema before
a crate is unified: type coercion, path normalization and default value
injection.
"""

import logging
import os
from typing import Any, Dict, List, Tuple

from crateunify.domain.config import get_default_config
from crateunify.domain.constants import CRATE_ROOT_FILES
from crateunify.infra.fs import normalize_path

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def validate_config(
        config: Any,
        *,
        strict: bool = False,
) -> Tuple[Dict[str, Any], List[str]]:
    """
    Validate and normalize the provided configuration dictionary.

    Args:
        config: Raw configuration data (usually a dictionary).
        strict: If True, raises exceptions on invalid values instead of
                falling back to defaults.

    Returns:
        Tuple[Dict[str, Any], List[str]]: The normalized configuration and
                                          a list of warnings.
    """
    warnings: List[str] = []
    defaults = get_default_config()

    if not isinstance(config, dict):
        msg = f"Invalid config type: expected dict, received {type(config).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using defaults.")
        logger.warning(msg)
        return defaults, warnings

    merged: Dict[str, Any] = dict(defaults)
    merged.update({k: v for k, v in config.items() if k in defaults})

    # crate_path
    crate_path = merged.get("crate_path")
    if not isinstance(crate_path, str):
        _reject("crate_path", "str", crate_path, warnings, strict)
        crate_path = defaults["crate_path"]
    merged["crate_path"] = normalize_path(crate_path, os.getcwd())

    # crate_kind
    kind = merged.get("crate_kind")
    if isinstance(kind, str) and kind.strip().lower() in CRATE_ROOT_FILES:
        merged["crate_kind"] = kind.strip().lower()
    else:
        msg = f"Invalid field 'crate_kind': expected one of {sorted(CRATE_ROOT_FILES)}, received {kind!r}."
        if strict:
            raise ValueError(msg)
        warnings.append(f"{msg} Using fallback.")
        merged["crate_kind"] = defaults["crate_kind"]

    # max_depth
    merged["max_depth"] = _as_non_negative_int(
        merged.get("max_depth"), defaults["max_depth"], "max_depth", warnings, strict
    )

    return merged, warnings


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: TYPE COERCION
# -----------------------------------------------------------------------------

def _as_non_negative_int(value: Any, fallback: int, field: str, warnings: List[str], strict: bool) -> int:
    """Coerce ints and numeric strings; bools are rejected."""
    if isinstance(value, int) and not isinstance(value, bool):
        if value >= 0:
            return value
    elif isinstance(value, str) and not strict:
        s = value.strip()
        if s.isdigit():
            warnings.append(f"Field '{field}' converted from '{value}' to {int(s)}.")
            return int(s)

    _reject(field, "non-negative int", value, warnings, strict)
    return fallback


def _reject(field: str, expected: str, value: Any, warnings: List[str], strict: bool) -> None:
    msg = f"Invalid field '{field}': expected {expected}, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
