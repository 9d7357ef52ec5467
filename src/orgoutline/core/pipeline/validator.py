from __future__ import annotations

"""
Configuration Validation Service.

Gatekeeper for the conversion pipeline: coerces untrusted configuration
values (CLI, persisted JSON) into the expected types, injects defaults for
missing keys and reports every correction as a warning.
"""

import logging
from typing import Any, Dict, List, Tuple

from orgoutline.domain.config import INPUT_FORMATS, get_default_config

logger = logging.getLogger(__name__)

STRING_FIELDS = [
    "input_path", "output_path", "input_format",
    "path_column", "type_column", "category_column", "enabled_column",
]

# Column names may legitimately be blank to disable optional columns
OPTIONAL_STRING_FIELDS = {"input_path", "output_path", "category_column", "enabled_column"}

BOOL_FIELDS = ["include_disabled", "strip_computer_suffix", "print_tree"]


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def validate_config(
        config: Any,
        *,
        strict: bool = False,
) -> Tuple[Dict[str, Any], List[str]]:
    """
    Validate and normalize a configuration dictionary.

    Args:
        config: Raw configuration data (usually a dictionary).
        strict: If True, raise on invalid values instead of coercing.

    Returns:
        Tuple[Dict[str, Any], List[str]]: Normalized configuration and
        the list of corrections applied.

    Raises:
        TypeError: In strict mode, on a value of the wrong type.
        ValueError: In strict mode, on an out-of-range value.
    """
    warnings: List[str] = []
    defaults = get_default_config()

    # 1. Base Type Validation
    if not isinstance(config, dict):
        msg = f"Invalid config type: expected dict, received {type(config).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using defaults.")
        logger.warning(msg)
        return defaults, warnings

    merged: Dict[str, Any] = dict(defaults)
    merged.update({k: v for k, v in config.items() if k in defaults})

    # 2. Field Processing & Normalization
    for field in STRING_FIELDS:
        merged[field] = _as_str(
            merged.get(field), defaults[field], field, warnings, strict,
            allow_empty=field in OPTIONAL_STRING_FIELDS,
        )

    for field in BOOL_FIELDS:
        merged[field] = _as_bool(merged.get(field), defaults[field], field, warnings, strict)

    # 3. Domain-Specific Normalization
    merged["input_format"] = _normalize_format(merged["input_format"], warnings, strict)
    merged["csv_delimiter"] = _normalize_delimiter(merged.get("csv_delimiter"), warnings, strict)

    return merged, warnings


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: TYPE COERCION
# -----------------------------------------------------------------------------

def _as_str(
        value: Any,
        fallback: str,
        field: str,
        warnings: List[str],
        strict: bool,
        allow_empty: bool = False,
) -> str:
    """Validate and sanitize string inputs."""
    if value is None:
        return fallback
    if isinstance(value, str):
        v = value.strip()
        if v or allow_empty:
            return v
        return fallback

    msg = f"Invalid field '{field}': expected str, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_bool(value: Any, fallback: bool, field: str, warnings: List[str], strict: bool) -> bool:
    """Coerce various input types into native booleans."""
    if isinstance(value, bool):
        return value
    if value is None:
        return fallback

    if not strict:
        if isinstance(value, (int, float)) and value in (0, 1):
            warnings.append(f"Field '{field}' converted from number {value} to bool.")
            return bool(value)
        if isinstance(value, str):
            s = value.strip().lower()
            if s in ("true", "1", "yes", "y", "on"):
                warnings.append(f"Field '{field}' converted from '{value}' to True.")
                return True
            if s in ("false", "0", "no", "n", "off"):
                warnings.append(f"Field '{field}' converted from '{value}' to False.")
                return False

    msg = f"Invalid field '{field}': expected bool, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: DOMAIN NORMALIZATION
# -----------------------------------------------------------------------------

def _normalize_format(value: str, warnings: List[str], strict: bool) -> str:
    fmt = value.lower()
    if fmt in INPUT_FORMATS:
        return fmt
    msg = f"Invalid input_format '{value}': expected one of {', '.join(INPUT_FORMATS)}."
    if strict:
        raise ValueError(msg)
    warnings.append(f"{msg} Using 'auto'.")
    return "auto"


def _normalize_delimiter(value: Any, warnings: List[str], strict: bool) -> str:
    """CSV delimiters must be exactly one character; '\\t' is accepted as tab."""
    if value == "\\t":
        return "\t"
    if isinstance(value, str) and len(value) == 1:
        return value
    msg = f"Invalid csv_delimiter {value!r}: expected a single character."
    if strict:
        raise ValueError(msg)
    warnings.append(f"{msg} Using ','.")
    return ","
