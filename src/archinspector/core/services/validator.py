from __future__ import annotations

"""
Configuration Validation Service.

Normalizes the merged configuration dictionary (defaults, environment and
CLI overrides) into strictly typed values. In lenient mode invalid values
fall back to defaults and are reported as warnings; in strict mode they
raise.
"""

import logging
from typing import Any, Dict, List, Tuple, Type

from archinspector.domain.config import get_default_config

logger = logging.getLogger(__name__)

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "WARN", "ERROR", "CRITICAL")
_TRUE_WORDS = ("true", "1", "yes", "y", "on")
_FALSE_WORDS = ("false", "0", "no", "n", "off")

_STRING_KEYS = ("github_api_url", "github_token", "ai_model", "ai_api_key", "log_file")
# Key -> smallest accepted value; depth 0 renders the root line only
_INT_MINIMUMS = {"request_timeout": 1, "max_depth": 0, "max_children": 1}
_BOOL_KEYS = ("collapse_single_root",)


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def validate_config(
        config: Any,
        *,
        strict: bool = False,
) -> Tuple[Dict[str, Any], List[str]]:
    """
    Coerce a merged configuration into the types the session expects.

    Args:
        config: Defaults merged with environment and CLI overrides.
        strict: Raise on the first bad value instead of falling back.

    Returns:
        Tuple[Dict[str, Any], List[str]]: Clean configuration and the
        human-readable notes produced while cleaning it.
    """
    notes: List[str] = []
    defaults = get_default_config()

    if not isinstance(config, dict):
        _reject(f"Configuration must be a dict, got {type(config).__name__}", notes, strict, TypeError)
        logger.warning("Configuration ignored; running on defaults.")
        return defaults, notes

    clean: Dict[str, Any] = {**defaults, **config}

    for key in _STRING_KEYS:
        clean[key] = _as_str(clean.get(key), defaults[key], key, notes, strict)
    for key, minimum in _INT_MINIMUMS.items():
        clean[key] = _as_bounded_int(clean.get(key), defaults[key], key, minimum, notes, strict)
    for key in _BOOL_KEYS:
        clean[key] = _as_bool(clean.get(key), defaults[key], key, notes, strict)

    clean["github_api_url"] = clean["github_api_url"].rstrip("/")
    clean["log_level"] = _normalize_level(clean.get("log_level"), notes, strict)

    return clean, notes


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: TYPE COERCION
# -----------------------------------------------------------------------------

def _reject(
        msg: str,
        notes: List[str],
        strict: bool,
        error: Type[Exception] = ValueError,
) -> None:
    """Raise in strict mode, otherwise record the note and let the caller fall back."""
    if strict:
        raise error(msg)
    notes.append(f"{msg}; default used.")


def _as_str(value: Any, fallback: str, key: str, notes: List[str], strict: bool) -> str:
    if value is None:
        return fallback
    if not isinstance(value, str):
        _reject(f"'{key}' must be text, got {type(value).__name__}", notes, strict, TypeError)
        return fallback
    # Empty is valid: credentials are optional
    return value.strip()


def _as_bounded_int(
        value: Any,
        fallback: int,
        key: str,
        minimum: int,
        notes: List[str],
        strict: bool,
) -> int:
    """Accept ints, and numeric strings outside strict mode, no smaller than minimum."""
    if value is None:
        return fallback

    number = None
    if isinstance(value, int) and not isinstance(value, bool):
        number = value
    elif isinstance(value, str) and not strict:
        try:
            number = int(value.strip())
            notes.append(f"'{key}' read as {number} from text '{value}'.")
        except ValueError:
            number = None

    if number is not None and number >= minimum:
        return number

    _reject(f"'{key}' must be an integer >= {minimum}, got {value!r}", notes, strict)
    return fallback


def _as_bool(value: Any, fallback: bool, key: str, notes: List[str], strict: bool) -> bool:
    if value is None:
        return fallback
    if isinstance(value, bool):
        return value

    if isinstance(value, str) and not strict:
        word = value.strip().lower()
        if word in _TRUE_WORDS or word in _FALSE_WORDS:
            parsed = word in _TRUE_WORDS
            notes.append(f"'{key}' read as {parsed} from text '{value}'.")
            return parsed

    _reject(f"'{key}' must be a boolean, got {type(value).__name__}", notes, strict, TypeError)
    return fallback


def _normalize_level(value: Any, notes: List[str], strict: bool) -> str:
    level = str(value or "INFO").strip().upper()
    if level in _LOG_LEVELS:
        return level

    _reject(f"Unknown log level {value!r}", notes, strict)
    return "INFO"
