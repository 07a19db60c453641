from __future__ import annotations

"""
Configuration Domain Management.

Builds the runtime configuration from domain defaults and environment
overrides. Nothing is persisted; every process starts from defaults.
"""

import logging
import os
from typing import Any, Dict, Mapping, Optional

from archinspector.domain.constants import (
    DEFAULT_AI_MODEL,
    DEFAULT_MAX_CHILDREN,
    DEFAULT_MAX_DEPTH,
    GITHUB_API_URL,
)

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# Environment Mapping
# -----------------------------------------------------------------------------
# Config key -> environment variables checked in order
ENV_OVERRIDES: Dict[str, tuple] = {
    "github_api_url": ("ARCHINSPECTOR_GITHUB_API",),
    "github_token": ("GITHUB_TOKEN",),
    "ai_model": ("ARCHINSPECTOR_MODEL",),
    "ai_api_key": ("GOOGLE_API_KEY", "GEMINI_API_KEY"),
    "request_timeout": ("ARCHINSPECTOR_TIMEOUT",),
    "max_depth": ("ARCHINSPECTOR_MAX_DEPTH",),
    "max_children": ("ARCHINSPECTOR_MAX_CHILDREN",),
    "log_level": ("ARCHINSPECTOR_LOG_LEVEL",),
}


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
        # Sources
        "github_api_url": GITHUB_API_URL,
        "github_token": "",
        "request_timeout": 10,

        # Explanation
        "ai_model": DEFAULT_AI_MODEL,
        "ai_api_key": "",

        # Tree Context
        "max_depth": DEFAULT_MAX_DEPTH,
        "max_children": DEFAULT_MAX_CHILDREN,
        "collapse_single_root": True,

        # Diagnostics
        "log_level": "INFO",
        "log_file": "",
    }


def load_config(environ: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
    """
    Return defaults with environment overrides applied.

    Values are left as raw strings; type coercion happens in the validator.

    Args:
        environ: Mapping to read from. Defaults to os.environ.
    """
    env = os.environ if environ is None else environ
    config = get_default_config()

    for key, names in ENV_OVERRIDES.items():
        for name in names:
            value = env.get(name)
            if value:
                config[key] = value
                logger.debug(f"Config override from environment: {key} <- ${name}")
                break

    return config
