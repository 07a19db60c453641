from __future__ import annotations

from typing import Dict, Optional

from archinspector.domain.constants import APP_NAME, APP_VERSION

USER_AGENT = f"{APP_NAME}-Client/{APP_VERSION}"
DEFAULT_TIMEOUT = 10


def build_headers(token: Optional[str] = None) -> Dict[str, str]:
    """Standard GitHub REST headers, with bearer auth when a token is set."""
    headers = {
        "User-Agent": USER_AGENT,
        "Accept": "application/vnd.github+json",
    }
    if token:
        headers["Authorization"] = f"Bearer {token}"
    return headers
