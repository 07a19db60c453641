from __future__ import annotations

"""
Network Communication Infrastructure.

Facade over the GitHub REST client used to list repositories and fetch
file bodies on demand.
"""

from archinspector.infra.network.common import USER_AGENT, build_headers
from archinspector.infra.network.github_client import (
    decode_blob,
    fetch_blob_content,
    fetch_github_tree,
    map_tree_entries,
    parse_repo_url,
)

__all__ = [
    "USER_AGENT",
    "build_headers",
    "decode_blob",
    "fetch_blob_content",
    "fetch_github_tree",
    "map_tree_entries",
    "parse_repo_url",
]
