from __future__ import annotations

"""
GitHub Source Adapter.

Resolves a repository URL to its default branch, downloads the recursive
tree listing and maps it to flat items for the tree builder. File bodies are
not downloaded here; each file node keeps its blob API URL and is fetched on
selection through fetch_blob_content.
"""

import base64
import binascii
import logging
import re
from typing import Any, Dict, List, Optional, Tuple, Type

import requests

from archinspector.core.analysis.tree_builder import build_tree
from archinspector.domain.constants import GITHUB_API_URL, GITHUB_HOST
from archinspector.domain.errors import (
    ContentFetchError,
    DecodeFailure,
    InvalidURLError,
    RepoNotFoundError,
    SourceFetchError,
    TreeFetchError,
    TreeTooLargeError,
)
from archinspector.domain.tree_models import BINARY_FILE_SENTINEL, FlatItem, TreeNode
from archinspector.infra.network.common import DEFAULT_TIMEOUT, build_headers

logger = logging.getLogger(__name__)

_REPO_URL_RX = re.compile(
    r"^(?:https?://)?(?:www\.)?" + re.escape(GITHUB_HOST) + r"/"
    r"(?P<owner>[A-Za-z0-9-]+)/(?P<repo>[A-Za-z0-9-._]+?)(?:\.git)?/?$"
)


# -----------------------------------------------------------------------------
# Public API: Repository Tree
# -----------------------------------------------------------------------------
def parse_repo_url(repo_url: str) -> Tuple[str, str]:
    """
    Extract (owner, repo) from a GitHub repository URL.

    Raises:
        InvalidURLError: If the URL is not of the form github.com/owner/repo.
    """
    match = _REPO_URL_RX.match((repo_url or "").strip())
    if not match:
        raise InvalidURLError()
    return match.group("owner"), match.group("repo")


def fetch_github_tree(
        repo_url: str,
        *,
        api_url: str = GITHUB_API_URL,
        token: Optional[str] = None,
        timeout: int = DEFAULT_TIMEOUT,
        collapse_single_root: bool = True,
) -> TreeNode:
    """
    Build the project tree of a public GitHub repository.

    Args:
        repo_url: Repository URL (https://github.com/owner/repo).
        api_url: Base URL of the GitHub REST API.
        token: Optional personal access token.
        timeout: Per-request timeout in seconds.
        collapse_single_root: Forwarded to the tree builder.

    Returns:
        TreeNode: Root of the repository tree.

    Raises:
        InvalidURLError: Malformed URL (no request is made).
        RepoNotFoundError: Repository metadata request failed.
        TreeFetchError: Tree listing request failed.
        TreeTooLargeError: Listing truncated or missing.
    """
    owner, repo = parse_repo_url(repo_url)
    headers = build_headers(token)
    base = api_url.rstrip("/")

    logger.info(f"Fetching repository structure: {owner}/{repo}")

    repo_info = _get_json(f"{base}/repos/{owner}/{repo}", headers, timeout, RepoNotFoundError)
    default_branch = repo_info.get("default_branch")
    if not default_branch:
        raise RepoNotFoundError()
    logger.debug(f"Default branch for {owner}/{repo}: {default_branch}")

    tree_data = _get_json(
        f"{base}/repos/{owner}/{repo}/git/trees/{default_branch}",
        headers,
        timeout,
        TreeFetchError,
        params={"recursive": "1"},
    )

    entries = tree_data.get("tree")
    if not isinstance(entries, list) or tree_data.get("truncated"):
        logger.error(f"Tree listing for {owner}/{repo} is truncated or missing.")
        raise TreeTooLargeError()

    items = map_tree_entries(entries)
    logger.info(f"Repository listing received: {len(items)} entries.")
    return build_tree(items, collapse_single_root=collapse_single_root)


def map_tree_entries(entries: List[Dict[str, Any]]) -> List[FlatItem]:
    """Translate GitHub tree entries into flat items carrying their blob URL."""
    items: List[FlatItem] = []
    for entry in entries:
        path = entry.get("path")
        if not path:
            continue
        items.append(FlatItem(
            path=path,
            kind=entry.get("type", "blob"),
            source_ref=entry.get("url"),
        ))
    return items


# -----------------------------------------------------------------------------
# Public API: Blob Content
# -----------------------------------------------------------------------------
def fetch_blob_content(
        url: str,
        *,
        token: Optional[str] = None,
        timeout: int = DEFAULT_TIMEOUT,
) -> str:
    """
    Download and decode one file body from the GitHub blob API.

    Empty blobs map to an empty string; non-base64 payloads and bodies that
    cannot be decoded as UTF-8 text map to the binary sentinel.

    Raises:
        ContentFetchError: The request failed or returned a non-2xx status.
    """
    blob = _get_json(url, build_headers(token), timeout, ContentFetchError)
    return decode_blob(blob, url)


def decode_blob(blob: Dict[str, Any], label: str = "") -> str:
    """Map a blob API payload to text, '' or the binary sentinel."""
    content = blob.get("content")
    if blob.get("encoding") != "base64" or not content:
        if blob.get("size") == 0:
            return ""
        return BINARY_FILE_SENTINEL

    try:
        return _decode_base64_text(content)
    except DecodeFailure as e:
        logger.warning(f"Failed to decode base64 content for {label}: {e}")
        return BINARY_FILE_SENTINEL


# -----------------------------------------------------------------------------
# Private Helpers
# -----------------------------------------------------------------------------
def _get_json(
        url: str,
        headers: Dict[str, str],
        timeout: int,
        error_cls: Type[SourceFetchError],
        params: Optional[Dict[str, str]] = None,
) -> Dict[str, Any]:
    """GET a JSON document, translating failures into the given domain error."""
    try:
        response = requests.get(url, headers=headers, params=params, timeout=timeout)
    except requests.exceptions.RequestException as e:
        logger.error(f"Network error requesting {url}: {e}")
        raise error_cls() from e

    if not response.ok:
        logger.error(f"GitHub API rejected {url} ({response.status_code}).")
        raise error_cls()

    try:
        data = response.json()
    except ValueError as e:
        logger.error(f"Malformed JSON received from {url}: {e}")
        raise error_cls() from e

    if not isinstance(data, dict):
        logger.error(f"Unexpected JSON root from {url}: {type(data).__name__}")
        raise error_cls()
    return data


def _decode_base64_text(content: str) -> str:
    """Decode GitHub's line-wrapped base64 into UTF-8 text."""
    try:
        raw = base64.b64decode(content, validate=False)
        return raw.decode("utf-8")
    except (binascii.Error, ValueError) as e:
        raise DecodeFailure(str(e)) from e
