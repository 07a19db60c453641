from __future__ import annotations

"""
Lazy File Content Resolution.

Archive nodes arrive with their content already read; GitHub nodes only
carry a blob URL. The resolver hides the difference behind get_content and
memoizes fetched bodies on the node itself.
"""

import logging
import threading
from typing import Callable

from archinspector.domain.tree_models import BINARY_FILE_SENTINEL, TreeNode

logger = logging.getLogger(__name__)

ContentFetcher = Callable[[str], str]


class ContentResolver:
    """
    Resolve the text body of file nodes, fetching at most once per node.

    Args:
        fetcher: Callable taking a source_ref and returning decoded text
            (e.g. a partial of fetch_blob_content).
    """

    def __init__(self, fetcher: ContentFetcher) -> None:
        self._fetcher = fetcher
        self._lock = threading.Lock()

    def get_content(self, node: TreeNode) -> str:
        """
        Return the node's content, fetching and storing it on first access.

        Fetch errors propagate and leave the node untouched so a later
        selection can retry.

        Raises:
            ValueError: The node is a folder.
        """
        if node.is_folder:
            raise ValueError(f"Folder nodes have no content: {node.path}")

        if node.content is not None:
            return node.content

        if not node.source_ref:
            # Neither eagerly read nor fetchable (e.g. submodule entries)
            logger.debug(f"No content source for {node.path}; treating as binary.")
            node.content = BINARY_FILE_SENTINEL
            return node.content

        with self._lock:
            if node.content is None:
                logger.info(f"Fetching file content: {node.path}")
                node.content = self._fetcher(node.source_ref)
        return node.content
