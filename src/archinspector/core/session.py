from __future__ import annotations

"""
Analysis Session Controller.

Holds the state of one analysis: the current tree, the selected node, the
last explanation and the last error. Starting a new analysis or selection
supersedes whatever is in flight; results that arrive for a superseded
generation are discarded instead of overwriting newer state.
"""

import logging
import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from archinspector.core.processing.explainer import Explainer
from archinspector.core.processing.markdown import MarkdownSegment, split_markdown
from archinspector.core.services.archive_reader import ArchiveSource, read_archive_tree
from archinspector.core.services.content_resolver import ContentResolver
from archinspector.domain.constants import GITHUB_API_URL
from archinspector.domain.errors import ArchInspectorError, InvalidInputError, StaleResultError
from archinspector.domain.tree_models import NodeKind, TreeNode
from archinspector.infra.network.github_client import fetch_blob_content, fetch_github_tree

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Explanation:
    """
    Result of explaining one node.

    Attributes:
        path: Path of the explained node.
        kind: File or folder.
        markdown: Raw model output (or the binary template).
        segments: Markdown split into text and diagram parts.
    """
    path: str
    kind: NodeKind
    markdown: str
    segments: List[MarkdownSegment] = field(default_factory=list)


class AnalysisSession:
    """
    State machine behind the front end.

    Args:
        config: Validated runtime configuration.
        explainer: Explanation requestor.
        tree_fetcher: Callable(url) -> TreeNode for repositories.
        content_fetcher: Callable(source_ref) -> str for lazy file bodies.
    """

    def __init__(
            self,
            config: Dict[str, Any],
            explainer: Explainer,
            tree_fetcher: Optional[Callable[[str], TreeNode]] = None,
            content_fetcher: Optional[Callable[[str], str]] = None,
    ) -> None:
        self.config = config
        self.explainer = explainer
        self._tree_fetcher = tree_fetcher or self._default_tree_fetcher
        self._resolver = ContentResolver(content_fetcher or self._default_content_fetcher)

        self._lock = threading.Lock()
        self._generation = 0

        self.tree: Optional[TreeNode] = None
        self.selected: Optional[TreeNode] = None
        self.explanation: Optional[Explanation] = None
        self.error: Optional[str] = None

    # -------------------------------------------------------------------------
    # Session lifecycle
    # -------------------------------------------------------------------------
    def reset(self) -> None:
        """Discard the current tree and any in-flight results."""
        with self._lock:
            self._generation += 1
            self._clear()

    def analyze_repo(self, repo_url: str) -> TreeNode:
        """Fetch a GitHub repository tree and make it the session tree."""
        return self._analyze(lambda: self._tree_fetcher(repo_url), "repository")

    def analyze_archive(self, source: ArchiveSource) -> TreeNode:
        """Read a zip archive and make its tree the session tree."""
        collapse = bool(self.config.get("collapse_single_root", True))
        return self._analyze(
            lambda: read_archive_tree(source, collapse_single_root=collapse),
            "zip file",
        )

    # -------------------------------------------------------------------------
    # Node selection
    # -------------------------------------------------------------------------
    def find_node(self, path: str) -> Optional[TreeNode]:
        if self.tree is None:
            return None
        return self.tree.find(path)

    def select(self, path: str) -> Explanation:
        """
        Select a node by path and explain it.

        Raises:
            InvalidInputError: No tree is loaded or the path is unknown.
            ArchInspectorError: Content fetch or explanation failed.
            StaleResultError: A newer request superseded this one.
        """
        node = self.find_node(path)
        if node is None:
            raise InvalidInputError(f"No such file or folder in the current tree: {path}")

        with self._lock:
            self._generation += 1
            generation = self._generation
            self.selected = node
            self.explanation = None
            self.error = None

        try:
            if node.is_folder:
                markdown = self.explainer.explain_folder(node)
            else:
                content = self._resolver.get_content(node)
                markdown = self.explainer.explain_file(node, self.tree, content=content)
        except ArchInspectorError as e:
            self._fail(generation, e)
            raise

        explanation = Explanation(
            path=node.path,
            kind=node.kind,
            markdown=markdown,
            segments=split_markdown(markdown),
        )
        with self._lock:
            if generation != self._generation:
                logger.debug(f"Discarding stale explanation for '{node.path}'.")
                raise StaleResultError()
            self.explanation = explanation
        return explanation

    # -------------------------------------------------------------------------
    # Internal helpers
    # -------------------------------------------------------------------------
    def _analyze(self, loader: Callable[[], TreeNode], label: str) -> TreeNode:
        with self._lock:
            self._generation += 1
            generation = self._generation
            self._clear()

        logger.info(f"Analyzing {label}...")
        try:
            tree = loader()
        except ArchInspectorError as e:
            self._fail(generation, e)
            raise

        with self._lock:
            if generation != self._generation:
                logger.debug(f"Discarding stale {label} tree.")
                raise StaleResultError()
            self.tree = tree
        return tree

    def _fail(self, generation: int, error: ArchInspectorError) -> None:
        with self._lock:
            if generation == self._generation:
                self.error = error.user_message

    def _clear(self) -> None:
        self.tree = None
        self.selected = None
        self.explanation = None
        self.error = None

    def _default_tree_fetcher(self, repo_url: str) -> TreeNode:
        return fetch_github_tree(
            repo_url,
            api_url=self.config.get("github_api_url") or GITHUB_API_URL,
            token=self.config.get("github_token") or None,
            timeout=self.config.get("request_timeout", 10),
            collapse_single_root=bool(self.config.get("collapse_single_root", True)),
        )

    def _default_content_fetcher(self, source_ref: str) -> str:
        return fetch_blob_content(
            source_ref,
            token=self.config.get("github_token") or None,
            timeout=self.config.get("request_timeout", 10),
        )
