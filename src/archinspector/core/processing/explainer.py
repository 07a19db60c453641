from __future__ import annotations

"""
Explanation Requestor.

Builds file- and folder-analysis prompts and forwards them to the configured
text-generation strategy. Binary files are answered locally. Provider
failures are logged with their details and surfaced as AIRequestError with
a stable user-facing message.
"""

import logging
from typing import Optional

from archinspector.core.analysis.tree_renderer import render_tree_context
from archinspector.core.processing.prompts import (
    build_binary_explanation,
    build_file_prompt,
    build_folder_prompt,
)
from archinspector.core.processing.strategies.base import TextGenerationStrategy
from archinspector.domain.constants import (
    DEFAULT_AI_MODEL,
    DEFAULT_MAX_CHILDREN,
    DEFAULT_MAX_DEPTH,
)
from archinspector.domain.errors import AIRequestError
from archinspector.domain.tree_models import BINARY_FILE_SENTINEL, TreeNode

logger = logging.getLogger(__name__)


class Explainer:
    """
    Request architectural explanations for tree nodes.

    Args:
        strategy: Text-generation backend.
        model: Model identifier passed to the backend.
        max_depth: Depth bound of the serialized tree context.
        max_children: Breadth bound of the serialized tree context.
    """

    def __init__(
            self,
            strategy: TextGenerationStrategy,
            model: str = DEFAULT_AI_MODEL,
            max_depth: int = DEFAULT_MAX_DEPTH,
            max_children: int = DEFAULT_MAX_CHILDREN,
    ) -> None:
        self.strategy = strategy
        self.model = model
        self.max_depth = max_depth
        self.max_children = max_children

    def explain_file(
            self,
            node: TreeNode,
            full_tree: Optional[TreeNode],
            content: Optional[str] = None,
    ) -> str:
        """
        Explain one file in the context of the whole project.

        The body is taken from `content` when given, else from the node,
        which must then be resolved already. Binary content returns the
        fixed template without calling the provider.

        Raises:
            ValueError: The node's content has not been resolved.
            AIRequestError: The provider call failed.
        """
        body = node.content if content is None else content
        if body is None:
            raise ValueError(f"File content not resolved: {node.path}")

        if body == BINARY_FILE_SENTINEL:
            logger.info(f"Skipping model call for binary file: {node.path}")
            return build_binary_explanation(node.name)

        structure = ""
        if full_tree is not None:
            structure = render_tree_context(
                full_tree,
                node.path,
                max_depth=self.max_depth,
                max_children=self.max_children,
            )

        prompt = build_file_prompt(node.path, body, structure)
        return self._generate(prompt, node.path)

    def explain_folder(self, node: TreeNode) -> str:
        """
        Explain a folder from its name and immediate children.

        Raises:
            AIRequestError: The provider call failed.
        """
        child_names = [child.name for child in node.children or []]
        prompt = build_folder_prompt(node.path, child_names)
        return self._generate(prompt, node.path)

    def _generate(self, prompt: str, path: str) -> str:
        logger.info(f"Requesting explanation for '{path}' ({len(prompt)} chars, model={self.model}).")
        try:
            return self.strategy.generate(prompt, self.model)
        except Exception as e:
            logger.error(f"Error calling text generation API for '{path}': {e}")
            raise AIRequestError() from e
