from __future__ import annotations

"""
Tree Context Renderer.

Converts a TreeNode hierarchy into a bounded ASCII outline used as prompt
context. Depth and breadth limits keep the outline short on very large or
deep projects; the selected node is flagged with a marker so
the model can locate it.
"""

from typing import List, Optional

from archinspector.domain.constants import (
    DEFAULT_MAX_CHILDREN,
    DEFAULT_MAX_DEPTH,
    SELECTION_MARKER,
)
from archinspector.domain.tree_models import TreeNode

_BRANCH = "├── "
_LAST_BRANCH = "└── "
_PIPE_PREFIX = "│   "
_SPACE_PREFIX = "    "
_ANONYMOUS_ROOT = "./"

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def render_tree_context(
        tree: TreeNode,
        selected_path: Optional[str] = None,
        max_depth: int = DEFAULT_MAX_DEPTH,
        max_children: int = DEFAULT_MAX_CHILDREN,
) -> str:
    """
    Render the bounded outline as a single newline-terminated string.

    Args:
        tree: Root of the project tree.
        selected_path: Path of the node to flag with the selection marker.
        max_depth: Deepest level rendered; the root is level 0.
        max_children: Children shown per folder before summarizing.

    Returns:
        str: The outline text.
    """
    lines = render_tree_lines(tree, selected_path, max_depth, max_children)
    return "\n".join(lines) + "\n"


def render_tree_lines(
        tree: TreeNode,
        selected_path: Optional[str] = None,
        max_depth: int = DEFAULT_MAX_DEPTH,
        max_children: int = DEFAULT_MAX_CHILDREN,
) -> List[str]:
    """Render the bounded outline as a list of lines."""
    lines: List[str] = [_label(tree, selected_path)]
    _render_children(
        tree,
        lines,
        prefix="",
        depth=1,
        selected_path=selected_path,
        max_depth=max_depth,
        max_children=max_children,
    )
    return lines

# -----------------------------------------------------------------------------
# INTERNAL HELPERS
# -----------------------------------------------------------------------------

def _render_children(
        node: TreeNode,
        lines: List[str],
        prefix: str,
        depth: int,
        selected_path: Optional[str],
        max_depth: int,
        max_children: int,
) -> None:
    """
    Recursively append the children of a folder to the accumulator.

    Levels beyond max_depth are dropped without a placeholder. When children
    are truncated, the summary line takes the closing connector so every
    shown child keeps a continuation connector.
    """
    if not node.children or depth > max_depth:
        return

    shown = node.children[:max_children]
    omitted = len(node.children) - len(shown)

    for i, child in enumerate(shown):
        is_last = i == len(shown) - 1 and omitted == 0
        connector = _LAST_BRANCH if is_last else _BRANCH
        lines.append(f"{prefix}{connector}{_label(child, selected_path)}")

        if child.is_folder:
            _render_children(
                child,
                lines,
                prefix=prefix + (_SPACE_PREFIX if is_last else _PIPE_PREFIX),
                depth=depth + 1,
                selected_path=selected_path,
                max_depth=max_depth,
                max_children=max_children,
            )

    if omitted > 0:
        lines.append(f"{prefix}{_LAST_BRANCH}...and {omitted} more")


def _label(node: TreeNode, selected_path: Optional[str]) -> str:
    """Node name, flagged when it is the selected node."""
    # Anonymous roots (mixed top-level listings) have an empty name
    name = node.name or _ANONYMOUS_ROOT
    if selected_path is not None and node.path == selected_path:
        return f"{SELECTION_MARKER}{name}"
    return name
