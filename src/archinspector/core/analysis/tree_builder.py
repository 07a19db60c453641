from __future__ import annotations

"""
Project Tree Builder.

Normalizes flat, path-addressed listings (GitHub tree entries or zip
archive members) into a single-rooted TreeNode hierarchy. Intermediate
folders are materialized on demand, and a redundant single wrapper folder
can be collapsed so the tree starts at the meaningful project level.
"""

import logging
from typing import Dict, Iterable, List, Tuple

from archinspector.domain.tree_models import (
    PATH_SEPARATOR,
    FlatItem,
    TreeNode,
)

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def build_tree(items: Iterable[FlatItem], collapse_single_root: bool = True) -> TreeNode:
    """
    Construct the unified hierarchy from a flat item listing.

    Items are sorted by path first, so every ancestor prefix is seen before
    (or created while processing) its descendants. Duplicate paths are
    no-ops after their first occurrence.

    Args:
        items: Unordered flat entries from a source adapter.
        collapse_single_root: When True and the root holds exactly one
            child folder, return that child as the root instead.

    Returns:
        TreeNode: The root folder of the constructed tree.
    """
    ordered = sorted(items, key=lambda item: item.path)
    segmented = [(item, _split_path(item.path)) for item in ordered]
    segmented = [(item, parts) for item, parts in segmented if parts]

    root = _seed_root(segmented)
    node_map: Dict[str, TreeNode] = {root.path: root}

    for item, parts in segmented:
        _insert_item(item, parts, root, node_map)

    logger.debug(f"Tree built: {len(node_map)} nodes from {len(ordered)} items (root '{root.path}').")

    if collapse_single_root:
        return _collapse_wrapper(root)
    return root

# -----------------------------------------------------------------------------
# INTERNAL HELPERS
# -----------------------------------------------------------------------------

def _split_path(path: str) -> List[str]:
    """Split a listing path into non-empty segments."""
    parts = [p for p in path.split(PATH_SEPARATOR) if p]
    if not parts:
        logger.debug(f"Skipping listing entry with empty path: {path!r}")
    return parts


def _seed_root(segmented: List[Tuple[FlatItem, List[str]]]) -> TreeNode:
    """
    Create the synthetic root folder.

    The root is named after the first segment of the first sorted item when
    every item lives under that segment. Otherwise an anonymous root with an
    empty path is used so top-level paths stay parent path + name.
    """
    if not segmented:
        return TreeNode.folder("", "")

    top = segmented[0][1][0]
    for item, parts in segmented:
        if parts[0] != top:
            return TreeNode.folder("", "")
        if len(parts) == 1 and not item.is_directory:
            # A top-level file shares the name but cannot be the wrapper
            return TreeNode.folder("", "")

    name = top + PATH_SEPARATOR
    return TreeNode.folder(name, name)


def _insert_item(
        item: FlatItem,
        parts: List[str],
        root: TreeNode,
        node_map: Dict[str, TreeNode],
) -> None:
    """Walk one item's segments, materializing every missing prefix."""
    current_path = ""
    last_index = len(parts) - 1

    for i, part in enumerate(parts):
        is_leaf = i == last_index
        is_folder = not is_leaf or item.is_directory

        node_name = part + PATH_SEPARATOR if is_folder else part
        parent_path = current_path
        current_path += node_name

        if current_path in node_map:
            continue

        if is_folder:
            node = TreeNode.folder(node_name, current_path)
        else:
            node = TreeNode.file(
                node_name,
                current_path,
                content=item.content,
                source_ref=item.source_ref,
            )

        # Folder paths always end with '/', so a lookup hit is a folder
        parent: TreeNode = node_map.get(parent_path) or root
        parent.children.append(node)  # type: ignore[union-attr]
        node_map[current_path] = node


def _collapse_wrapper(root: TreeNode) -> TreeNode:
    """Promote a sole child folder to root. Applies even if that child is empty."""
    children = root.children or []
    if len(children) == 1 and children[0].is_folder:
        logger.debug(f"Collapsing wrapper folder '{root.path}' into '{children[0].path}'.")
        return children[0]
    return root
