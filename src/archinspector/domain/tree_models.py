from __future__ import annotations

"""
Project Tree Data Models.

Provides the unified node type produced by the tree builder, the flat
listing entry consumed by it, and the sentinel used for unreadable content.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, List, Optional

# Marker stored as content for binary or undecodable files
BINARY_FILE_SENTINEL: str = "[Binary File]"

# Listing kinds that declare a directory entry (GitHub uses "tree")
DIRECTORY_KINDS = frozenset({"tree", "folder", "dir"})

PATH_SEPARATOR: str = "/"


class NodeKind(str, Enum):
    FILE = "file"
    FOLDER = "folder"


# -----------------------------------------------------------------------------
# SOURCE LISTING ENTRY
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class FlatItem:
    """
    One path-addressed entry from a source listing, before tree construction.

    Attributes:
        path: Slash-delimited path as reported by the source.
        kind: Source type tag ("blob"/"file" or "tree"/"folder").
        source_ref: Remote locator used to fetch the body later.
        content: Eagerly read text body.
    """
    path: str
    kind: str = "file"
    source_ref: Optional[str] = None
    content: Optional[str] = None

    @property
    def is_directory(self) -> bool:
        return self.kind in DIRECTORY_KINDS


# -----------------------------------------------------------------------------
# TREE NODE
# -----------------------------------------------------------------------------

@dataclass
class TreeNode:
    """
    A file or folder in the constructed hierarchy.

    Folders always hold a children list (possibly empty); files hold None.
    The only field mutated after construction is the content of a file
    node, once, when it is lazily fetched.

    Attributes:
        name: Display label. Folders end with '/'.
        path: Full path from the tree root, unique across the tree.
        kind: NodeKind.FILE or NodeKind.FOLDER.
        children: Child nodes for folders, None for files.
        content: Text body, or BINARY_FILE_SENTINEL.
        source_ref: Remote locator of the file body.
    """
    name: str
    path: str
    kind: NodeKind
    children: Optional[List["TreeNode"]] = None
    content: Optional[str] = None
    source_ref: Optional[str] = field(default=None, repr=False)

    @classmethod
    def folder(cls, name: str, path: str) -> "TreeNode":
        return cls(name=name, path=path, kind=NodeKind.FOLDER, children=[])

    @classmethod
    def file(
            cls,
            name: str,
            path: str,
            content: Optional[str] = None,
            source_ref: Optional[str] = None,
    ) -> "TreeNode":
        return cls(
            name=name,
            path=path,
            kind=NodeKind.FILE,
            content=content,
            source_ref=source_ref,
        )

    @property
    def is_folder(self) -> bool:
        return self.children is not None

    @property
    def is_binary(self) -> bool:
        return self.content == BINARY_FILE_SENTINEL

    def walk(self) -> Iterator["TreeNode"]:
        """Yield this node and all descendants in depth-first pre-order."""
        yield self
        for child in self.children or []:
            yield from child.walk()

    def find(self, path: str) -> Optional["TreeNode"]:
        """Return the descendant (or self) whose path matches, if any."""
        for node in self.walk():
            if node.path == path:
                return node
        return None
