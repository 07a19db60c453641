from __future__ import annotations

"""
Archive Source Adapter.

Enumerates the members of an uploaded zip archive, reads text members
eagerly and marks everything else with the binary sentinel. Decoding runs
on a thread pool; a member that cannot be decoded degrades to binary
instead of aborting the whole archive.
"""

import io
import logging
import os
import zipfile
import zlib
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Union

from archinspector.core.analysis.tree_builder import build_tree
from archinspector.domain.constants import (
    ARCHIVE_MIME_TYPES,
    ARCHIVE_SUFFIX,
    TEXT_EXTENSIONS,
)
from archinspector.domain.errors import DecodeFailure, InvalidArchiveError
from archinspector.domain.tree_models import BINARY_FILE_SENTINEL, FlatItem, TreeNode

logger = logging.getLogger(__name__)

ArchiveSource = Union[bytes, bytearray, str, "os.PathLike[str]"]

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def validate_archive_name(file_name: str, content_type: Optional[str] = None) -> None:
    """
    Reject uploads that are not zip archives before reading them.

    Raises:
        InvalidArchiveError: Neither the MIME type nor the suffix is zip.
    """
    if content_type in ARCHIVE_MIME_TYPES:
        return
    if (file_name or "").lower().endswith(ARCHIVE_SUFFIX):
        return
    raise InvalidArchiveError()


def is_text_file(file_name: str) -> bool:
    """
    Classify a member by the allow-list of text extensions.

    The last dot-separated token of the base name is compared, so
    'Dockerfile' and '.gitignore' match on their full name.
    """
    base_name = file_name.rsplit("/", 1)[-1]
    extension = base_name.rsplit(".", 1)[-1].lower()
    return bool(extension) and extension in TEXT_EXTENSIONS


def read_archive_tree(
        source: ArchiveSource,
        collapse_single_root: bool = True,
        max_workers: Optional[int] = None,
) -> TreeNode:
    """
    Build the project tree from zip bytes or a zip file path.

    Args:
        source: Raw archive bytes or a filesystem path.
        collapse_single_root: Forwarded to the tree builder.
        max_workers: Thread pool size for member decoding.

    Returns:
        TreeNode: Root of the archive tree.

    Raises:
        InvalidArchiveError: The input is not a readable zip archive.
    """
    items = read_archive_items(source, max_workers=max_workers)
    return build_tree(items, collapse_single_root=collapse_single_root)


def read_archive_items(source: ArchiveSource, max_workers: Optional[int] = None) -> List[FlatItem]:
    """Return one flat item per non-directory archive member."""
    with _open_archive(source) as zf:
        members = [info for info in zf.infolist() if not info.is_dir()]
        logger.info(f"Analyzing zip archive: {len(members)} entries.")

        # zipfile.ZipFile is not safe for concurrent reads, so members are
        # read sequentially and only decoding is fanned out
        payloads = [_read_member(zf, info) if is_text_file(info.filename) else None for info in members]

    items: List[Optional[FlatItem]] = [None] * len(members)

    def _task(index: int) -> None:
        info = members[index]
        items[index] = FlatItem(
            path=info.filename,
            kind="file",
            content=_member_content(info.filename, payloads[index]),
        )

    with ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="ArchiveDecoder") as executor:
        for future in [executor.submit(_task, i) for i in range(len(members))]:
            future.result()

    return [item for item in items if item is not None]

# -----------------------------------------------------------------------------
# INTERNAL HELPERS
# -----------------------------------------------------------------------------

def _open_archive(source: ArchiveSource) -> zipfile.ZipFile:
    """Open the archive, translating format errors into InvalidArchiveError."""
    try:
        if isinstance(source, (bytes, bytearray)):
            return zipfile.ZipFile(io.BytesIO(bytes(source)))
        return zipfile.ZipFile(os.fspath(source))
    except (zipfile.BadZipFile, OSError) as e:
        logger.error(f"Could not open archive: {e}")
        raise InvalidArchiveError() from e


def _read_member(zf: zipfile.ZipFile, info: zipfile.ZipInfo) -> Optional[bytes]:
    """Read one member; corrupt or encrypted members yield None."""
    try:
        return zf.read(info)
    except (zipfile.BadZipFile, zlib.error, RuntimeError, OSError) as e:
        logger.warning(f"Could not read archive member: {info.filename} ({e})")
        return None


def _member_content(file_name: str, payload: Optional[bytes]) -> str:
    """Decode a text member or fall back to the binary sentinel."""
    if payload is None:
        return BINARY_FILE_SENTINEL
    try:
        return _decode_text(payload)
    except DecodeFailure as e:
        logger.warning(f"Could not read file as text: {file_name} ({e})")
        return BINARY_FILE_SENTINEL


def _decode_text(payload: bytes) -> str:
    try:
        return payload.decode("utf-8")
    except UnicodeDecodeError as e:
        raise DecodeFailure(str(e)) from e
