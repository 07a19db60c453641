from __future__ import annotations

"""
Explanation Post-Processing.

Splits model output into plain markdown and fenced Mermaid diagram segments
so front ends can render diagrams separately, and hands out unique diagram
identifiers.
"""

import itertools
import re
import threading
from dataclasses import dataclass
from typing import List, Optional

from archinspector.domain.constants import DIAGRAM_ID_PREFIX, DIAGRAM_LANGUAGE

_FENCE_RX = re.compile(
    r"^```[ \t]*" + DIAGRAM_LANGUAGE + r"[ \t]*\n(?P<body>.*?)^```[ \t]*$",
    re.MULTILINE | re.DOTALL,
)

# Process-wide and monotonic; never reset so ids stay unique across sessions
_diagram_counter = itertools.count()
_counter_lock = threading.Lock()


@dataclass(frozen=True)
class MarkdownSegment:
    """
    One contiguous piece of an explanation.

    Attributes:
        kind: 'markdown' or 'diagram'.
        text: Segment body (diagram bodies exclude the fences).
        diagram_id: Unique id for diagram segments, None otherwise.
    """
    kind: str
    text: str
    diagram_id: Optional[str] = None


def next_diagram_id() -> str:
    """Return the next process-wide unique diagram identifier."""
    with _counter_lock:
        return f"{DIAGRAM_ID_PREFIX}{next(_diagram_counter)}"


def split_markdown(text: str) -> List[MarkdownSegment]:
    """
    Separate fenced Mermaid blocks from the surrounding markdown.

    Whitespace-only markdown between blocks is dropped. Text without any
    diagram yields a single markdown segment.
    """
    segments: List[MarkdownSegment] = []
    cursor = 0

    for match in _FENCE_RX.finditer(text or ""):
        _append_markdown(segments, text[cursor:match.start()])
        body = match.group("body").rstrip("\n")
        segments.append(MarkdownSegment("diagram", body, next_diagram_id()))
        cursor = match.end()

    _append_markdown(segments, (text or "")[cursor:])
    return segments


def _append_markdown(segments: List[MarkdownSegment], chunk: str) -> None:
    if chunk.strip():
        segments.append(MarkdownSegment("markdown", chunk.strip("\n")))
