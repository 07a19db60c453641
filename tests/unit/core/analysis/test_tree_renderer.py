from __future__ import annotations

"""
Unit tests for the Tree Context Renderer.

Covers connector layout, depth and breadth bounds, the truncation summary
line and the selection marker.
"""

from archinspector.core.analysis.tree_builder import build_tree
from archinspector.core.analysis.tree_renderer import render_tree_context, render_tree_lines
from archinspector.domain.constants import SELECTION_MARKER
from archinspector.domain.tree_models import FlatItem


def test_render_marks_selected_file_once() -> None:
    """TC-01: Selecting proj/b/c.ts flags exactly the c.ts line."""
    tree = build_tree([FlatItem("proj/a.ts"), FlatItem("proj/b/c.ts")])

    text = render_tree_context(tree, "proj/b/c.ts")

    assert text == "proj/\n├── a.ts\n└── b/\n    └── >> c.ts\n"
    marked = [line for line in text.splitlines() if SELECTION_MARKER in line]
    assert marked == ["    └── >> c.ts"]


def test_render_nested_prefixes(project_items) -> None:
    """TC-02: Non-last folders continue with a pipe prefix."""
    lines = render_tree_lines(build_tree(project_items))

    assert lines == [
        "proj/",
        "├── README.md",
        "├── src/",
        "│   ├── app.py",
        "│   └── utils/",
        "│       └── helpers.py",
        "└── tests/",
        "    └── test_app.py",
    ]


def test_render_without_matching_selection_has_no_marker(project_items) -> None:
    """TC-03: A selection that matches no node leaves the outline unmarked."""
    text = render_tree_context(build_tree(project_items), "proj/missing.py")

    assert SELECTION_MARKER not in text


def test_render_can_mark_folder_and_root(project_items) -> None:
    """TC-04: Folders and the root itself are selectable."""
    tree = build_tree(project_items)

    assert render_tree_lines(tree, "proj/src/")[2] == "├── >> src/"
    assert render_tree_lines(tree, "proj/")[0] == ">> proj/"


def test_render_respects_max_depth() -> None:
    """TC-05: Levels deeper than max_depth are dropped silently."""
    tree = build_tree([FlatItem("r/d1/d2/d3/f.txt")], collapse_single_root=False)

    lines = render_tree_lines(tree, max_depth=2)
    assert lines == ["r/", "└── d1/", "    └── d2/"]

    assert render_tree_lines(tree, max_depth=0) == ["r/"]


def test_render_summarizes_truncated_children() -> None:
    """TC-06: Only max_children entries are listed, followed by a count of the rest."""
    items = [FlatItem(f"proj/f{i:02d}.txt") for i in range(25)]
    lines = render_tree_lines(build_tree(items), max_children=20)

    assert len(lines) == 1 + 20 + 1
    assert lines[-1] == "└── ...and 5 more"
    assert all(line.startswith("├── ") for line in lines[1:-1])
    assert "├── f19.txt" in lines
    assert not any("f20.txt" in line for line in lines)


def test_render_no_summary_when_exactly_at_limit() -> None:
    """TC-07: A folder holding exactly max_children entries needs no summary."""
    items = [FlatItem(f"proj/f{i}.txt") for i in range(3)]
    lines = render_tree_lines(build_tree(items), max_children=3)

    assert lines[-1] == "└── f2.txt"
    assert not any("more" in line for line in lines)


def test_render_anonymous_root_label() -> None:
    """TC-08: Mixed top-level listings render their root as './'."""
    tree = build_tree([FlatItem("README.md", kind="blob"), FlatItem("src/main.py", kind="blob")])

    assert render_tree_context(tree) == "./\n├── README.md\n└── src/\n    └── main.py\n"


def test_render_empty_tree() -> None:
    """TC-09: An empty root renders as a single line."""
    assert render_tree_context(build_tree([])) == "./\n"
