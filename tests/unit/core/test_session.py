from __future__ import annotations

"""
Unit tests for the Analysis Session Controller.

Collaborators are injected: a fake generator stands in for the provider
and plain callables stand in for the GitHub adapter.
"""

from unittest.mock import MagicMock

import pytest

from archinspector.core.analysis.tree_builder import build_tree
from archinspector.core.processing.explainer import Explainer
from archinspector.core.session import AnalysisSession
from archinspector.domain.config import get_default_config
from archinspector.domain.errors import (
    AIRequestError,
    ContentFetchError,
    InvalidArchiveError,
    InvalidInputError,
    StaleResultError,
    TreeTooLargeError,
)
from archinspector.domain.tree_models import BINARY_FILE_SENTINEL, FlatItem, NodeKind
from archinspector.infra.network import map_tree_entries


@pytest.fixture
def remote_tree():
    return build_tree([
        FlatItem("README.md", kind="blob", source_ref="u-readme"),
        FlatItem("src", kind="tree", source_ref="u-src"),
        FlatItem("src/app.py", kind="blob", source_ref="u-app"),
    ])


def _session(generator, tree_fetcher=None, content_fetcher=None, **conf):
    config = get_default_config()
    config.update(conf)
    return AnalysisSession(
        config,
        Explainer(generator),
        tree_fetcher=tree_fetcher,
        content_fetcher=content_fetcher,
    )


def test_archive_analysis_and_file_selection(fake_generator, project_zip) -> None:
    """TC-01: A zip becomes the session tree and a file can be explained."""
    session = _session(fake_generator)

    tree = session.analyze_archive(project_zip)
    explanation = session.select("proj/src/app.py")

    assert session.tree is tree
    assert session.selected.path == "proj/src/app.py"
    assert explanation.kind == NodeKind.FILE
    assert explanation.markdown == fake_generator.reply
    assert session.explanation is explanation
    assert len(fake_generator.calls) == 1


def test_folder_selection(fake_generator, project_zip) -> None:
    """TC-02: Folders are explained from their immediate children."""
    session = _session(fake_generator)
    session.analyze_archive(project_zip)

    explanation = session.select("proj/src/")

    assert explanation.kind == NodeKind.FOLDER
    assert "Folder Contents: app.py" in fake_generator.calls[0][0]


def test_binary_selection_skips_provider(fake_generator, project_zip) -> None:
    """TC-03: Binary files are explained locally."""
    session = _session(fake_generator)
    session.analyze_archive(project_zip)

    explanation = session.select("proj/logo.png")

    assert "Binary File: logo.png" in explanation.markdown
    assert fake_generator.calls == []


def test_unknown_path_is_invalid_input(fake_generator, project_zip) -> None:
    """TC-04: Selecting a path outside the tree is rejected."""
    session = _session(fake_generator)

    with pytest.raises(InvalidInputError):
        session.select("anything")

    session.analyze_archive(project_zip)
    with pytest.raises(InvalidInputError):
        session.select("proj/nope.py")


def test_repo_content_is_fetched_lazily_once(fake_generator, remote_tree) -> None:
    """TC-05: GitHub file bodies are fetched on first selection only."""
    content_fetcher = MagicMock(return_value="print('remote')")
    session = _session(fake_generator, tree_fetcher=lambda url: remote_tree, content_fetcher=content_fetcher)

    session.analyze_repo("https://github.com/o/r")
    content_fetcher.assert_not_called()

    session.select("src/app.py")
    session.select("src/app.py")

    content_fetcher.assert_called_once_with("u-app")
    assert "print('remote')" in fake_generator.calls[0][0]


def test_source_failure_sets_error(fake_generator) -> None:
    """TC-06: A failed analysis leaves no tree and records the user message."""
    fetcher = MagicMock(side_effect=TreeTooLargeError())
    session = _session(fake_generator, tree_fetcher=fetcher)

    with pytest.raises(TreeTooLargeError):
        session.analyze_repo("https://github.com/o/huge")

    assert session.tree is None
    assert session.error == TreeTooLargeError.default_message


def test_invalid_archive_sets_error(fake_generator) -> None:
    """TC-07: Corrupt archives surface as invalid input."""
    session = _session(fake_generator)

    with pytest.raises(InvalidArchiveError):
        session.analyze_archive(b"garbage")

    assert session.error == InvalidArchiveError.default_message


def test_new_analysis_clears_previous_state(fake_generator, project_zip, remote_tree) -> None:
    """TC-08: Loading another source drops the old tree, selection and explanation."""
    session = _session(fake_generator, tree_fetcher=lambda url: remote_tree)
    session.analyze_archive(project_zip)
    session.select("proj/README.md")

    session.analyze_repo("https://github.com/o/r")

    assert session.tree is remote_tree
    assert session.selected is None
    assert session.explanation is None


def test_explanation_failures_are_recorded(generator_factory, remote_tree) -> None:
    """TC-09: Content and provider errors propagate and set the session error."""
    content_fetcher = MagicMock(side_effect=ContentFetchError())
    session = _session(generator_factory(), tree_fetcher=lambda url: remote_tree, content_fetcher=content_fetcher)
    session.analyze_repo("https://github.com/o/r")

    with pytest.raises(ContentFetchError):
        session.select("src/app.py")
    assert session.error == ContentFetchError.default_message

    failing = _session(generator_factory(error=RuntimeError("down")), tree_fetcher=lambda url: remote_tree)
    failing.analyze_repo("https://github.com/o/r")
    with pytest.raises(AIRequestError):
        failing.select("src/")
    assert failing.error == AIRequestError.default_message
    assert failing.explanation is None


def test_superseded_selection_is_discarded(fake_generator, remote_tree) -> None:
    """TC-10: A result that lands after a reset does not overwrite session state."""
    def fetch_then_reset(source_ref: str) -> str:
        session.reset()
        return "late body"

    session = _session(fake_generator, tree_fetcher=lambda url: remote_tree, content_fetcher=fetch_then_reset)
    session.analyze_repo("https://github.com/o/r")

    with pytest.raises(StaleResultError):
        session.select("src/app.py")

    assert session.tree is None
    assert session.explanation is None
    assert session.error is None


def test_superseded_analysis_is_discarded(fake_generator, remote_tree) -> None:
    """TC-11: A tree that arrives after a newer request is dropped."""
    def slow_fetch(url: str):
        session.reset()
        return remote_tree

    session = _session(fake_generator, tree_fetcher=slow_fetch)

    with pytest.raises(StaleResultError):
        session.analyze_repo("https://github.com/o/r")
    assert session.tree is None


def test_archive_respects_collapse_setting(fake_generator, zip_factory) -> None:
    """TC-12: The collapse toggle from configuration reaches the builder."""
    data = zip_factory({"outer/inner/a.txt": b"a"})

    assert _session(fake_generator).analyze_archive(data).path == "outer/inner/"
    assert _session(fake_generator, collapse_single_root=False).analyze_archive(data).path == "outer/"


def test_submodule_entry_is_explained_as_binary(fake_generator) -> None:
    """TC-13: A listing entry with no blob URL is answered locally as binary."""
    tree = build_tree(map_tree_entries([
        {"path": "README.md", "type": "blob", "url": "u-readme"},
        {"path": "vendor", "type": "tree", "url": "u-vendor"},
        {"path": "vendor/lib", "type": "commit", "sha": "abc"},
    ]))
    content_fetcher = MagicMock()
    session = _session(fake_generator, tree_fetcher=lambda url: tree, content_fetcher=content_fetcher)
    session.analyze_repo("https://github.com/o/r")

    explanation = session.select("vendor/lib")

    assert "Binary File: lib" in explanation.markdown
    assert fake_generator.calls == []
    content_fetcher.assert_not_called()
    assert session.find_node("vendor/lib").content == BINARY_FILE_SENTINEL
