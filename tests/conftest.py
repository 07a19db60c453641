from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Shared fixtures: flat listings, zip archives and a fake text generator.
"""

import io
import os
import sys
import zipfile
from typing import Dict, List, Tuple

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

from archinspector.core.processing.strategies.base import TextGenerationStrategy  # noqa: E402
from archinspector.domain.tree_models import FlatItem  # noqa: E402


# -----------------------------------------------------------------------------
# Test Doubles
# -----------------------------------------------------------------------------
class FakeGenerator(TextGenerationStrategy):
    """Records prompts and returns a canned reply (or raises)."""

    def __init__(self, reply: str = "### 1. Executive Summary\nDoes things.", error: Exception | None = None):
        self.reply = reply
        self.error = error
        self.calls: List[Tuple[str, str]] = []

    def generate(self, prompt: str, model_id: str) -> str:
        self.calls.append((prompt, model_id))
        if self.error is not None:
            raise self.error
        return self.reply


def make_zip(entries: Dict[str, bytes]) -> bytes:
    """Build an in-memory zip. Names ending in '/' become directory entries."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as zf:
        for name, data in entries.items():
            if name.endswith("/"):
                zf.writestr(zipfile.ZipInfo(name), b"")
            else:
                zf.writestr(name, data)
    return buffer.getvalue()


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def fake_generator() -> FakeGenerator:
    return FakeGenerator()


@pytest.fixture
def project_items() -> List[FlatItem]:
    """
    Flat listing of a small project wrapped in a 'proj' folder.

    Structure:
    proj/
      README.md
      src/
        app.py
        utils/
          helpers.py
      tests/
        test_app.py
    """
    return [
        FlatItem("proj/tests/test_app.py", content="def test_app(): pass"),
        FlatItem("proj/src/utils/helpers.py", content="def helper(): pass"),
        FlatItem("proj/README.md", content="# Proj"),
        FlatItem("proj/src/app.py", content="print('hi')"),
    ]


@pytest.fixture
def project_zip() -> bytes:
    return make_zip({
        "proj/": b"",
        "proj/src/": b"",
        "proj/src/app.py": b"import os\n",
        "proj/README.md": b"# Proj\n",
        "proj/logo.png": b"\x89PNG\r\n\x1a\n\x00\x00",
    })


@pytest.fixture
def zip_factory():
    """Expose make_zip to tests that need custom archives."""
    return make_zip


@pytest.fixture
def generator_factory():
    """Expose FakeGenerator for tests that need a failing or custom reply."""
    return FakeGenerator
