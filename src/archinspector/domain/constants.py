from __future__ import annotations

"""
Domain Constants and Static Data Structures.

Centralizes the text-extension allow-list, remote endpoints, model
defaults, and the bounds applied to serialized tree context.
"""

from typing import FrozenSet

APP_NAME = "ArchInspector"
APP_VERSION = "1.0.0"

# -----------------------------------------------------------------------------
# SOURCES
# -----------------------------------------------------------------------------
GITHUB_API_URL = "https://api.github.com"
GITHUB_HOST = "github.com"

# Archive entries are read as text only when their last dot-separated token
# is listed here. Dotfiles such as '.gitignore' match on the full name.
TEXT_EXTENSIONS: FrozenSet[str] = frozenset({
    "txt", "md", "json", "js", "jsx", "ts", "tsx", "html", "css", "scss",
    "py", "go", "java", "c", "cpp", "h", "cs", "sh", "yml", "yaml", "xml",
    "rb", "php", "sql", "dockerfile", "toml", "gitignore", "npmrc", "nvmrc",
})

ARCHIVE_SUFFIX = ".zip"
ARCHIVE_MIME_TYPES: FrozenSet[str] = frozenset({
    "application/zip",
    "application/x-zip-compressed",
})

# -----------------------------------------------------------------------------
# TREE CONTEXT
# -----------------------------------------------------------------------------
DEFAULT_MAX_DEPTH = 10
DEFAULT_MAX_CHILDREN = 20
SELECTION_MARKER = ">> "

# -----------------------------------------------------------------------------
# AI PROVIDER
# -----------------------------------------------------------------------------
DEFAULT_AI_MODEL = "gemini-2.5-flash"
DIAGRAM_LANGUAGE = "mermaid"
DIAGRAM_ID_PREFIX = "mermaid-diagram-"
