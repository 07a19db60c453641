from __future__ import annotations

"""
Domain Error Taxonomy.

Every failure that can reach the user derives from ArchInspectorError and
carries a stable, human-readable message. Transport details stay in the
chained cause and in the logs.
"""

from typing import Optional


class ArchInspectorError(Exception):
    """Base class for session-level failures."""

    default_message: str = "An unknown error occurred."

    def __init__(self, message: Optional[str] = None) -> None:
        self.user_message = message or self.default_message
        super().__init__(self.user_message)


# -----------------------------------------------------------------------------
# INPUT VALIDATION (raised before any I/O)
# -----------------------------------------------------------------------------

class InvalidInputError(ArchInspectorError):
    default_message = "The provided input is not valid."


class InvalidURLError(InvalidInputError):
    default_message = (
        "Please enter a valid GitHub repository URL "
        "(e.g., https://github.com/owner/repo)"
    )


class InvalidArchiveError(InvalidInputError):
    default_message = "Please upload a valid .zip file."


# -----------------------------------------------------------------------------
# SOURCE FETCHING
# -----------------------------------------------------------------------------

class SourceFetchError(ArchInspectorError):
    default_message = "An unknown error occurred while fetching the repository."


class RepoNotFoundError(SourceFetchError):
    default_message = "Repository not found or API limit reached."


class TreeFetchError(SourceFetchError):
    default_message = "Could not fetch repository tree."


class ContentFetchError(SourceFetchError):
    default_message = "Failed to fetch file content."


class SourceTooLargeError(ArchInspectorError):
    default_message = "The source listing is incomplete and cannot be analyzed."


class TreeTooLargeError(SourceTooLargeError):
    default_message = "Repository is too large or the tree could not be retrieved."


# -----------------------------------------------------------------------------
# CONTENT DECODING (always recovered by the caller)
# -----------------------------------------------------------------------------

class DecodeFailure(ArchInspectorError):
    default_message = "File content could not be decoded as text."


# -----------------------------------------------------------------------------
# TEXT GENERATION
# -----------------------------------------------------------------------------

class AIRequestError(ArchInspectorError):
    default_message = (
        "Failed to get explanation from the AI. "
        "Please check your API key and network connection."
    )


# -----------------------------------------------------------------------------
# SESSION
# -----------------------------------------------------------------------------

class StaleResultError(ArchInspectorError):
    default_message = "The request was superseded by a newer one."
