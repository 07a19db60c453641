from __future__ import annotations

"""
Unit tests for the Gemini text generation strategy.

The GenAI SDK is patched at the module level, so no request leaves the
process.
"""

import os
from unittest.mock import MagicMock, patch

import pytest

from archinspector.core.processing.strategies import GoogleGenAIStrategy

_GENAI = "archinspector.core.processing.strategies.google.genai"


def test_generate_returns_response_text() -> None:
    """TC-01: The first candidate's text is returned and the model id is cleaned."""
    with patch(_GENAI) as mock_genai:
        client = mock_genai.Client.return_value
        client.models.generate_content.return_value = MagicMock(text="Explained.")

        result = GoogleGenAIStrategy(api_key="k").generate("prompt", "models/gemini-2.5-flash")

    assert result == "Explained."
    mock_genai.Client.assert_called_once_with(api_key="k")
    client.models.generate_content.assert_called_once_with(model="gemini-2.5-flash", contents="prompt")


def test_client_is_created_once() -> None:
    """TC-02: Repeated calls reuse the same SDK client."""
    with patch(_GENAI) as mock_genai:
        mock_genai.Client.return_value.models.generate_content.return_value = MagicMock(text="x")
        strategy = GoogleGenAIStrategy(api_key="k")

        strategy.generate("a", "m")
        strategy.generate("b", "m")

    assert mock_genai.Client.call_count == 1


def test_empty_response_text() -> None:
    """TC-03: A response without text yields an empty string."""
    with patch(_GENAI) as mock_genai:
        mock_genai.Client.return_value.models.generate_content.return_value = MagicMock(text=None)

        assert GoogleGenAIStrategy(api_key="k").generate("p", "m") == ""


def test_key_from_environment() -> None:
    """TC-04: GEMINI_API_KEY is used when no explicit key is given."""
    with patch.dict(os.environ, {"GEMINI_API_KEY": "env-key"}, clear=True), patch(_GENAI) as mock_genai:
        mock_genai.Client.return_value.models.generate_content.return_value = MagicMock(text="x")
        GoogleGenAIStrategy().generate("p", "m")

    mock_genai.Client.assert_called_once_with(api_key="env-key")


def test_missing_key_raises() -> None:
    """TC-05: Without any key the call fails before touching the SDK."""
    with patch.dict(os.environ, {}, clear=True), patch(_GENAI) as mock_genai:
        with pytest.raises(ValueError):
            GoogleGenAIStrategy().generate("p", "m")

    mock_genai.Client.assert_not_called()


def test_sdk_errors_propagate() -> None:
    """TC-06: Provider exceptions are re-raised for the explainer to wrap."""
    with patch(_GENAI) as mock_genai:
        mock_genai.Client.return_value.models.generate_content.side_effect = RuntimeError("boom")

        with pytest.raises(RuntimeError, match="boom"):
            GoogleGenAIStrategy(api_key="k").generate("p", "m")
