from __future__ import annotations

"""
Google Gemini Text Generation Strategy.

Utilizes the Google GenAI SDK to generate explanations. Requires an active
internet connection and a valid GOOGLE_API_KEY (or GEMINI_API_KEY).
"""

import logging
import os
from typing import Any, Optional

from google import genai

from archinspector.core.processing.strategies.base import TextGenerationStrategy

logger = logging.getLogger(__name__)


class GoogleGenAIStrategy(TextGenerationStrategy):
    """
    Gemini strategy utilizing the official GenAI SDK.

    The client is created on first use so that constructing the strategy
    never touches the network or requires a key.
    """

    def __init__(self, api_key: Optional[str] = None) -> None:
        self._api_key = api_key
        self._client: Optional[Any] = None

    def generate(self, prompt: str, model_id: str) -> str:
        """
        Call models.generate_content and return the response text.

        Args:
            prompt: Full prompt text.
            model_id: Target Gemini model identifier.

        Returns:
            str: Text of the first candidate, or '' when none is returned.
        """
        client = self._get_client()
        clean_model = model_id.strip()
        if clean_model.startswith("models/"):
            clean_model = clean_model.replace("models/", "", 1)

        try:
            response = client.models.generate_content(model=clean_model, contents=prompt)
        except Exception as e:
            logger.error(f"Google GenAI generation failed: {e}")
            raise
        return response.text or ""

    def _get_client(self) -> Any:
        if self._client is None:
            api_key = (
                self._api_key
                or os.environ.get("GOOGLE_API_KEY")
                or os.environ.get("GEMINI_API_KEY")
            )
            if not api_key:
                raise ValueError("GOOGLE_API_KEY missing from environment variables.")
            self._client = genai.Client(api_key=api_key)
        return self._client
