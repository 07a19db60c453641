from __future__ import annotations

"""
Base Definitions for Text Generation Strategies.

Provides the abstract interface the explanation requestor uses to reach an
external text-generation provider.
"""

from abc import ABC, abstractmethod


class TextGenerationStrategy(ABC):
    """
    Abstract base class for provider-specific text generation.
    """

    @abstractmethod
    def generate(self, prompt: str, model_id: str) -> str:
        """
        Send a single prompt and return the generated text.

        Args:
            prompt: Full prompt text.
            model_id: Provider model identifier.

        Returns:
            str: Generated text, verbatim.
        """
        pass
