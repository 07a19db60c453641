from __future__ import annotations

from .base import TextGenerationStrategy
from .google import GoogleGenAIStrategy

__all__ = [
    "TextGenerationStrategy",
    "GoogleGenAIStrategy",
]
