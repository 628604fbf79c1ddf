"""Expose constructed client wrappers."""

from .analysis_api import AnalysisApiClient
from .gemini import GeminiClient
from .openai_chat import OpenAIChatClient

__all__ = [
    "AnalysisApiClient",
    "GeminiClient",
    "OpenAIChatClient",
]
