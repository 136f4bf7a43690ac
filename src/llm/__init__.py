"""
LLM module - Language model integration.

This module handles all LLM interactions:
- Prompt construction
- API calls to Groq and Google Gemini
- Fallback answers when no provider is available
"""
from src.core.exceptions import LLMError
from src.llm.client import LLMClient, LLMAnswer, build_fallback_answer

__all__ = [
    "LLMClient",
    "LLMAnswer",
    "LLMError",
    "build_fallback_answer",
]
