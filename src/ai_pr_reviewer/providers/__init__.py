# src/ai_pr_reviewer/providers/__init__.py
from .base import LLMProvider
from .gemini import GeminiProvider
from .openai import OpenAIProvider

__all__ = ["LLMProvider", "GeminiProvider", "OpenAIProvider"]
