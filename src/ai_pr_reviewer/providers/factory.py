# src/ai_pr_reviewer/providers/factory.py
from ai_pr_reviewer.config import Settings
from .base import LLMProvider
from .gemini import GeminiProvider
from .openai import OpenAIProvider


def get_provider(settings: Settings) -> LLMProvider | None:
    """Get LLM provider based on settings."""
    if settings.default_provider == "openai" and settings.openai_api_key:
        return OpenAIProvider(api_key=settings.openai_api_key, timeout=settings.engine_timeout)
    elif settings.default_provider == "gemini" and settings.gemini_api_key:
        return GeminiProvider(api_key=settings.gemini_api_key, timeout=settings.engine_timeout)
    return None
