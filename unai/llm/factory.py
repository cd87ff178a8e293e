"""
LLM Provider factory.
"""

from unai.config import settings
from unai.llm import LLMProvider


def get_provider(provider_name: str = "openai") -> LLMProvider:
    """Factory — returns the configured LLM provider."""
    if provider_name == "openai":
        from unai.llm.openai_provider import OpenAIProvider
        return OpenAIProvider(
            api_key=settings.OPENAI_API_KEY, model=settings.OPENAI_MODEL,
        )
    elif provider_name == "gemini":
        from unai.llm.gemini import GeminiProvider
        return GeminiProvider(
            api_key=settings.GEMINI_API_KEY, model=settings.GEMINI_MODEL,
        )
    else:
        raise ValueError(f"Unknown LLM provider: {provider_name}")
