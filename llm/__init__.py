"""
LLM Module - Unified interface for LLM and embedding providers.

Usage:
    from llm import get_client, get_embedding_client

    client = get_client()  # Uses config settings
    response = client.generate("Your prompt here")
    print(response.content)

Supported providers:
- openai: OpenAI chat completions (or any compatible endpoint via OPENAI_BASE_URL)
- glm: Z.AI GLM via the OpenAI-compatible API
- anthropic: Claude via the Messages API

Clients are built on demand and handed to the components that use them.
Nothing here caches a client at module level.
"""
from typing import Optional

from config import settings
from .base import LLMClient, LLMResponse, Message, set_llm_context, get_llm_context
from .openai_client import OpenAIClient
from .anthropic_client import AnthropicClient
from .embeddings import EmbeddingClient, OpenAIEmbeddingClient


class ConfigurationError(ValueError):
    """Raised when a required external-service setting is missing or invalid."""
    pass


# Provider mapping
_PROVIDERS = {
    "openai": OpenAIClient,
    "glm": OpenAIClient,
    "anthropic": AnthropicClient,
}

# Default models per provider
_DEFAULT_MODELS = {
    "openai": "gpt-4o-mini",
    "glm": "glm-4.7",
    "anthropic": "claude-sonnet-4-20250514",
}

_API_KEY_SETTINGS = {
    "openai": "OPENAI_API_KEY",
    "glm": "GLM_API_KEY",
    "anthropic": "ANTHROPIC_API_KEY",
}


def get_client(
    provider: Optional[str] = None,
    api_key: Optional[str] = None,
    model: Optional[str] = None,
    verify_ssl: Optional[bool] = None,
) -> LLMClient:
    """
    Build an LLM client instance.

    Args:
        provider: Provider name. Defaults to settings.LLM_PROVIDER
        api_key: API key. Defaults to the provider's key in settings
        model: Model name. Defaults to settings.LLM_MODEL or provider default
        verify_ssl: Whether to verify SSL. Defaults to settings.LLM_VERIFY_SSL

    Returns:
        Configured LLMClient instance

    Raises:
        ConfigurationError: Unknown provider or missing API key
    """
    provider = (provider or settings.LLM_PROVIDER).lower()

    if provider not in _PROVIDERS:
        raise ConfigurationError(f"Unknown LLM provider: {provider}. Available: {list(_PROVIDERS.keys())}")

    if api_key is None:
        api_key = getattr(settings, _API_KEY_SETTINGS[provider])

    if not api_key:
        raise ConfigurationError(
            f"API key required for provider: {provider} (set {_API_KEY_SETTINGS[provider]})"
        )

    model = model or settings.LLM_MODEL or _DEFAULT_MODELS[provider]

    if verify_ssl is None:
        verify_ssl = settings.LLM_VERIFY_SSL

    if provider == "anthropic":
        return AnthropicClient(api_key=api_key, model=model, verify_ssl=verify_ssl)

    base_url = OpenAIClient.GLM_API_BASE if provider == "glm" else settings.OPENAI_BASE_URL
    return OpenAIClient(api_key=api_key, model=model, base_url=base_url, verify_ssl=verify_ssl)


def get_embedding_client(
    api_key: Optional[str] = None,
    model: Optional[str] = None,
    base_url: Optional[str] = None,
) -> EmbeddingClient:
    """
    Build an embedding client.

    Falls back to OPENAI_API_KEY / OPENAI_BASE_URL when the embedding-specific
    settings are empty.

    Raises:
        ConfigurationError: No API key available
    """
    api_key = api_key or settings.EMBEDDING_API_KEY or settings.OPENAI_API_KEY
    if not api_key:
        raise ConfigurationError("API key required for embeddings (set EMBEDDING_API_KEY or OPENAI_API_KEY)")

    return OpenAIEmbeddingClient(
        api_key=api_key,
        model=model or settings.EMBEDDING_MODEL,
        base_url=base_url or settings.EMBEDDING_BASE_URL or settings.OPENAI_BASE_URL,
        verify_ssl=settings.LLM_VERIFY_SSL,
    )


__all__ = [
    "get_client",
    "get_embedding_client",
    "ConfigurationError",
    "LLMClient",
    "LLMResponse",
    "Message",
    "OpenAIClient",
    "AnthropicClient",
    "EmbeddingClient",
    "OpenAIEmbeddingClient",
    "set_llm_context",
    "get_llm_context",
]
