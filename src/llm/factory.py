"""LLM provider factory."""

import os

from .base import LLMError, LLMProvider

_PROVIDER_ENV_KEYS = {
    "openai": "OPENAI_API_KEY",
}


def create_llm_provider(
    provider: str | None = None,
    api_key: str | None = None,
    model: str | None = None,
    base_url: str | None = None,
    timeout: float | None = None,
    client=None,
) -> LLMProvider:
    """Create an LLM provider instance.

    Args:
        provider: "openai", "auto", or None (auto = openai)
        api_key: Explicit API key (overrides env var)
        model: Model name (None = provider default)
        base_url: Alternate OpenAI-compatible endpoint
        timeout: Request timeout in seconds (None = SDK default)
        client: Pre-built SDK client for testing/DI

    Returns:
        LLMProvider instance
    """
    resolved = provider or "auto"
    if resolved == "auto":
        resolved = "openai"

    if resolved not in _PROVIDER_ENV_KEYS:
        raise LLMError(f"Unknown provider: {resolved}. Use: openai")

    if not api_key and not client:
        api_key = os.getenv(_PROVIDER_ENV_KEYS[resolved])
        if not api_key:
            raise LLMError(f"No LLM API key found. Set {_PROVIDER_ENV_KEYS[resolved]}")

    from .providers.openai import OpenAIProvider

    return OpenAIProvider(
        api_key=api_key, model=model, base_url=base_url, timeout=timeout, client=client
    )
