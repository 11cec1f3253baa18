"""LLM provider abstraction layer."""

from .base import (
    LLMAuthError,
    LLMError,
    LLMProvider,
    LLMRateLimitError,
    LLMUpstreamError,
)
from .factory import create_llm_provider

__all__ = [
    "LLMProvider",
    "create_llm_provider",
    "LLMError",
    "LLMUpstreamError",
    "LLMRateLimitError",
    "LLMAuthError",
]
