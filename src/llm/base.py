"""Base LLM provider abstraction."""

from abc import ABC, abstractmethod


class LLMError(Exception):
    """Base LLM error (transport failures, bad configuration)."""


class LLMUpstreamError(LLMError):
    """The endpoint answered with a non-success status.

    ``body`` keeps the endpoint's raw error text for operators.
    """

    def __init__(self, message: str, status_code: int | None = None, body: str = ""):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class LLMRateLimitError(LLMUpstreamError):
    """Rate limit hit."""


class LLMAuthError(LLMUpstreamError):
    """Authentication failure."""


class LLMProvider(ABC):
    """Abstract chat-completion provider."""

    provider_name: str = "base"

    @abstractmethod
    def generate(
        self,
        messages: list[dict],
        system: str | None = None,
        max_tokens: int | None = None,
        temperature: float | None = None,
    ) -> str | None:
        """Generate a response from messages.

        Args:
            messages: List of {"role": ..., "content": ...} dicts
            system: Optional system prompt
            max_tokens: Max response tokens (None = provider default)
            temperature: Sampling temperature (None = provider default)

        Returns:
            Text of the first choice, or None when the endpoint sent no content
        """
        ...
