"""OpenAI-compatible chat completions provider."""

from openai import (
    APIError,
    APIStatusError,
    AuthenticationError,
    OpenAI,
    RateLimitError,
)

from ..base import LLMAuthError, LLMError, LLMProvider, LLMRateLimitError, LLMUpstreamError

DEFAULT_MODEL = "gpt-3.5-turbo"


def _error_body(e: APIStatusError) -> str:
    response = getattr(e, "response", None)
    text = getattr(response, "text", None)
    if isinstance(text, str) and text:
        return text
    return str(e.body) if e.body is not None else str(e)


def _handle_openai_error(e: Exception):
    if isinstance(e, AuthenticationError):
        raise LLMAuthError(
            f"OpenAI auth failed: {e}", status_code=e.status_code, body=_error_body(e)
        ) from e
    if isinstance(e, RateLimitError):
        raise LLMRateLimitError(
            f"OpenAI rate limit: {e}", status_code=e.status_code, body=_error_body(e)
        ) from e
    if isinstance(e, APIStatusError):
        raise LLMUpstreamError(
            f"OpenAI API error: {e}", status_code=e.status_code, body=_error_body(e)
        ) from e
    if isinstance(e, APIError):
        raise LLMError(f"OpenAI API error: {e}") from e
    raise LLMError(f"OpenAI error: {e}") from e


class OpenAIProvider(LLMProvider):
    """OpenAI GPT provider. SDK retries are disabled: one call per generate()."""

    provider_name = "openai"

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
        client=None,
    ):
        self.model = model or DEFAULT_MODEL

        if client:
            self.client = client
            return

        kwargs: dict = {"api_key": api_key, "max_retries": 0}
        if base_url:
            kwargs["base_url"] = base_url
        if timeout is not None:
            kwargs["timeout"] = timeout
        self.client = OpenAI(**kwargs)

    def generate(
        self,
        messages: list[dict],
        system: str | None = None,
        max_tokens: int | None = None,
        temperature: float | None = None,
    ) -> str | None:
        full_messages = []
        if system:
            full_messages.append({"role": "system", "content": system})
        full_messages.extend(messages)

        params: dict = {"model": self.model, "messages": full_messages}
        if temperature is not None:
            params["temperature"] = temperature
        if max_tokens is not None:
            params["max_tokens"] = max_tokens

        try:
            response = self.client.chat.completions.create(**params)
        except Exception as e:
            _handle_openai_error(e)

        if not response.choices:
            return None
        return response.choices[0].message.content
