"""Weekly insight generation on top of an LLM provider."""

import json
from dataclasses import dataclass
from typing import Callable, Protocol

import structlog

from llm import LLMProvider, LLMUpstreamError
from observability import metrics

logger = structlog.get_logger()

DEFAULT_TEMPERATURE = 0.6

DEFAULT_INSIGHT = "You showed up for yourself this week."
DEFAULT_TRY_THIS = "Write one sentence about what can wait until tomorrow."
UNPARSED_TRY_THIS = "Try 5 slow breaths: inhale 4 seconds, exhale 6 seconds, repeat five times."


@dataclass(frozen=True)
class Insight:
    insight: str
    try_this: str


@dataclass(frozen=True)
class UpstreamError:
    """Generation endpoint answered with a non-success status."""

    details: str
    status_code: int | None = None
    message: str = "Upstream error"


class InsightGenerator(Protocol):
    def generate(self, prompt: str) -> Insight | UpstreamError: ...


def _field(payload: dict, key: str, default: str) -> str:
    value = payload.get(key)
    if isinstance(value, str) and value:
        return value
    return default


def parse_insight(raw: str | None) -> Insight:
    """Turn model output into an Insight, never failing.

    Non-JSON text becomes the insight itself with a breathing exercise as
    tryThis. Any valid JSON gets per-field defaults for missing or empty values.
    """
    text = raw or "{}"
    try:
        payload = json.loads(text)
    except json.JSONDecodeError:
        logger.info("insight.unparsed_output", length=len(text))
        return Insight(insight=text, try_this=UNPARSED_TRY_THIS)

    if not isinstance(payload, dict):
        # a bare string, number or list carries neither field
        payload = {}

    return Insight(
        insight=_field(payload, "insight", DEFAULT_INSIGHT),
        try_this=_field(payload, "tryThis", DEFAULT_TRY_THIS),
    )


class LLMInsightGenerator:
    """Single-shot generator: one user message, fixed low temperature, no retries.

    Pass either a ready ``provider`` or a ``provider_factory``. The factory runs
    on the first ``generate()`` call, so a week with no check-ins never needs
    a configured API key.
    """

    def __init__(
        self,
        provider: LLMProvider | None = None,
        temperature: float = DEFAULT_TEMPERATURE,
        provider_factory: Callable[[], LLMProvider] | None = None,
    ):
        if provider is None and provider_factory is None:
            raise ValueError("provider or provider_factory required")
        self._provider = provider
        self._provider_factory = provider_factory
        self.temperature = temperature

    @property
    def provider(self) -> LLMProvider:
        """The provider, built on first use. LLMError from the factory propagates."""
        if self._provider is None:
            self._provider = self._provider_factory()
        return self._provider

    def generate(self, prompt: str) -> Insight | UpstreamError:
        provider = self.provider
        metrics.counter("insight.requests")
        try:
            with metrics.timer("insight.upstream"):
                raw = provider.generate(
                    messages=[{"role": "user", "content": prompt}],
                    temperature=self.temperature,
                )
        except LLMUpstreamError as e:
            metrics.counter("insight.upstream_errors")
            logger.warning(
                "insight.upstream_error",
                provider=provider.provider_name,
                status_code=e.status_code,
            )
            return UpstreamError(details=e.body, status_code=e.status_code)

        return parse_insight(raw)
