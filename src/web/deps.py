"""Dependency injection for FastAPI routes."""

from functools import lru_cache, partial
from pathlib import Path

import structlog
from fastapi import Depends, HTTPException, status

from cli.config import load_config_model
from cli.config_models import QuietMindConfig
from llm import create_llm_provider
from mood import InsightGenerator, LLMInsightGenerator, MoodStore, WeeklyInsightService
from web.tokens import TokenService
from web.user_store import init_db

logger = structlog.get_logger()


@lru_cache
def get_config() -> QuietMindConfig:
    """Load config once per process from config.yaml + env."""
    return load_config_model()


def get_db_path(config: QuietMindConfig = Depends(get_config)) -> Path:
    return config.paths.db_path


def get_mood_store(db_path: Path = Depends(get_db_path)) -> MoodStore:
    return MoodStore(db_path)


def get_token_service(config: QuietMindConfig = Depends(get_config)) -> TokenService:
    if not config.auth.jwt_secret:
        logger.error("auth.secret_missing")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="JWT_SECRET not configured",
        )
    return TokenService(config.auth.jwt_secret, ttl_days=config.auth.token_ttl_days)


def get_insight_generator(config: QuietMindConfig = Depends(get_config)) -> InsightGenerator:
    """OpenAI-backed generator built from the llm config section.

    The provider is only constructed when a prompt is actually sent, so a
    missing API key surfaces as a 500 "Server error" on a non-empty week.
    """
    factory = partial(
        create_llm_provider,
        provider=config.llm.provider,
        api_key=config.llm.api_key,
        model=config.llm.model,
        base_url=config.llm.base_url,
        timeout=config.llm.timeout_seconds,
    )
    return LLMInsightGenerator(temperature=config.llm.temperature, provider_factory=factory)


def get_insight_service(
    store: MoodStore = Depends(get_mood_store),
    generator: InsightGenerator = Depends(get_insight_generator),
) -> WeeklyInsightService:
    return WeeklyInsightService(store, generator)


@lru_cache
def _ensure_users_table(db_path: Path) -> None:
    init_db(db_path)


def get_users_db(db_path: Path = Depends(get_db_path)) -> Path:
    """Database path with the users table guaranteed to exist."""
    _ensure_users_table(db_path)
    return db_path
