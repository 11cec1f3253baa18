"""Pydantic configuration models for QuietMind."""

import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

VALID_LLM_PROVIDERS = {"auto", "openai"}
VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def _default_home() -> Path:
    return Path(os.environ.get("QUIETMIND_HOME", "~/quietmind"))


def _expand_env(value: Optional[str]) -> Optional[str]:
    """Resolve a ``${VAR}`` placeholder against the environment."""
    if value and value.startswith("${") and value.endswith("}"):
        return os.getenv(value[2:-1], "")
    return value


class LLMConfig(BaseModel):
    """Text-generation endpoint configuration."""

    provider: str = "openai"
    model: str = "gpt-3.5-turbo"
    api_key: Optional[str] = None
    base_url: Optional[str] = None
    temperature: float = 0.6
    timeout_seconds: Optional[float] = None  # None = SDK transport default

    @field_validator("provider")
    @classmethod
    def validate_provider(cls, v: str) -> str:
        if v not in VALID_LLM_PROVIDERS:
            raise ValueError(f"Invalid LLM provider: {v}. Must be one of {VALID_LLM_PROVIDERS}")
        return v

    @field_validator("temperature")
    @classmethod
    def validate_temperature(cls, v: float) -> float:
        if not 0.0 <= v <= 2.0:
            raise ValueError(f"temperature must be 0-2, got {v}")
        return v


class AuthConfig(BaseModel):
    """Token signing and password reset settings."""

    jwt_secret: Optional[str] = None
    token_ttl_days: int = 7
    reset_token_minutes: int = 30
    expose_reset_token: bool = True  # no mailer yet; the API hands the token back


class PathsConfig(BaseModel):
    """File paths configuration."""

    db_path: Path = Field(default_factory=lambda: _default_home() / "quietmind.db")

    @model_validator(mode="after")
    def expand_paths(self):
        self.db_path = self.db_path.expanduser()
        return self


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"
    json_mode: bool = False

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        v_upper = v.upper()
        if v_upper not in VALID_LOG_LEVELS:
            raise ValueError(f"Invalid log level: {v}. Must be one of {VALID_LOG_LEVELS}")
        return v_upper


class WebConfig(BaseModel):
    frontend_origin: str = "http://localhost:8081"


class QuietMindConfig(BaseModel):
    """Main configuration model."""

    llm: LLMConfig = Field(default_factory=LLMConfig)
    auth: AuthConfig = Field(default_factory=AuthConfig)
    paths: PathsConfig = Field(default_factory=PathsConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    web: WebConfig = Field(default_factory=WebConfig)

    @model_validator(mode="after")
    def expand_env_vars(self):
        """Expand ${VAR} secrets, then fall back to the conventional env vars."""
        self.llm.api_key = _expand_env(self.llm.api_key) or os.getenv("OPENAI_API_KEY")
        self.auth.jwt_secret = _expand_env(self.auth.jwt_secret) or os.getenv("JWT_SECRET")
        return self

    @classmethod
    def from_dict(cls, data: dict) -> "QuietMindConfig":
        if "paths" in data and isinstance(data["paths"].get("db_path"), str):
            data["paths"]["db_path"] = Path(data["paths"]["db_path"])
        return cls.model_validate(data)

    def to_dict(self) -> dict:
        return self.model_dump(mode="python")
