"""Configuration management for MAIK."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from loguru import logger
from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import ApiKeyNotConfiguredError
from .logging_utils import configure_logging

DEFAULT_API_BASE = "https://openrouter.ai/api/v1"
DEFAULT_PROMPTS_DIR = Path("./prompts")


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_prefix="MAIK_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # API Configuration
    api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("MAIK_API_KEY", "OPENROUTER_API_KEY"),
        description="OpenRouter API key",
    )
    api_base: str = Field(default=DEFAULT_API_BASE, description="OpenAI-compatible API base URL")
    model: str = Field(default="gpt-4", description="Model identifier sent to the provider")
    temperature: float = Field(default=0.7, description="Sampling temperature")
    max_tokens: int = Field(default=4000, description="Maximum tokens per completion")

    # Logging Configuration
    log_level: str = Field(default="WARNING", description="Log level")

    @property
    def resolved_api_key(self) -> str | None:
        if self.api_key and self.api_key.strip():
            return self.api_key
        return None


@dataclass(frozen=True)
class RunConfig:
    """Inputs of one contract generation run."""

    api_key: str
    directory: Path
    user_prompt: str
    output_file: Path | None = None


def load_settings() -> Settings:
    """Load settings from the environment and `.env`, then configure logging."""
    settings = Settings()
    configure_logging(settings.log_level)
    return settings


def resolve_api_key(
    explicit: str | None,
    settings: Settings,
    ask: Callable[[], str],
    *,
    on_source: Callable[[str], None] | None = None,
) -> str:
    """Pick the API key: explicit flag, then environment, then an interactive prompt."""
    if explicit:
        logger.debug("config.api_key source=flag")
        return explicit

    env_key = settings.resolved_api_key
    if env_key is not None:
        logger.debug("config.api_key source=env")
        if on_source is not None:
            on_source("env")
        return env_key

    if on_source is not None:
        on_source("prompt")
    answer = ask().strip()
    if not answer:
        raise ApiKeyNotConfiguredError(
            "API key not configured. Pass --api-key or set OPENROUTER_API_KEY in your environment or .env file."
        )
    return answer
