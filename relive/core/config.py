"""
Application configuration models and helpers.

Centralizes settings management so the FastAPI service, the CLI, and tests
share one configuration surface. Provider credentials are explicit values
threaded into the clients that need them; nothing here mutates process state.
"""

from functools import lru_cache
from typing import Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_SETTINGS_CONFIG = SettingsConfigDict(
    env_file=".env",
    env_file_encoding="utf-8",
    extra="ignore",
    populate_by_name=True,
)


def split_model_names(raw: str) -> list[str]:
    """Return distinct, non-empty model names preserving priority order."""
    seen: set[str] = set()
    names: list[str] = []
    for name in raw.split(","):
        cleaned = name.strip()
        if not cleaned or cleaned in seen:
            continue
        seen.add(cleaned)
        names.append(cleaned)
    return names


class GeminiSettings(BaseSettings):
    """Configuration for Gemini model access."""

    model_config = _SETTINGS_CONFIG

    api_key: Optional[str] = Field(None, validation_alias="GEMINI_API_KEY")
    model_names: str = Field(
        "gemini-2.5-flash,gemini-1.5-flash,gemini-pro",
        validation_alias="GEMINI_MODEL_NAMES",
        description="Comma-separated model identifiers, highest priority first.",
    )
    temperature: float = Field(0.7, validation_alias="GEMINI_TEMPERATURE")
    max_output_tokens: int = Field(2048, validation_alias="GEMINI_MAX_OUTPUT_TOKENS")

    @property
    def models(self) -> list[str]:
        return split_model_names(self.model_names)


class OpenAISettings(BaseSettings):
    """Configuration for the OpenAI chat-completions provider."""

    model_config = _SETTINGS_CONFIG

    api_key: Optional[str] = Field(None, validation_alias="OPENAI_API_KEY")
    model_names: str = Field(
        "gpt-5-2025-08-07",
        validation_alias="OPENAI_MODEL_NAMES",
        description="Comma-separated model identifiers, highest priority first.",
    )
    base_url: str = Field(
        "https://api.openai.com/v1", validation_alias="OPENAI_BASE_URL"
    )
    max_completion_tokens: int = Field(
        1000, validation_alias="OPENAI_MAX_COMPLETION_TOKENS"
    )
    http_timeout_seconds: float = Field(60.0, validation_alias="OPENAI_HTTP_TIMEOUT")

    @property
    def models(self) -> list[str]:
        return split_model_names(self.model_names)


class RetrySettings(BaseSettings):
    """Backoff policy applied to each model attempt."""

    model_config = _SETTINGS_CONFIG

    attempts: int = Field(3, ge=1, validation_alias="RELIVE_RETRY_ATTEMPTS")
    base_delay_seconds: float = Field(
        1.0, ge=0, validation_alias="RELIVE_RETRY_BASE_DELAY"
    )


class AppSettings(BaseSettings):
    """Root settings object for the service and CLI."""

    model_config = _SETTINGS_CONFIG

    environment: str = Field("development", validation_alias="APP_ENV")
    log_level: str = Field("INFO", validation_alias="APP_LOG_LEVEL")
    provider: Literal["gemini", "openai"] = Field(
        "gemini", validation_alias="RELIVE_PROVIDER"
    )
    request_timeout_seconds: Optional[float] = Field(
        None,
        validation_alias="RELIVE_REQUEST_TIMEOUT",
        description="Upper bound for one analysis including retries and fallbacks.",
    )
    fallback_on_exhaustion: bool = Field(
        False,
        validation_alias="RELIVE_FALLBACK_ON_EXHAUSTION",
        description="Return a canned analysis when every model is unavailable.",
    )
    gemini: GeminiSettings = Field(default_factory=GeminiSettings)
    openai: OpenAISettings = Field(default_factory=OpenAISettings)
    retry: RetrySettings = Field(default_factory=RetrySettings)

    @field_validator("provider", mode="before")
    @classmethod
    def _normalize_provider(cls, value: str) -> str:
        if isinstance(value, str):
            return value.strip().lower()
        return value


@lru_cache()
def get_settings() -> AppSettings:
    """Return a cached settings object."""
    return AppSettings()


__all__ = [
    "AppSettings",
    "GeminiSettings",
    "OpenAISettings",
    "RetrySettings",
    "get_settings",
    "split_model_names",
]
