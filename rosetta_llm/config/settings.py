"""Application settings using Pydantic BaseSettings."""

import logging
from functools import lru_cache

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from rosetta_llm.config.constants import LlmModel

_VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Rosetta AISP LLM"
    app_version: str = "0.2.0"
    debug: bool = False
    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        upper = v.upper()
        if upper not in _VALID_LOG_LEVELS:
            raise ValueError(f"log_level must be one of {_VALID_LOG_LEVELS}, got '{v}'")
        return upper

    @field_validator("default_llm_model")
    @classmethod
    def validate_default_llm_model(cls, v: str) -> str:
        lower = v.lower()
        if lower not in {m.value for m in LlmModel}:
            raise ValueError(f"default_llm_model must be one of haiku, sonnet, opus, got '{v}'")
        return lower

    @model_validator(mode="after")
    def validate_timeouts_positive(self) -> "Settings":
        for field_name in ("provider_timeout", "claude_cli_version_timeout"):
            value = getattr(self, field_name)
            if value <= 0:
                raise ValueError(f"{field_name} must be positive, got {value}")
        if self.provider_max_concurrent < 1:
            raise ValueError(
                f"provider_max_concurrent must be at least 1, got {self.provider_max_concurrent}"
            )
        return self

    @model_validator(mode="after")
    def validate_unit_interval(self) -> "Settings":
        for field_name in (
            "confidence_threshold",
            "fallback_success_floor",
            "corroboration_boost",
            "corroboration_similarity",
            "round_trip_tolerance",
            "round_trip_drift_threshold",
        ):
            value = getattr(self, field_name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{field_name} must be within [0, 1], got {value}")
        return self

    @model_validator(mode="after")
    def validate_tier_thresholds(self) -> "Settings":
        if self.tier_full_unmapped_count < 1:
            raise ValueError("tier_full_unmapped_count must be at least 1")
        if self.tier_minimal_max_words < 1:
            raise ValueError("tier_minimal_max_words must be at least 1")
        return self

    @model_validator(mode="after")
    def warn_wildcard_origins(self) -> "Settings":
        if self.allowed_origins == ["*"]:
            logging.getLogger(__name__).debug(
                "allowed_origins is set to ['*'], consider restricting in production"
            )
        return self

    # Fallback gate
    confidence_threshold: float = 0.8
    default_llm_model: str = LlmModel.HAIKU.value
    default_provider: str = "claude_cli"
    provider_timeout: float = 60.0
    provider_max_concurrent: int = 1

    # Claude CLI provider
    claude_cli_path: str = "claude"
    claude_cli_version_timeout: float = 5.0

    # Anthropic API provider
    anthropic_api_key: str | None = None
    anthropic_max_tokens: int = 2048
    anthropic_temperature: float = 0.0
    anthropic_max_retries: int = 2
    anthropic_model_haiku: str = "claude-haiku-4-5"
    anthropic_model_sonnet: str = "claude-sonnet-4-5"
    anthropic_model_opus: str = "claude-opus-4-1"

    # Tier selection
    tier_full_unmapped_count: int = 5
    tier_minimal_max_words: int = 12

    # Merge scoring
    fallback_success_floor: float = 0.75
    corroboration_boost: float = 0.05
    corroboration_similarity: float = 0.9

    # Round trip
    round_trip_tolerance: float = 0.9
    round_trip_drift_threshold: float = 0.30

    # CORS
    allowed_origins: list[str] = ["*"]

    def anthropic_model_id(self, model: str) -> str:
        """Resolve a haiku/sonnet/opus alias to an API model id."""
        return {
            LlmModel.HAIKU.value: self.anthropic_model_haiku,
            LlmModel.SONNET.value: self.anthropic_model_sonnet,
            LlmModel.OPUS.value: self.anthropic_model_opus,
        }.get(model, model)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
