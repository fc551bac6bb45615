"""Tests for settings validation."""

import pytest
from pydantic import ValidationError

from rosetta_llm.config.settings import Settings


def test_defaults(settings):
    assert settings.confidence_threshold == 0.8
    assert settings.default_llm_model == "haiku"
    assert settings.default_provider == "claude_cli"
    assert settings.provider_timeout == 60.0
    assert settings.tier_full_unmapped_count == 5
    assert settings.round_trip_drift_threshold == 0.30


def test_log_level_normalized():
    assert Settings(_env_file=None, log_level="debug").log_level == "DEBUG"


def test_model_alias_normalized():
    assert Settings(_env_file=None, default_llm_model="SONNET").default_llm_model == "sonnet"


@pytest.mark.parametrize(
    "overrides",
    [
        {"log_level": "chatty"},
        {"default_llm_model": "gpt"},
        {"provider_timeout": 0},
        {"provider_max_concurrent": 0},
        {"confidence_threshold": 1.2},
        {"fallback_success_floor": -0.1},
        {"round_trip_tolerance": 2},
        {"tier_full_unmapped_count": 0},
    ],
)
def test_invalid_values_rejected(overrides):
    with pytest.raises(ValidationError):
        Settings(_env_file=None, **overrides)


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("CONFIDENCE_THRESHOLD", "0.6")
    monkeypatch.setenv("DEFAULT_PROVIDER", "anthropic")
    settings = Settings(_env_file=None)
    assert settings.confidence_threshold == 0.6
    assert settings.default_provider == "anthropic"


def test_anthropic_model_id(settings):
    assert settings.anthropic_model_id("haiku") == settings.anthropic_model_haiku
    assert settings.anthropic_model_id("claude-custom") == "claude-custom"
