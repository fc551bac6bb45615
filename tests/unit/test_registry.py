"""Tests for the provider registry."""

import pytest

from rosetta_llm.infrastructure.llm.anthropic_api import AnthropicProvider
from rosetta_llm.infrastructure.llm.base import LlmProvider
from rosetta_llm.infrastructure.llm.claude_cli import ClaudeCliProvider
from rosetta_llm.infrastructure.llm.registry import (
    _REGISTRY,
    create_provider,
    get_provider_class,
    register_provider,
    registered_providers,
)


def test_builtin_providers_registered():
    assert "claude_cli" in registered_providers()
    assert "anthropic" in registered_providers()


def test_get_provider_class():
    assert get_provider_class("claude_cli") is ClaudeCliProvider
    assert get_provider_class("anthropic") is AnthropicProvider


def test_unknown_provider_lists_registered():
    with pytest.raises(KeyError, match="claude_cli"):
        get_provider_class("nope")


def test_create_provider_uses_default(settings):
    provider = create_provider(settings, "haiku")
    assert isinstance(provider, ClaudeCliProvider)
    assert provider.model == "haiku"


def test_create_provider_by_name(settings):
    provider = create_provider(settings, "opus", name="anthropic")
    assert isinstance(provider, AnthropicProvider)
    assert provider.model == settings.anthropic_model_opus


def test_register_custom_provider(settings):
    class EchoProvider(LlmProvider):
        name = "echo"

        async def is_available(self):
            return True

        async def convert(self, request):
            raise NotImplementedError

    try:
        register_provider("echo", EchoProvider)
        provider = create_provider(settings, "sonnet", name="echo")
        assert isinstance(provider, EchoProvider)
        assert provider.model == "sonnet"
    finally:
        _REGISTRY.pop("echo", None)
