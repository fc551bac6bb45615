"""LLM infrastructure module."""

from rosetta_llm.infrastructure.llm.anthropic_api import AnthropicProvider
from rosetta_llm.infrastructure.llm.base import LlmProvider, LlmResult, ProviderRequest
from rosetta_llm.infrastructure.llm.claude_cli import ClaudeCliProvider
from rosetta_llm.infrastructure.llm.registry import (
    create_provider,
    get_provider_class,
    register_provider,
    registered_providers,
)

__all__ = [
    "AnthropicProvider",
    "ClaudeCliProvider",
    "LlmProvider",
    "LlmResult",
    "ProviderRequest",
    "create_provider",
    "get_provider_class",
    "register_provider",
    "registered_providers",
]
