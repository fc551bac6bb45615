"""Provider registry -- named dispatch to concrete fallback providers.

Providers register a class under a short name; the orchestrator resolves the
configured name per request.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from rosetta_llm.infrastructure.llm.anthropic_api import AnthropicProvider
from rosetta_llm.infrastructure.llm.base import LlmProvider
from rosetta_llm.infrastructure.llm.claude_cli import ClaudeCliProvider

if TYPE_CHECKING:
    from rosetta_llm.config.settings import Settings

logger = logging.getLogger(__name__)

_REGISTRY: dict[str, type[LlmProvider]] = {}


def register_provider(name: str, provider_cls: type[LlmProvider]) -> None:
    """Register a provider class under a name."""
    _REGISTRY[name] = provider_cls
    logger.debug("Registered fallback provider name=%s", name)


def get_provider_class(name: str) -> type[LlmProvider]:
    """Get the provider class for a name. Raises KeyError if unknown."""
    try:
        return _REGISTRY[name]
    except KeyError:
        raise KeyError(
            f"Unknown provider '{name}'. Registered: {sorted(_REGISTRY)}"
        ) from None


def registered_providers() -> list[str]:
    return sorted(_REGISTRY)


def create_provider(settings: Settings, model: str, name: str | None = None) -> LlmProvider:
    """Instantiate the named (or default) provider for a model alias."""
    provider_cls = get_provider_class(name or settings.default_provider)
    return provider_cls.from_settings(settings, model)


register_provider(ClaudeCliProvider.name, ClaudeCliProvider)
register_provider(AnthropicProvider.name, AnthropicProvider)
