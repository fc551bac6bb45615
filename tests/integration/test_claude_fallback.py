"""Integration tests against the real Claude CLI. Skipped when it is not installed."""

import shutil

import pytest

from rosetta_llm.config.constants import ConversionTier, LlmModel
from rosetta_llm.infrastructure.llm.base import ProviderRequest
from rosetta_llm.infrastructure.llm.claude_cli import ClaudeCliProvider
from rosetta_llm.orchestrator.fallback import convert_with_fallback
from rosetta_llm.services.conversion.models import ConversionOptions

pytestmark = [
    pytest.mark.integration,
    pytest.mark.skipif(shutil.which("claude") is None, reason="Claude CLI not installed"),
]

LOW_CONFIDENCE_CASES = [
    "The quantum entanglement manifests probabilistic correlation",
    "Neural networks approximate arbitrary continuous functions",
    "Homomorphic encryption preserves algebraic structure",
]


@pytest.mark.asyncio
async def test_provider_is_available(settings):
    provider = ClaudeCliProvider.from_settings(settings, LlmModel.HAIKU.value)
    assert await provider.is_available() is True


@pytest.mark.asyncio
async def test_provider_converts_minimal(settings):
    provider = ClaudeCliProvider.from_settings(settings, LlmModel.HAIKU.value)
    result = await provider.convert(
        ProviderRequest(prose="for all x in S, x equals y", tier=ConversionTier.MINIMAL)
    )
    assert result.output
    assert "∀" in result.output


@pytest.mark.asyncio
@pytest.mark.parametrize("prose", LOW_CONFIDENCE_CASES)
async def test_low_confidence_prose_never_fails(settings, prose):
    options = ConversionOptions(
        enable_llm_fallback=True, confidence_threshold=0.8, llm_model=LlmModel.HAIKU
    )
    result = await convert_with_fallback(prose, options, settings=settings)

    assert result.output
    assert 0.0 <= result.confidence <= 1.0
