"""Tests for the Anthropic API provider (client mocked)."""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import anthropic
import httpx
import pytest

from rosetta_llm.config.constants import ConversionTier
from rosetta_llm.errors import ProviderTimeoutError, ProviderUnavailableError
from rosetta_llm.infrastructure.llm.anthropic_api import AnthropicProvider
from rosetta_llm.infrastructure.llm.base import ProviderRequest

REQUEST = ProviderRequest(prose="x is in S", tier=ConversionTier.MINIMAL, unmapped=("zorp",))


def _message(text: str, input_tokens: int = 10, output_tokens: int = 5) -> SimpleNamespace:
    return SimpleNamespace(
        content=[SimpleNamespace(type="text", text=text)],
        usage=SimpleNamespace(input_tokens=input_tokens, output_tokens=output_tokens),
    )


def _client(**create_kwargs) -> MagicMock:
    client = MagicMock()
    client.messages.create = AsyncMock(**create_kwargs)
    client.close = AsyncMock()
    return client


@pytest.mark.asyncio
async def test_convert_success():
    client = _client(return_value=_message('{"output": "x∈S", "confidence": 0.95}'))
    provider = AnthropicProvider(model="claude-haiku-4-5", client=client)

    result = await provider.convert(REQUEST)

    assert result.output == "x∈S"
    assert result.confidence == 0.95
    assert result.tokens_used == 15
    kwargs = client.messages.create.call_args.kwargs
    assert kwargs["model"] == "claude-haiku-4-5"
    assert "zorp" in kwargs["messages"][0]["content"]


@pytest.mark.asyncio
async def test_timeout_maps_to_provider_timeout():
    request = httpx.Request("POST", "https://api.anthropic.com/v1/messages")
    client = _client(side_effect=anthropic.APITimeoutError(request=request))
    provider = AnthropicProvider(model="m", client=client, max_retries=0)

    with pytest.raises(ProviderTimeoutError):
        await provider.convert(REQUEST)


@pytest.mark.asyncio
async def test_connection_error_maps_to_unavailable():
    request = httpx.Request("POST", "https://api.anthropic.com/v1/messages")
    client = _client(side_effect=anthropic.APIConnectionError(request=request))
    provider = AnthropicProvider(model="m", client=client, max_retries=0)

    with pytest.raises(ProviderUnavailableError):
        await provider.convert(REQUEST)


@pytest.mark.asyncio
async def test_availability_follows_api_key():
    assert await AnthropicProvider(model="m").is_available() is False
    assert await AnthropicProvider(model="m", api_key="sk-test").is_available() is True


@pytest.mark.asyncio
async def test_close_releases_client():
    client = _client(return_value=_message("x"))
    provider = AnthropicProvider(model="m", client=client)

    await provider.close()

    client.close.assert_awaited_once()


def test_from_settings_resolves_model_alias(settings):
    provider = AnthropicProvider.from_settings(settings, "sonnet")
    assert provider.model == settings.anthropic_model_sonnet
