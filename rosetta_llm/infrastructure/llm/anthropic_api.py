"""Anthropic Messages API fallback provider."""

import logging

import anthropic

from rosetta_llm.config.prompts import build_user_prompt, system_prompt_for
from rosetta_llm.config.settings import Settings
from rosetta_llm.errors import ProviderTimeoutError, ProviderUnavailableError
from rosetta_llm.infrastructure.llm.base import LlmProvider, LlmResult, ProviderRequest
from rosetta_llm.infrastructure.llm.parsing import parse_model_response
from rosetta_llm.utils.retry import run_with_retry

logger = logging.getLogger(__name__)


class AnthropicProvider(LlmProvider):
    """
    Calls the Messages API directly.

    Rate-limit and transient connection errors are retried here with
    exponential backoff; whatever is left is mapped onto ProviderError.
    """

    name = "anthropic"

    def __init__(
        self,
        model: str,
        api_key: str | None = None,
        timeout: float = 60.0,
        max_tokens: int = 2048,
        temperature: float = 0.0,
        max_retries: int = 2,
        client: anthropic.AsyncAnthropic | None = None,
    ):
        super().__init__(model)
        self.api_key = api_key
        self.timeout = timeout
        self.max_tokens = max_tokens
        self.temperature = temperature
        self.max_retries = max_retries
        self._client = client

    @classmethod
    def from_settings(cls, settings: Settings, model: str) -> "AnthropicProvider":
        return cls(
            model=settings.anthropic_model_id(model),
            api_key=settings.anthropic_api_key,
            timeout=settings.provider_timeout,
            max_tokens=settings.anthropic_max_tokens,
            temperature=settings.anthropic_temperature,
            max_retries=settings.anthropic_max_retries,
        )

    @property
    def client(self) -> anthropic.AsyncAnthropic:
        if self._client is None:
            # Retries are handled by run_with_retry, not the SDK
            self._client = anthropic.AsyncAnthropic(
                api_key=self.api_key, timeout=self.timeout, max_retries=0
            )
        return self._client

    async def is_available(self) -> bool:
        return bool(self.api_key) or self._client is not None

    async def close(self) -> None:
        if self._client is not None:
            await self._client.close()
            self._client = None

    async def convert(self, request: ProviderRequest) -> LlmResult:
        system_prompt = system_prompt_for(request.prompt_style)
        user_prompt = build_user_prompt(
            request.prose, request.tier, request.unmapped, request.partial_output
        )

        async def _execute() -> anthropic.types.Message:
            return await self.client.messages.create(
                model=self.model,
                max_tokens=self.max_tokens,
                temperature=self.temperature,
                system=system_prompt,
                messages=[{"role": "user", "content": user_prompt}],
            )

        try:
            message = await run_with_retry(
                _execute,
                max_retries=self.max_retries + 1,
                initial_delay=2.0,
                backoff_factor=2.0,
                retry_on_rate_limit=True,
            )
        except anthropic.APITimeoutError as e:
            raise ProviderTimeoutError(
                f"Anthropic API timed out after {self.timeout}s",
                timeout=self.timeout,
                provider=self.name,
                model=self.model,
            ) from e
        except (anthropic.APIConnectionError, anthropic.APIStatusError) as e:
            raise ProviderUnavailableError(
                f"Anthropic API error: {e}", provider=self.name, model=self.model
            ) from e

        text = "".join(
            block.text for block in message.content if getattr(block, "type", None) == "text"
        )
        tokens_used = None
        if message.usage is not None:
            tokens_used = message.usage.input_tokens + message.usage.output_tokens
        return parse_model_response(text, self.name, self.model, tokens_used=tokens_used)
