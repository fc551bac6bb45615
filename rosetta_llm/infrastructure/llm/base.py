"""Provider capability interface for model-backed conversion."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from rosetta_llm.config.constants import ConversionTier, PromptStyle


@dataclass(frozen=True)
class ProviderRequest:
    """One fallback request. Built fresh per attempt and never mutated."""

    prose: str
    tier: ConversionTier
    unmapped: tuple[str, ...] = ()
    partial_output: str | None = None
    use_aisp_prompt: bool = False

    def __post_init__(self) -> None:
        if not self.prose or not self.prose.strip():
            raise ValueError("prose must be non-empty")
        object.__setattr__(self, "unmapped", tuple(self.unmapped))

    @property
    def prompt_style(self) -> PromptStyle:
        return PromptStyle.AISP if self.use_aisp_prompt else PromptStyle.ENGLISH


@dataclass(frozen=True)
class LlmResult:
    """Conversion returned by a provider."""

    output: str
    confidence: float | None = None
    provider: str = ""
    model: str = ""
    tokens_used: int | None = None


class LlmProvider(ABC):
    """
    Model backend used as the conversion fallback.

    Implementations handle their own retries. `convert` makes one logical
    model invocation and raises a ProviderError subclass on failure.
    """

    name: str = "provider"

    def __init__(self, model: str):
        self.model = model

    @classmethod
    def from_settings(cls, settings: Any, model: str) -> "LlmProvider":
        """Build the provider from application settings."""
        return cls(model=model)

    @abstractmethod
    async def is_available(self) -> bool:
        """Cheap reachability check. Returns False instead of raising."""

    @abstractmethod
    async def convert(self, request: ProviderRequest) -> LlmResult:
        """
        Convert prose to notation.

        Raises:
            ProviderUnavailableError: backend cannot be reached
            ProviderInvalidResponseError: response cannot be parsed
            ProviderTimeoutError: call exceeded its bounded wait
        """

    async def close(self) -> None:
        """Release provider resources."""
