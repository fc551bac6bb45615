"""Pytest configuration and fixtures."""

import asyncio

import pytest

from rosetta_llm.config.constants import ConversionTier
from rosetta_llm.config.settings import Settings
from rosetta_llm.infrastructure.llm.base import LlmProvider, LlmResult, ProviderRequest
from rosetta_llm.services.conversion.models import PrimaryResult


@pytest.fixture
def settings():
    """Provide settings fixture."""
    return Settings(_env_file=None)


class RecordingProvider(LlmProvider):
    """Provider stub that records requests and replays a canned answer."""

    name = "recording"

    def __init__(
        self,
        model: str = "haiku",
        result: LlmResult | None = None,
        error: Exception | None = None,
        available: bool = True,
        delay: float = 0.0,
    ):
        super().__init__(model)
        self.result = result or LlmResult(output="∀x∈S: x≡y", confidence=0.9)
        self.error = error
        self.available = available
        self.delay = delay
        self.requests: list[ProviderRequest] = []
        self.closed = False

    @property
    def call_count(self) -> int:
        return len(self.requests)

    async def is_available(self) -> bool:
        return self.available

    async def convert(self, request: ProviderRequest) -> LlmResult:
        self.requests.append(request)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.result

    async def close(self) -> None:
        self.closed = True


class FixedPrimary:
    """Primary converter stub returning one fixed result."""

    def __init__(self, result: PrimaryResult):
        self.result = result
        self.hints: list[ConversionTier | None] = []

    def convert(self, prose: str, tier_hint: ConversionTier | None = None) -> PrimaryResult:
        self.hints.append(tier_hint)
        return self.result


@pytest.fixture
def make_provider():
    """Factory for RecordingProvider stubs."""
    return RecordingProvider


@pytest.fixture
def make_primary():
    """Factory for FixedPrimary stubs."""
    return FixedPrimary


@pytest.fixture
def low_confidence_primary():
    """Primary result with 3 unmapped terms and confidence 0.4."""
    return FixedPrimary(
        PrimaryResult(
            output="quantum ∝ entanglement manifests",
            confidence=0.4,
            unmapped=("quantum", "entanglement", "manifests"),
            tier=ConversionTier.STANDARD,
        )
    )


@pytest.fixture
def confident_primary():
    return FixedPrimary(
        PrimaryResult(output="x≜5", confidence=0.95, unmapped=(), tier=ConversionTier.MINIMAL)
    )

