"""
Prose to AISP notation conversion with a confidence-gated LLM fallback.

The deterministic converter runs first; when its confidence falls below the
threshold and the fallback is enabled, one model call is made and merged.
"""

from rosetta_llm.config.constants import ConversionTier, LlmModel
from rosetta_llm.errors import (
    MergeInvariantViolation,
    PrimaryConverterError,
    ProviderError,
    ProviderInvalidResponseError,
    ProviderTimeoutError,
    ProviderUnavailableError,
    ReverseConverterError,
    RosettaError,
)
from rosetta_llm.infrastructure.llm import LlmProvider, LlmResult, ProviderRequest
from rosetta_llm.orchestrator import FallbackOrchestrator, convert_with_fallback
from rosetta_llm.services.conversion import (
    ConversionOptions,
    ConversionResult,
    PrimaryConverter,
    PrimaryResult,
    ReverseConverter,
    TokenStats,
)
from rosetta_llm.services.merge import MergePolicy, merge
from rosetta_llm.services.rosetta import RosettaConverter
from rosetta_llm.services.tier import TierPolicy, select_tier
from rosetta_llm.services.verification import VerificationReport, verify, verify_round_trip

__version__ = "0.2.0"

__all__ = [
    "ConversionOptions",
    "ConversionResult",
    "ConversionTier",
    "FallbackOrchestrator",
    "LlmModel",
    "LlmProvider",
    "LlmResult",
    "MergeInvariantViolation",
    "MergePolicy",
    "PrimaryConverter",
    "PrimaryConverterError",
    "PrimaryResult",
    "ProviderError",
    "ProviderInvalidResponseError",
    "ProviderRequest",
    "ProviderTimeoutError",
    "ProviderUnavailableError",
    "ReverseConverter",
    "ReverseConverterError",
    "RosettaConverter",
    "RosettaError",
    "TierPolicy",
    "TokenStats",
    "VerificationReport",
    "convert_with_fallback",
    "merge",
    "select_tier",
    "verify",
    "verify_round_trip",
]
