"""Merge of deterministic and model conversions."""

import logging
import math
from dataclasses import dataclass
from typing import Any

from rosetta_llm.errors import MergeInvariantViolation
from rosetta_llm.infrastructure.llm.base import LlmResult
from rosetta_llm.services.conversion.models import ConversionResult, PrimaryResult
from rosetta_llm.utils.text_processing import normalize_text, similarity

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MergePolicy:
    """Scoring constants for the merge."""

    fallback_floor: float = 0.75
    """Confidence given to a model output that reported no score of its own."""

    corroboration_boost: float = 0.05
    """Added to the deterministic confidence when the model agrees with it."""

    corroboration_similarity: float = 0.9
    """Token similarity at which the model output counts as agreeing."""

    @classmethod
    def from_settings(cls, settings: Any) -> "MergePolicy":
        return cls(
            fallback_floor=settings.fallback_success_floor,
            corroboration_boost=settings.corroboration_boost,
            corroboration_similarity=settings.corroboration_similarity,
        )


def merge(
    primary: PrimaryResult,
    llm: LlmResult,
    policy: MergePolicy | None = None,
) -> ConversionResult:
    """
    Combine the deterministic result with a model result.

    Pure function of its inputs: the same (primary, llm, policy) always yields
    the same ConversionResult.

    Raises:
        MergeInvariantViolation: merged confidence outside [0, 1] or empty output
    """
    policy = policy or MergePolicy()
    model_output = llm.output.strip()

    if llm.confidence is not None and llm.confidence > primary.confidence:
        result = _from_model(primary, model_output, llm.confidence)
    elif llm.confidence is None and model_output and primary.unmapped:
        # Model closed coverage gaps without a self-reported score
        result = _from_model(
            primary, model_output, max(primary.confidence, policy.fallback_floor)
        )
    else:
        confidence = primary.confidence
        if model_output and corroborates(primary.output, model_output, policy):
            confidence = min(1.0, primary.confidence + policy.corroboration_boost)
        result = ConversionResult(
            output=primary.output,
            confidence=round(confidence, 4),
            used_fallback=False,
            tier=primary.tier,
            unmapped=primary.unmapped,
        )

    _check_invariants(result)
    return result


def corroborates(deterministic: str, model_output: str, policy: MergePolicy) -> bool:
    """True when the model output agrees with the deterministic output."""
    if normalize_text(deterministic) == normalize_text(model_output):
        return True
    return similarity(deterministic, model_output) >= policy.corroboration_similarity


def _from_model(primary: PrimaryResult, output: str, confidence: float) -> ConversionResult:
    return ConversionResult(
        output=output,
        confidence=confidence,
        used_fallback=True,
        tier=primary.tier,
        unmapped=(),
    )


def _check_invariants(result: ConversionResult) -> None:
    if math.isnan(result.confidence) or not 0.0 <= result.confidence <= 1.0:
        raise MergeInvariantViolation(
            f"Merged confidence {result.confidence} outside [0, 1]",
            context={"used_fallback": result.used_fallback},
        )
    if not result.output.strip():
        raise MergeInvariantViolation(
            "Merged output is empty",
            context={"used_fallback": result.used_fallback, "confidence": result.confidence},
        )
