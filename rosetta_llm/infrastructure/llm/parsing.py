"""Parsing of raw model responses into LlmResult."""

import logging
import math

from rosetta_llm.errors import ProviderInvalidResponseError
from rosetta_llm.infrastructure.llm.base import LlmResult
from rosetta_llm.utils.json_parser import JSONParser
from rosetta_llm.utils.text_processing import strip_code_fences

logger = logging.getLogger(__name__)


def parse_model_response(
    raw: str,
    provider: str,
    model: str,
    tokens_used: int | None = None,
) -> LlmResult:
    """
    Turn raw model text into an LlmResult.

    A JSON object with an "output" key is taken as structured; anything else
    is the notation itself with no self-reported confidence.

    Raises:
        ProviderInvalidResponseError: empty output, or a confidence that is
            not a number within [0, 1]
    """
    text = (raw or "").strip()
    if not text:
        raise ProviderInvalidResponseError(
            "Model returned an empty response", raw_response=raw, provider=provider, model=model
        )

    data = JSONParser.extract_json(text) if "{" in text else {}
    if isinstance(data.get("output"), str):
        output = strip_code_fences(data["output"])
        confidence = _parse_confidence(data.get("confidence"), raw, provider, model)
    else:
        output = strip_code_fences(text)
        confidence = None

    if not output:
        raise ProviderInvalidResponseError(
            "Model response has no notation output",
            raw_response=raw,
            provider=provider,
            model=model,
        )

    logger.debug(
        "Parsed %s/%s response: %d chars, confidence=%s", provider, model, len(output), confidence
    )
    return LlmResult(
        output=output,
        confidence=confidence,
        provider=provider,
        model=model,
        tokens_used=tokens_used,
    )


def _parse_confidence(value: object, raw: str, provider: str, model: str) -> float | None:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        raise ProviderInvalidResponseError(
            f"Confidence has unexpected type {type(value).__name__}",
            raw_response=raw,
            provider=provider,
            model=model,
        )
    try:
        confidence = float(value)
    except ValueError as e:
        raise ProviderInvalidResponseError(
            f"Confidence is not a number: {value!r}",
            raw_response=raw,
            provider=provider,
            model=model,
        ) from e
    if math.isnan(confidence) or not 0.0 <= confidence <= 1.0:
        raise ProviderInvalidResponseError(
            f"Confidence {confidence} outside [0, 1]",
            raw_response=raw,
            provider=provider,
            model=model,
        )
    return confidence
