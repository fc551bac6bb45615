"""Conversion endpoints."""

import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException

from rosetta_llm.api.dependencies import get_converter, get_settings_dependency
from rosetta_llm.api.models import (
    ConvertRequest,
    ConvertResponse,
    DetectTierRequest,
    DetectTierResponse,
    RoundTripRequest,
    RoundTripResponse,
    ToProseRequest,
    ToProseResponse,
)
from rosetta_llm.config.settings import Settings
from rosetta_llm.orchestrator.fallback import FallbackOrchestrator
from rosetta_llm.services.conversion.models import ConversionOptions
from rosetta_llm.services.rosetta.converter import RosettaConverter
from rosetta_llm.services.verification.verifier import verify_round_trip

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/convert", response_model=ConvertResponse)
async def convert(
    request: ConvertRequest,
    settings: Settings = Depends(get_settings_dependency),  # noqa: B008
    converter: RosettaConverter = Depends(get_converter),  # noqa: B008
) -> dict[str, Any]:
    """
    Convert prose to AISP notation.

    Runs the deterministic converter and, when enabled and its confidence is
    below the threshold, a single model fallback. Provider failures never
    fail the request.
    """
    try:
        options = ConversionOptions(
            enable_llm_fallback=request.enable_llm_fallback,
            confidence_threshold=(
                request.confidence_threshold
                if request.confidence_threshold is not None
                else settings.confidence_threshold
            ),
            llm_model=request.llm_model,
            tier_override=request.tier,
            use_aisp_prompt=request.use_aisp_prompt,
        )
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e

    orchestrator = FallbackOrchestrator(settings, primary=converter)
    try:
        result, state = await orchestrator.convert_with_state(request.prose, options)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e
    except Exception as e:
        logger.error(f"Error converting prose: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e)) from e

    response = result.to_dict()
    if request.include_trace:
        response["trace"] = state.to_dict()
    return response


@router.post("/to-prose", response_model=ToProseResponse)
async def to_prose(
    request: ToProseRequest,
    converter: RosettaConverter = Depends(get_converter),  # noqa: B008
) -> ToProseResponse:
    """Convert AISP notation back to prose."""
    try:
        return ToProseResponse(prose=converter.to_prose(request.symbolic))
    except Exception as e:
        logger.error(f"Error converting notation to prose: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e)) from e


@router.post("/detect-tier", response_model=DetectTierResponse)
async def detect_tier(
    request: DetectTierRequest,
    converter: RosettaConverter = Depends(get_converter),  # noqa: B008
) -> DetectTierResponse:
    """Tier the deterministic converter would pick for the prose."""
    return DetectTierResponse(tier=converter.detect_tier(request.prose))


@router.post("/round-trip", response_model=RoundTripResponse)
async def round_trip(
    request: RoundTripRequest,
    settings: Settings = Depends(get_settings_dependency),  # noqa: B008
    converter: RosettaConverter = Depends(get_converter),  # noqa: B008
) -> dict[str, Any]:
    """Chain prose through forward/reverse rounds and report drift."""
    try:
        report = verify_round_trip(
            request.text, request.rounds, converter=converter, settings=settings
        )
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e
    except Exception as e:
        logger.error(f"Error during round trip: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e)) from e
    return report.to_dict()
