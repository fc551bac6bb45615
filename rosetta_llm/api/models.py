"""Request/Response models for API endpoints."""

from typing import Any, Optional

from pydantic import BaseModel, Field

from rosetta_llm.config.constants import ConversionTier, DEFAULT_ROUND_TRIP_RUNS, LlmModel


class ConvertRequest(BaseModel):
    """Request model for the convert endpoint."""

    prose: str = Field(..., min_length=1, description="Natural language prose to convert")
    tier: Optional[ConversionTier] = Field(None, description="Force a conversion tier")
    enable_llm_fallback: bool = Field(False, description="Allow the model fallback")
    confidence_threshold: Optional[float] = Field(
        None, ge=0.0, le=1.0, description="Fallback threshold; settings default when omitted"
    )
    llm_model: Optional[LlmModel] = Field(None, description="Fallback model tier")
    use_aisp_prompt: bool = Field(False, description="Use the AISP-register system prompt")
    include_trace: bool = Field(False, description="Include the fallback decision trail")


class TokenStatsModel(BaseModel):
    input: int
    output: int
    ratio: float


class ConvertResponse(BaseModel):
    """Response model for the convert endpoint."""

    output: str = Field(..., description="AISP notation")
    confidence: float = Field(..., ge=0.0, le=1.0, description="Confidence in the output")
    used_fallback: bool = Field(..., description="True when the model output was used")
    tier: Optional[ConversionTier] = Field(None, description="Tier of the output")
    unmapped: list[str] = Field(default_factory=list, description="Terms left unmapped")
    tokens: Optional[TokenStatsModel] = None
    trace: Optional[dict[str, Any]] = Field(None, description="Fallback decision trail")


class ToProseRequest(BaseModel):
    symbolic: str = Field(..., min_length=1, description="AISP notation")


class ToProseResponse(BaseModel):
    prose: str


class DetectTierRequest(BaseModel):
    prose: str = Field(..., min_length=1)


class DetectTierResponse(BaseModel):
    tier: ConversionTier


class RoundTripRequest(BaseModel):
    text: str = Field(..., min_length=1, description="Prose to round-trip")
    rounds: int = Field(DEFAULT_ROUND_TRIP_RUNS, ge=1, le=50)


class RoundTripResponse(BaseModel):
    """Response model for the round-trip endpoint."""

    ok: bool
    drifted: bool
    final_similarity: Optional[float] = None
    rounds: list[dict[str, Any]] = Field(default_factory=list)
    runs: list[dict[str, Any]] = Field(default_factory=list)
    divergences: list[dict[str, Any]] = Field(default_factory=list)


class SymbolResponse(BaseModel):
    symbol: str
    category: str
    patterns: list[str]


class CategoriesResponse(BaseModel):
    categories: list[str]


class HealthResponse(BaseModel):
    """Response model for health endpoint."""

    status: str = Field(..., description="Service status")
    version: str = Field(..., description="Application version")
