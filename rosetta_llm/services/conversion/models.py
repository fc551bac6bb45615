"""Conversion service models."""

from dataclasses import asdict, dataclass
from typing import Any

from rosetta_llm.config.constants import ConversionTier, LlmModel


@dataclass(frozen=True)
class PrimaryResult:
    """Result from the deterministic converter."""

    output: str
    confidence: float
    unmapped: tuple[str, ...] = ()
    tier: ConversionTier | None = None

    def __post_init__(self) -> None:
        if not 0.0 <= self.confidence <= 1.0:
            raise ValueError(f"confidence must be within [0, 1], got {self.confidence}")
        # Accept lists from collaborators but keep the value immutable
        object.__setattr__(self, "unmapped", tuple(self.unmapped))


@dataclass
class ConversionOptions:
    """Options for a single conversion request.

    An unset ``llm_model`` falls back to ``settings.default_llm_model``.
    """

    enable_llm_fallback: bool = False
    confidence_threshold: float = 0.8
    llm_model: LlmModel | None = None
    tier_override: ConversionTier | None = None
    use_aisp_prompt: bool = False

    def __post_init__(self) -> None:
        if not 0.0 <= self.confidence_threshold <= 1.0:
            raise ValueError(
                f"confidence_threshold must be within [0, 1], got {self.confidence_threshold}"
            )
        if self.llm_model is not None:
            self.llm_model = LlmModel(self.llm_model)
        if self.tier_override is not None:
            self.tier_override = ConversionTier(self.tier_override)

    @classmethod
    def from_settings(cls, settings: Any) -> "ConversionOptions":
        """Defaults for callers that pass no options."""
        return cls(confidence_threshold=settings.confidence_threshold)


@dataclass(frozen=True)
class TokenStats:
    """Character counts of the prose and the final output."""

    input: int
    output: int
    ratio: float

    @classmethod
    def measure(cls, prose: str, output: str) -> "TokenStats":
        ratio = 0.0 if not prose else round(len(output) / len(prose), 2)
        return cls(input=len(prose), output=len(output), ratio=ratio)


@dataclass(frozen=True)
class ConversionResult:
    """Final result of a conversion request."""

    output: str
    confidence: float
    used_fallback: bool
    tier: ConversionTier | None = None
    unmapped: tuple[str, ...] = ()
    tokens: TokenStats | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON output."""
        data = asdict(self)
        data["tier"] = self.tier.value if self.tier else None
        data["unmapped"] = list(self.unmapped)
        return data

