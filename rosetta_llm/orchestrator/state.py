"""Fallback run state model."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from rosetta_llm.config.constants import ConversionTier, FallbackState, SkipReason
from rosetta_llm.services.conversion.models import PrimaryResult


@dataclass
class FallbackRunState:
    """State of one orchestrator run. Owned by a single request."""

    # Input
    prose: str

    # Transitions taken, in order
    states: List[FallbackState] = field(default_factory=lambda: [FallbackState.DETERMINISTIC_ONLY])

    # Step 1: Primary
    primary: Optional[PrimaryResult] = None

    # Step 2-3: Evaluate / availability
    skip_reason: Optional[SkipReason] = None

    # Step 4-6: Tier and provider
    tier: Optional[ConversionTier] = None
    provider: Optional[str] = None
    model: Optional[str] = None
    error: Optional[Dict[str, Any]] = None

    @property
    def current(self) -> FallbackState:
        return self.states[-1]

    def transition(self, state: FallbackState) -> None:
        self.states.append(state)

    def skip(self, reason: SkipReason) -> None:
        self.skip_reason = reason
        self.transition(FallbackState.SKIPPED)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for logging and API output."""
        return {
            "states": [s.value for s in self.states],
            "skip_reason": self.skip_reason.value if self.skip_reason else None,
            "tier": self.tier.value if self.tier else None,
            "provider": self.provider,
            "model": self.model,
            "error": self.error,
        }
