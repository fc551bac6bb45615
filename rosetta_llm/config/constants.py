"""
Constants, enums, and static values.
"""

import logging
from enum import Enum

logger = logging.getLogger(__name__)


class ConversionTier(str, Enum):
    """Conversion tiers, ordered by the effort expected from the converter."""

    MINIMAL = "minimal"  # Direct symbol substitution
    STANDARD = "standard"  # Header + function block
    FULL = "full"  # Complete document with types and rules

    @property
    def ordinal(self) -> int:
        return _TIER_ORDER.index(self)


_TIER_ORDER = (ConversionTier.MINIMAL, ConversionTier.STANDARD, ConversionTier.FULL)


class LlmModel(str, Enum):
    """Model effort/cost tiers accepted by the fallback providers."""

    HAIKU = "haiku"
    SONNET = "sonnet"
    OPUS = "opus"


class FallbackState(str, Enum):
    """States of the fallback decision machine."""

    DETERMINISTIC_ONLY = "deterministic_only"
    EVALUATE = "evaluate"
    FALLBACK_INVOKED = "fallback_invoked"
    MERGED = "merged"  # terminal
    SKIPPED = "skipped"  # terminal


class SkipReason(str, Enum):
    """Why the orchestrator ended in the skipped state."""

    DISABLED = "fallback_disabled"
    CONFIDENT = "confidence_above_threshold"
    UNAVAILABLE = "provider_unavailable"
    PROVIDER_ERROR = "provider_error"


class FallbackStep(str, Enum):
    """Orchestrator execution steps."""

    PRIMARY = "primary"
    EVALUATE = "evaluate"
    AVAILABILITY = "availability"
    TIER = "tier"
    PROVIDER = "provider"
    MERGE = "merge"


class FallbackStepDescription(str, Enum):
    """Orchestrator execution step descriptions."""

    PRIMARY = "Run the deterministic converter over the prose"
    EVALUATE = "Decide whether the deterministic result needs a model fallback"
    AVAILABILITY = "Check that the fallback provider can be reached"
    TIER = "Select the conversion tier for the fallback request"
    PROVIDER = "Ask the fallback provider for a conversion"
    MERGE = "Merge the deterministic and model outputs"


class PromptStyle(str, Enum):
    """System prompt registers."""

    ENGLISH = "english"
    AISP = "aisp"


AISP_VERSION = "5.1"
DEFAULT_ROUND_TRIP_RUNS = 5


def log_fallback_step(step: FallbackStep) -> None:
    """Log the start of an orchestrator step with its description."""
    logger.info("%s: %s", step.value, FallbackStepDescription[step.name].value)
