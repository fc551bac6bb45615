"""Conversion tier selection."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from rosetta_llm.config.constants import ConversionTier
from rosetta_llm.utils.text_processing import content_words, count_sentences, words

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TierPolicy:
    """Tunable thresholds for tier escalation."""

    full_unmapped_count: int = 5
    """Distinct unmapped terms at or above this count select Full."""

    minimal_max_words: int = 12
    """Longest prose (in words, single sentence) that can stay Minimal."""

    @classmethod
    def from_settings(cls, settings: Any) -> "TierPolicy":
        return cls(
            full_unmapped_count=settings.tier_full_unmapped_count,
            minimal_max_words=settings.tier_minimal_max_words,
        )


def select_tier(
    prose: str,
    unmapped: Sequence[str],
    override: ConversionTier | None = None,
    policy: TierPolicy | None = None,
) -> ConversionTier:
    """
    Pick the conversion tier for a piece of prose.

    Coverage gaps dominate surface length: any unmapped term rules out
    Minimal, and the prose length alone never selects Full. Adding unmapped
    terms never lowers the selected tier.

    Args:
        prose: Source text
        unmapped: Terms the deterministic converter could not map
        override: Forced tier, returned unconditionally
        policy: Escalation thresholds

    Returns:
        The selected ConversionTier
    """
    if override is not None:
        return ConversionTier(override)

    policy = policy or TierPolicy()
    distinct = {term.strip().lower() for term in unmapped if term.strip()}

    if len(distinct) >= policy.full_unmapped_count:
        return ConversionTier.FULL

    if distinct and _no_coverage(prose, distinct):
        # The deterministic engine recognised nothing in the prose
        return ConversionTier.FULL

    if not distinct and _is_short(prose, policy):
        return ConversionTier.MINIMAL

    return ConversionTier.STANDARD


def _is_short(prose: str, policy: TierPolicy) -> bool:
    return len(words(prose)) <= policy.minimal_max_words and count_sentences(prose) <= 1


def _no_coverage(prose: str, unmapped: set[str]) -> bool:
    """True when every content word of the prose is among the unmapped terms."""
    unmapped_words: set[str] = set()
    for term in unmapped:
        unmapped_words.update(words(term))
    prose_words = content_words(prose)
    return bool(prose_words) and prose_words <= unmapped_words
