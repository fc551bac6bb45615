"""Tier selection service."""

from rosetta_llm.services.tier.selector import TierPolicy, select_tier

__all__ = ["TierPolicy", "select_tier"]
