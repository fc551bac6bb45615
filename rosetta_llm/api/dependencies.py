"""FastAPI dependencies."""

from functools import lru_cache

from fastapi import Depends

from rosetta_llm.config.settings import Settings, get_settings
from rosetta_llm.services.rosetta.converter import RosettaConverter
from rosetta_llm.services.tier.selector import TierPolicy


@lru_cache
def get_settings_dependency() -> Settings:
    """Get settings as a FastAPI dependency."""
    return get_settings()


def get_converter(
    settings: Settings = Depends(get_settings_dependency),  # noqa: B008
) -> RosettaConverter:
    """Reference converter tuned by the configured tier thresholds."""
    return RosettaConverter(TierPolicy.from_settings(settings))
