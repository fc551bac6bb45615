"""Collaborator protocols for the deterministic converters."""

from typing import Protocol, runtime_checkable

from rosetta_llm.config.constants import ConversionTier
from rosetta_llm.services.conversion.models import PrimaryResult


@runtime_checkable
class PrimaryConverter(Protocol):
    """Deterministic prose -> notation converter."""

    def convert(self, prose: str, tier_hint: ConversionTier | None = None) -> PrimaryResult:
        ...


@runtime_checkable
class ReverseConverter(Protocol):
    """Deterministic notation -> prose converter."""

    def to_prose(self, symbolic: str) -> str:
        ...
