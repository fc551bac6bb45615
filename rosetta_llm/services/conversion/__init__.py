"""Conversion data model and collaborator protocols."""

from rosetta_llm.services.conversion.models import (
    ConversionOptions,
    ConversionResult,
    PrimaryResult,
    TokenStats,
)
from rosetta_llm.services.conversion.primary import PrimaryConverter, ReverseConverter

__all__ = [
    "ConversionOptions",
    "ConversionResult",
    "PrimaryConverter",
    "PrimaryResult",
    "ReverseConverter",
    "TokenStats",
]
