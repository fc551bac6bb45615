"""Fallback orchestration."""

from rosetta_llm.orchestrator.fallback import FallbackOrchestrator, convert_with_fallback
from rosetta_llm.orchestrator.state import FallbackRunState

__all__ = ["FallbackOrchestrator", "FallbackRunState", "convert_with_fallback"]
