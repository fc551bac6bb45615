"""Fallback executor for the prompt benchmark."""

import logging
import time
from typing import Any

from evaluation.loader import BenchCase
from rosetta_llm.config.constants import ConversionTier, LlmModel, PromptStyle
from rosetta_llm.config.settings import Settings, get_settings
from rosetta_llm.orchestrator.fallback import FallbackOrchestrator
from rosetta_llm.services.conversion.models import ConversionOptions

logger = logging.getLogger(__name__)


def symbol_accuracy(output: str, expected: list[str]) -> tuple[int, float]:
    """Count expected symbols present in the output and the share found."""
    if not expected:
        return 0, 1.0
    found = sum(1 for symbol in expected if symbol in output)
    return found, found / len(expected)


class Executor:
    """Runs benchmark cases through the fallback orchestrator."""

    def __init__(self, settings: Settings | None = None, force_threshold: float = 0.99) -> None:
        self.settings = settings or get_settings()
        self.force_threshold = force_threshold
        self._orchestrator = FallbackOrchestrator(self.settings)

    async def run_case(
        self,
        case: BenchCase,
        model: LlmModel,
        style: PromptStyle,
        timeout: float | None = None,
    ) -> dict[str, Any]:
        """Convert one case at the Minimal tier with the fallback forced on."""
        options = ConversionOptions(
            enable_llm_fallback=True,
            confidence_threshold=self.force_threshold,
            llm_model=model,
            tier_override=ConversionTier.MINIMAL,
            use_aisp_prompt=style is PromptStyle.AISP,
        )

        start = time.perf_counter()
        try:
            result, state = await self._orchestrator.convert_with_state(
                case.prose, options, timeout=timeout
            )
        except Exception as e:
            logger.error(f"Benchmark case {case.id} failed: {e}")
            return {"id": case.id, "model": model.value, "prompt_style": style.value, "error": str(e)}
        duration_ms = round((time.perf_counter() - start) * 1000)

        found, accuracy = symbol_accuracy(result.output, case.expected_symbols)
        return {
            "id": case.id,
            "model": model.value,
            "prompt_style": style.value,
            "test_case": case.label,
            "duration_ms": duration_ms,
            "output": result.output,
            "symbols_found": found,
            "symbols_expected": len(case.expected_symbols),
            "accuracy": accuracy,
            "used_fallback": result.used_fallback,
            "skip_reason": state.skip_reason.value if state.skip_reason else None,
            "error": None,
        }
