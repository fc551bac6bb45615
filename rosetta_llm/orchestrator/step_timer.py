"""Async context manager for timing and logging orchestrator steps."""

import time
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from rosetta_llm.config.constants import FallbackStep, log_fallback_step
from rosetta_llm.infrastructure.logging.logger import StructuredLogger


class StepContext:
    """Mutable context for a timed orchestrator step."""

    def __init__(self) -> None:
        self.state: dict[str, Any] = {}

    def record(self, **state: Any) -> None:
        self.state.update(state)


@asynccontextmanager
async def timed_step(
    step: FallbackStep,
    logger: StructuredLogger,
) -> AsyncGenerator[StepContext, None]:
    """Time an orchestrator step and log what it recorded."""
    log_fallback_step(step)
    ctx = StepContext()
    start = time.perf_counter()
    try:
        yield ctx
    finally:
        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.log_step(step.value, ctx.state, duration_ms=elapsed_ms)
