"""Fallback orchestrator: deterministic conversion gated by an LLM fallback."""

import asyncio
import dataclasses
import logging

from rosetta_llm.config.constants import (
    ConversionTier,
    FallbackState,
    FallbackStep,
    LlmModel,
    SkipReason,
)
from rosetta_llm.config.settings import Settings, get_settings
from rosetta_llm.errors import (
    PrimaryConverterError,
    ProviderError,
    ProviderInvalidResponseError,
    ProviderTimeoutError,
)
from rosetta_llm.infrastructure.llm.base import LlmProvider, LlmResult, ProviderRequest
from rosetta_llm.infrastructure.llm.registry import create_provider
from rosetta_llm.infrastructure.logging.logger import StructuredLogger
from rosetta_llm.orchestrator.state import FallbackRunState
from rosetta_llm.orchestrator.step_timer import timed_step
from rosetta_llm.services.conversion.models import (
    ConversionOptions,
    ConversionResult,
    PrimaryResult,
    TokenStats,
)
from rosetta_llm.services.conversion.primary import PrimaryConverter
from rosetta_llm.services.merge.merger import MergePolicy, merge
from rosetta_llm.services.rosetta.converter import RosettaConverter
from rosetta_llm.services.tier.selector import TierPolicy, select_tier
from rosetta_llm.utils.text_processing import strip_code_fences

logger = logging.getLogger(__name__)


class FallbackOrchestrator:
    """
    Runs the deterministic converter and, when its confidence is too low,
    exactly one provider call whose result is merged back in.

    Provider failures never fail the conversion: the deterministic result is
    returned with used_fallback=False. Primary converter failures and merge
    invariant violations propagate.
    """

    def __init__(
        self,
        settings: Settings,
        primary: PrimaryConverter | None = None,
        provider: LlmProvider | None = None,
        tier_policy: TierPolicy | None = None,
        merge_policy: MergePolicy | None = None,
    ):
        """Initialize orchestrator with settings and optional collaborators."""
        self.settings = settings
        self.tier_policy = tier_policy or TierPolicy.from_settings(settings)
        self.merge_policy = merge_policy or MergePolicy.from_settings(settings)
        self.primary = primary or RosettaConverter(self.tier_policy)
        self.provider = provider
        self.structured_logger = StructuredLogger(__name__)

    async def convert(
        self,
        prose: str,
        options: ConversionOptions | None = None,
        timeout: float | None = None,
    ) -> ConversionResult:
        """Convert prose, falling back to the provider when needed."""
        result, _ = await self.convert_with_state(prose, options, timeout)
        return result

    async def convert_with_state(
        self,
        prose: str,
        options: ConversionOptions | None = None,
        timeout: float | None = None,
    ) -> tuple[ConversionResult, FallbackRunState]:
        """
        Convert prose and also return the decision trail.

        Args:
            prose: Text to convert (non-empty)
            options: Per-request options; settings defaults when omitted
            timeout: Bound on the provider call in seconds; settings default when omitted

        Returns:
            (final result, run state)

        Raises:
            ValueError: prose is empty
            PrimaryConverterError: the deterministic converter failed
            MergeInvariantViolation: the merged result broke its invariants
        """
        if not prose or not prose.strip():
            raise ValueError("prose must be non-empty")

        opts = options or ConversionOptions.from_settings(self.settings)
        state = FallbackRunState(prose=prose)

        primary = await self._step_primary(state, prose, opts)
        deterministic = self._deterministic_result(prose, primary)

        if not await self._step_evaluate(state, primary, opts):
            return deterministic, state

        model = (opts.llm_model or LlmModel(self.settings.default_llm_model)).value
        provider = self.provider or self._resolve_provider(state, model)
        if provider is None:
            return deterministic, state
        owns_provider = self.provider is None
        state.provider = provider.name
        state.model = provider.model
        bound = timeout if timeout is not None else self.settings.provider_timeout

        try:
            if not await self._step_availability(state, provider, bound):
                return deterministic, state

            tier = await self._step_tier(state, prose, primary, opts)
            request = ProviderRequest(
                prose=prose,
                tier=tier,
                unmapped=primary.unmapped,
                partial_output=primary.output or None,
                use_aisp_prompt=opts.use_aisp_prompt,
            )

            llm = await self._step_provider(state, provider, request, bound)
            if llm is None:
                return deterministic, state

            return await self._step_merge(state, prose, primary, llm), state
        finally:
            if owns_provider:
                await provider.close()

    # ------------------------------------------------------------------
    # Steps
    # ------------------------------------------------------------------

    async def _step_primary(
        self, state: FallbackRunState, prose: str, opts: ConversionOptions
    ) -> PrimaryResult:
        async with timed_step(FallbackStep.PRIMARY, self.structured_logger) as step:
            try:
                primary = self.primary.convert(prose, opts.tier_override)
            except PrimaryConverterError as e:
                self.structured_logger.log_error(FallbackStep.PRIMARY.value, e)
                raise
            except Exception as e:
                self.structured_logger.log_error(FallbackStep.PRIMARY.value, e)
                raise PrimaryConverterError(
                    f"Primary converter failed: {e}", context={"prose_chars": len(prose)}
                ) from e
            state.primary = primary
            step.record(confidence=primary.confidence, unmapped=len(primary.unmapped))
        return primary

    async def _step_evaluate(
        self, state: FallbackRunState, primary: PrimaryResult, opts: ConversionOptions
    ) -> bool:
        """Return True when the fallback should be attempted."""
        state.transition(FallbackState.EVALUATE)
        async with timed_step(FallbackStep.EVALUATE, self.structured_logger) as step:
            if not opts.enable_llm_fallback:
                state.skip(SkipReason.DISABLED)
            elif primary.confidence >= opts.confidence_threshold:
                state.skip(SkipReason.CONFIDENT)
            step.record(
                confidence=primary.confidence,
                threshold=opts.confidence_threshold,
                enabled=opts.enable_llm_fallback,
                skip_reason=state.skip_reason.value if state.skip_reason else None,
            )
        return state.current is not FallbackState.SKIPPED

    def _resolve_provider(self, state: FallbackRunState, model: str) -> LlmProvider | None:
        """Registry lookup for the configured provider. None when the name is unknown."""
        try:
            return create_provider(self.settings, model)
        except KeyError as e:
            logger.warning("Fallback provider not resolved: %s; keeping deterministic result", e)
            state.provider = self.settings.default_provider
            state.model = model
            state.skip(SkipReason.UNAVAILABLE)
            return None

    async def _step_availability(
        self, state: FallbackRunState, provider: LlmProvider, bound: float
    ) -> bool:
        async with timed_step(FallbackStep.AVAILABILITY, self.structured_logger) as step:
            try:
                available = await asyncio.wait_for(provider.is_available(), timeout=bound)
            except Exception as e:
                logger.warning("Availability check for %s raised: %s", provider.name, e)
                available = False
            step.record(provider=provider.name, available=available)
        if not available:
            logger.info("Fallback provider %s unavailable; keeping deterministic result", provider.name)
            state.skip(SkipReason.UNAVAILABLE)
        return available

    async def _step_tier(
        self,
        state: FallbackRunState,
        prose: str,
        primary: PrimaryResult,
        opts: ConversionOptions,
    ) -> ConversionTier:
        async with timed_step(FallbackStep.TIER, self.structured_logger) as step:
            tier = select_tier(prose, primary.unmapped, opts.tier_override, self.tier_policy)
            state.tier = tier
            step.record(tier=tier.value, override=opts.tier_override is not None)
        return tier

    async def _step_provider(
        self,
        state: FallbackRunState,
        provider: LlmProvider,
        request: ProviderRequest,
        bound: float,
    ) -> LlmResult | None:
        """Make the single provider call. Returns None when the fallback failed."""
        state.transition(FallbackState.FALLBACK_INVOKED)

        async with timed_step(FallbackStep.PROVIDER, self.structured_logger) as step:
            step.record(provider=provider.name, model=provider.model, tier=request.tier.value)
            try:
                llm = await asyncio.wait_for(provider.convert(request), timeout=bound)
                llm = self._repair(llm, provider)
            except asyncio.TimeoutError as e:
                error: Exception = ProviderTimeoutError(
                    f"Provider call exceeded {bound}s",
                    timeout=bound,
                    provider=provider.name,
                    model=provider.model,
                )
                error.__cause__ = e
                self._absorb(state, error, soft=True)
                step.record(outcome="timeout")
                return None
            except ProviderError as e:
                self._absorb(state, e, soft=True)
                step.record(outcome=type(e).__name__)
                return None
            except Exception as e:
                # Provider bug; still never fails the conversion
                self._absorb(state, e, soft=False)
                step.record(outcome="unexpected_error")
                return None

            step.record(outcome="success", model_confidence=llm.confidence)
        return llm

    async def _step_merge(
        self,
        state: FallbackRunState,
        prose: str,
        primary: PrimaryResult,
        llm: LlmResult,
    ) -> ConversionResult:
        async with timed_step(FallbackStep.MERGE, self.structured_logger) as step:
            result = merge(primary, llm, self.merge_policy)
            if result.used_fallback:
                result = dataclasses.replace(result, tier=state.tier)
            result = dataclasses.replace(result, tokens=TokenStats.measure(prose, result.output))
            state.transition(FallbackState.MERGED)
            step.record(used_fallback=result.used_fallback, confidence=result.confidence)
        return result

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _deterministic_result(prose: str, primary: PrimaryResult) -> ConversionResult:
        return ConversionResult(
            output=primary.output,
            confidence=primary.confidence,
            used_fallback=False,
            tier=primary.tier,
            unmapped=primary.unmapped,
            tokens=TokenStats.measure(prose, primary.output),
        )

    @staticmethod
    def _repair(llm: LlmResult, provider: LlmProvider) -> LlmResult:
        """Strip fences and whitespace; reject what cannot be used."""
        output = strip_code_fences(llm.output or "")
        if not output:
            raise ProviderInvalidResponseError(
                "Provider returned empty output",
                raw_response=llm.output,
                provider=provider.name,
                model=provider.model,
            )
        if llm.confidence is not None and not 0.0 <= llm.confidence <= 1.0:
            raise ProviderInvalidResponseError(
                f"Provider confidence {llm.confidence} outside [0, 1]",
                provider=provider.name,
                model=provider.model,
            )
        return dataclasses.replace(llm, output=output)

    def _absorb(self, state: FallbackRunState, error: Exception, soft: bool) -> None:
        state.error = (
            error.to_dict()
            if isinstance(error, ProviderError)
            else {"error_type": type(error).__name__, "message": str(error)}
        )
        self.structured_logger.log_error(
            FallbackStep.PROVIDER.value,
            error,
            context={"provider": state.provider, "model": state.model},
            soft=soft,
        )
        state.skip(SkipReason.PROVIDER_ERROR)


async def convert_with_fallback(
    prose: str,
    options: ConversionOptions | None = None,
    *,
    settings: Settings | None = None,
    primary: PrimaryConverter | None = None,
    provider: LlmProvider | None = None,
    timeout: float | None = None,
) -> ConversionResult:
    """
    Convert prose to AISP notation with an optional LLM fallback.

    Runs the deterministic converter first; if fallback is enabled and its
    confidence is below the threshold, asks the provider once and merges the
    answer. Always returns a result unless the deterministic converter itself
    fails.
    """
    orchestrator = FallbackOrchestrator(
        settings or get_settings(), primary=primary, provider=provider
    )
    return await orchestrator.convert(prose, options, timeout=timeout)
