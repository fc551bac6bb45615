"""Round-trip verifier: reverse, re-convert, compare."""

import logging
from collections.abc import Callable

from rosetta_llm.config.constants import DEFAULT_ROUND_TRIP_RUNS
from rosetta_llm.config.settings import Settings, get_settings
from rosetta_llm.errors import ReverseConverterError
from rosetta_llm.services.rosetta.converter import RosettaConverter
from rosetta_llm.services.verification.models import (
    Divergence,
    RoundTripRound,
    RoundTripRun,
    VerificationReport,
)
from rosetta_llm.utils.text_processing import normalize_text, similarity

logger = logging.getLogger(__name__)


def verify(
    forward_output: str,
    reverse_fn: Callable[[str], str],
    repeat_count: int,
    forward_fn: Callable[[str], str],
    tolerance: float = 0.9,
) -> VerificationReport:
    """
    Check that notation survives reverse conversion and re-conversion.

    Each run reverses ``forward_output`` to prose, converts that prose
    forward again and compares against ``forward_output``. A run matches
    when the outputs are equal after whitespace normalization or their
    similarity is at least ``tolerance``.

    Raises:
        ValueError: repeat_count < 1
        ReverseConverterError: the reverse converter failed
    """
    if repeat_count < 1:
        raise ValueError(f"repeat_count must be >= 1, got {repeat_count}")

    report = VerificationReport()
    expected = normalize_text(forward_output)

    for run in range(repeat_count):
        try:
            prose = reverse_fn(forward_output)
        except Exception as e:
            logger.error("Reverse conversion failed on run %d: %s", run, e, exc_info=True)
            raise ReverseConverterError(
                f"Reverse conversion failed: {e}", context={"run": run}
            ) from e

        actual = forward_fn(prose)
        exact = normalize_text(actual) == expected
        score = 1.0 if exact else similarity(forward_output, actual)
        report.runs.append(
            RoundTripRun(run=run, prose=prose, output=actual, similarity=score, exact=exact)
        )
        if not exact and score < tolerance:
            report.divergences.append(
                Divergence(run=run, expected=forward_output, actual=actual, similarity=score)
            )

    if report.divergences:
        logger.warning(
            "Round trip diverged in %d of %d runs", len(report.divergences), repeat_count
        )
    return report


def verify_round_trip(
    text: str,
    repeat_count: int = DEFAULT_ROUND_TRIP_RUNS,
    converter: RosettaConverter | None = None,
    settings: Settings | None = None,
) -> VerificationReport:
    """
    Round-trip prose through the converter.

    Chains ``repeat_count`` rounds of prose -> notation -> prose, tracking
    how far each round's prose drifts from the original, then verifies the
    first notation against the reverse/forward pair.
    """
    if not text or not text.strip():
        raise ValueError("text must be non-empty")
    if repeat_count < 1:
        raise ValueError(f"repeat_count must be >= 1, got {repeat_count}")

    settings = settings or get_settings()
    converter = converter or RosettaConverter()

    def forward(prose: str) -> str:
        return converter.convert(prose).output

    rounds: list[RoundTripRound] = []
    current = text
    for index in range(1, repeat_count + 1):
        notation = forward(current)
        try:
            current = converter.to_prose(notation)
        except Exception as e:
            raise ReverseConverterError(
                f"Reverse conversion failed: {e}", context={"round": index}
            ) from e
        rounds.append(
            RoundTripRound(
                round=index,
                notation=notation,
                prose=current,
                similarity=similarity(text, current),
            )
        )

    report = verify(
        rounds[0].notation,
        converter.to_prose,
        repeat_count,
        forward,
        tolerance=settings.round_trip_tolerance,
    )
    report.rounds = rounds
    report.final_similarity = rounds[-1].similarity
    report.drifted = report.final_similarity < settings.round_trip_drift_threshold

    logger.info(
        "Round trip over %d rounds: final similarity %.2f%s",
        repeat_count,
        report.final_similarity,
        " (drifted)" if report.drifted else "",
    )
    return report
