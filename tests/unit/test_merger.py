"""Tests for the result merger."""

import pytest

from rosetta_llm.config.constants import ConversionTier
from rosetta_llm.errors import MergeInvariantViolation
from rosetta_llm.infrastructure.llm.base import LlmResult
from rosetta_llm.services.conversion.models import PrimaryResult
from rosetta_llm.services.merge.merger import MergePolicy, corroborates, merge

PRIMARY = PrimaryResult(
    output="quantum ∝ entanglement",
    confidence=0.4,
    unmapped=("quantum", "entanglement", "manifests"),
    tier=ConversionTier.STANDARD,
)


def test_higher_model_confidence_wins():
    result = merge(PRIMARY, LlmResult(output="∀x∈S: x≡y", confidence=0.9))
    assert result.output == "∀x∈S: x≡y"
    assert result.confidence == 0.9
    assert result.used_fallback is True
    assert result.unmapped == ()
    assert result.tier is ConversionTier.STANDARD


def test_lower_model_confidence_keeps_deterministic():
    result = merge(PRIMARY, LlmResult(output="something else entirely", confidence=0.2))
    assert result.output == PRIMARY.output
    assert result.confidence == 0.4
    assert result.used_fallback is False
    assert result.unmapped == PRIMARY.unmapped


def test_equal_confidence_keeps_deterministic():
    result = merge(PRIMARY, LlmResult(output="other", confidence=0.4))
    assert result.used_fallback is False


def test_no_model_confidence_uses_floor_when_gaps_exist():
    result = merge(PRIMARY, LlmResult(output="∃q: q ∝ e"))
    assert result.output == "∃q: q ∝ e"
    assert result.confidence == 0.75
    assert result.used_fallback is True


def test_no_model_confidence_keeps_higher_primary_confidence():
    primary = PrimaryResult(output="x ∈ foo", confidence=0.79, unmapped=("foo",))
    result = merge(primary, LlmResult(output="x∈F"), MergePolicy(fallback_floor=0.5))
    assert result.confidence == 0.79
    assert result.used_fallback is True


def test_no_model_confidence_without_gaps_keeps_deterministic():
    primary = PrimaryResult(output="x≜5", confidence=0.6, unmapped=())
    result = merge(primary, LlmResult(output="x := 5"))
    assert result.output == "x≜5"
    assert result.used_fallback is False


def test_corroboration_boosts_confidence():
    result = merge(PRIMARY, LlmResult(output="  quantum ∝ entanglement ", confidence=0.1))
    assert result.output == PRIMARY.output
    assert result.confidence == pytest.approx(0.45)
    assert result.used_fallback is False


def test_corroboration_boost_is_capped():
    primary = PrimaryResult(output="x≜5", confidence=0.98)
    result = merge(primary, LlmResult(output="x≜5", confidence=0.5))
    assert result.confidence == 1.0


def test_corroborates():
    policy = MergePolicy()
    assert corroborates("x ≜ 5", "x  ≜ 5", policy)
    assert not corroborates("x≜5", "∀y∈T", policy)


def test_merge_is_pure():
    llm = LlmResult(output="∀x∈S: x≡y", confidence=0.9)
    assert merge(PRIMARY, llm) == merge(PRIMARY, llm)


def test_empty_primary_output_violates_invariant():
    primary = PrimaryResult(output="", confidence=0.9)
    with pytest.raises(MergeInvariantViolation):
        merge(primary, LlmResult(output="", confidence=0.1))


def test_out_of_range_model_confidence_violates_invariant():
    with pytest.raises(MergeInvariantViolation):
        merge(PRIMARY, LlmResult(output="x", confidence=1.5))
