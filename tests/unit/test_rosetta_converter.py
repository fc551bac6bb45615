"""Tests for the reference deterministic converter."""

import pytest

from rosetta_llm.config.constants import ConversionTier
from rosetta_llm.services.conversion.primary import PrimaryConverter, ReverseConverter
from rosetta_llm.services.rosetta.converter import RosettaConverter
from rosetta_llm.services.rosetta.symbols import (
    get_all_categories,
    prose_to_symbol,
    symbol_to_prose,
    symbols_by_category,
)

LOW_COVERAGE = "The quantum entanglement manifests probabilistic correlation"


@pytest.fixture
def converter():
    return RosettaConverter()


def test_satisfies_protocols(converter):
    assert isinstance(converter, PrimaryConverter)
    assert isinstance(converter, ReverseConverter)


def test_quantifier_and_membership(converter):
    result = converter.convert("for all x in S")
    assert "∀" in result.output
    assert "∈" in result.output
    assert result.output == "∀x∈S"
    assert result.confidence == 1.0
    assert result.unmapped == ()
    assert result.tier is ConversionTier.MINIMAL


def test_definition_template(converter):
    assert converter.convert("Define x as 5").output == "x≜5"


def test_longest_pattern_wins(converter):
    assert converter.convert("x is less than or equal to y").output == "x≤y"


def test_if_then_else_template(converter):
    result = converter.convert("if valid then proceed else reject")
    assert "→" in result.output
    assert "¬" in result.output
    assert result.unmapped == ("proceed", "reject")
    assert result.confidence == 0.5
    assert result.tier is ConversionTier.STANDARD


def test_low_coverage(converter):
    result = converter.convert(LOW_COVERAGE)
    assert result.confidence == pytest.approx(0.2115)
    assert result.unmapped == ("quantum", "entanglement", "manifests", "probabilistic")
    assert "∝" in result.output
    assert result.output.startswith("𝔸5.1.quantum")
    assert "⟦Λ:Funcs⟧{" in result.output
    assert "⟦Ε⟧⟨δ≜0.21;τ≜◊⟩" in result.output


def test_full_tier_document(converter):
    output = converter.convert("for all x in S", ConversionTier.FULL).output
    assert "ρ≔" in output
    assert "⟦Σ:Types⟧{" in output
    assert "⟦Γ:Rules⟧{\n  ∀x∈S\n}" in output
    assert "⊢valid;∎" in output


def test_unmapped_terms_deduplicated_and_lowercased(converter):
    result = converter.convert("Widget and widget")
    assert result.unmapped == ("widget",)


def test_to_prose_minimal(converter):
    assert converter.to_prose("∀x∈S") == "for all x in S"


def test_to_prose_reads_function_block(converter):
    document = converter.convert("if valid then proceed else reject").output
    prose = converter.to_prose(document)
    assert prose == "true then proceed; not true then reject"


def test_round_trip_is_stable(converter):
    notation = converter.convert("for all x in S").output
    assert converter.convert(converter.to_prose(notation)).output == notation


def test_detect_tier(converter):
    assert converter.detect_tier("for all x in S") is ConversionTier.MINIMAL
    assert converter.detect_tier("zebras gallop quickly") is ConversionTier.FULL
    assert converter.detect_tier(LOW_COVERAGE) is ConversionTier.STANDARD


def test_confidence_of_empty_input():
    assert RosettaConverter.confidence(0, 0) == 0.0


# ==========================================
#  SYMBOL TABLE
# ==========================================


def test_lookup_both_directions():
    assert prose_to_symbol("for all") == "∀"
    assert prose_to_symbol("  For   ALL ") == "∀"
    assert prose_to_symbol("flibbertigibbet") is None
    assert symbol_to_prose("∃") == "there exists"
    assert symbol_to_prose("☃") is None


def test_categories():
    categories = get_all_categories()
    assert categories[0] == "quantifier"
    assert "truth" in categories
    assert symbols_by_category("QUANTIFIER") == ["∀", "∃", "∄"]
    assert symbols_by_category("nope") == []
