"""Tests for fallback prompts."""

from rosetta_llm.config.constants import ConversionTier, PromptStyle
from rosetta_llm.config.prompts import (
    build_aisp_system_prompt,
    build_symbol_reference,
    build_system_prompt,
    build_user_prompt,
    system_prompt_for,
)


def test_user_prompt_names_tier():
    prompt = build_user_prompt("x equals y", ConversionTier.FULL)
    assert "(full tier)" in prompt
    assert '"x equals y"' in prompt
    assert "couldn't be mapped" not in prompt
    assert "Partial conversion" not in prompt


def test_user_prompt_lists_unmapped_terms():
    prompt = build_user_prompt("p", ConversionTier.STANDARD, unmapped=["quantum", "entanglement"])
    assert "quantum, entanglement" in prompt


def test_user_prompt_includes_partial_output():
    prompt = build_user_prompt("p", ConversionTier.MINIMAL, partial_output="quantum ∝ x")
    assert "Partial conversion attempt:\nquantum ∝ x" in prompt


def test_symbol_reference_covers_categories():
    reference = build_symbol_reference()
    assert "### QUANTIFIER" in reference
    assert "- ∀: for all" in reference
    assert "- ≜: defined as" in reference


def test_system_prompt_asks_for_json():
    prompt = build_system_prompt()
    assert '"output"' in prompt
    assert '"confidence"' in prompt
    assert "Minimal Tier" in prompt


def test_system_prompt_for_style():
    assert system_prompt_for(PromptStyle.ENGLISH) == build_system_prompt()
    assert system_prompt_for(PromptStyle.AISP) == build_aisp_system_prompt()
    assert system_prompt_for("aisp") == build_aisp_system_prompt()
