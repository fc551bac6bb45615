"""Tests for model response parsing."""

import pytest

from rosetta_llm.errors import ProviderInvalidResponseError
from rosetta_llm.infrastructure.llm.parsing import parse_model_response


def test_structured_json():
    result = parse_model_response('{"output": "∀x∈S", "confidence": 0.9}', "p", "m")
    assert result.output == "∀x∈S"
    assert result.confidence == 0.9
    assert result.provider == "p"
    assert result.model == "m"


def test_structured_json_in_code_block():
    text = '```json\n{"output": "x≜5", "confidence": 0.7}\n```'
    result = parse_model_response(text, "p", "m")
    assert result.output == "x≜5"
    assert result.confidence == 0.7


def test_structured_json_in_answer_tags():
    result = parse_model_response('<answer>{"output": "¬p"}</answer>', "p", "m")
    assert result.output == "¬p"
    assert result.confidence is None


def test_plain_notation_has_no_confidence():
    result = parse_model_response("  ∀x: P(x)  ", "p", "m", tokens_used=12)
    assert result.output == "∀x: P(x)"
    assert result.confidence is None
    assert result.tokens_used == 12


def test_notation_with_braces_is_not_mistaken_for_json():
    text = "⟦Λ:Funcs⟧{\n  x≜5\n}"
    result = parse_model_response(text, "p", "m")
    assert result.output == text


def test_numeric_string_confidence_accepted():
    result = parse_model_response('{"output": "x", "confidence": "0.5"}', "p", "m")
    assert result.confidence == 0.5


@pytest.mark.parametrize(
    "text",
    [
        "",
        "   ",
        '{"output": "", "confidence": 0.9}',
        '{"output": "x", "confidence": 1.5}',
        '{"output": "x", "confidence": -0.1}',
        '{"output": "x", "confidence": "high"}',
        '{"output": "x", "confidence": true}',
        '{"output": "x", "confidence": [0.5]}',
    ],
)
def test_invalid_responses(text):
    with pytest.raises(ProviderInvalidResponseError):
        parse_model_response(text, "p", "m")
