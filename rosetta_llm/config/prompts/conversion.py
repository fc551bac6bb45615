"""
Fallback conversion prompts.
"""

from collections.abc import Sequence
from functools import lru_cache

from rosetta_llm.config.constants import AISP_VERSION, ConversionTier, PromptStyle
from rosetta_llm.services.rosetta.symbols import (
    get_all_categories,
    symbol_to_prose,
    symbols_by_category,
)


def build_symbol_reference() -> str:
    """Symbol reference grouped by category, one `symbol: prose` line each."""
    sections = []
    for category in get_all_categories():
        lines = [f"### {category.upper()}"]
        for symbol in symbols_by_category(category):
            prose = symbol_to_prose(symbol)
            if prose:
                lines.append(f"- {symbol}: {prose}")
        sections.append("\n".join(lines))
    return "\n\n".join(sections)


@lru_cache
def build_system_prompt() -> str:
    """Build the English system prompt for the fallback model."""

    prompt = (
        f"You are an AISP (AI Symbolic Programming) conversion specialist.\n\n"
        f"Convert natural language prose to AISP {AISP_VERSION} symbolic notation using these rules:\n\n"
        "## Symbol Reference (Rosetta Stone)\n\n"
        f"{build_symbol_reference()}\n\n"
        "## Output Format by Tier\n\n"
        "### Minimal Tier\n"
        "Direct symbol substitution only. Example:\n"
        'Input: "Define x as 5"\n'
        "Output: x≜5\n\n"
        "### Standard Tier\n"
        "Include header block with metadata:\n"
        f"𝔸{AISP_VERSION}.[name]\n"
        "γ≔[name]\n\n"
        "⟦Ω:Meta⟧{\n  domain≜[name]\n}\n\n"
        "⟦Λ:Funcs⟧{\n  [symbol conversion]\n}\n\n"
        "⟦Ε⟧⟨δ≜0.70;τ≜◊⁺⟩\n\n"
        "### Full Tier\n"
        "Complete AISP document with all blocks:\n"
        f"𝔸{AISP_VERSION}.[name]\n"
        "γ≔[name].definitions\n"
        "ρ≔⟨[name],types,rules⟩\n\n"
        "⟦Ω:Meta⟧{\n  domain≜[name]\n  version≜1.0.0\n  ∀D∈AISP:Ambig(D)<0.02\n}\n\n"
        "⟦Σ:Types⟧{\n  [inferred types]\n}\n\n"
        "⟦Γ:Rules⟧{\n  [inferred rules]\n}\n\n"
        "⟦Λ:Funcs⟧{\n  [symbol conversion]\n}\n\n"
        "⟦Ε⟧⟨δ≜0.82;φ≜100;τ≜◊⁺⁺;⊢valid;∎⟩\n\n"
        "## Rules\n"
        "1. Preserve semantic meaning precisely\n"
        "2. Use appropriate Unicode symbols from the reference\n"
        "3. For ambiguous phrases, choose the most logical interpretation\n"
        "4. Never hallucinate symbols not in the reference\n"
        "5. Build on the partial conversion when one is given; do not discard mapped symbols\n\n"
        "## Response\n"
        "Respond with a single JSON object and nothing else:\n"
        '{"output": "<the AISP notation>", "confidence": <number between 0 and 1>}\n'
        "`confidence` is your estimate that the notation preserves the meaning of the prose."
    )

    return prompt


@lru_cache
def build_aisp_system_prompt() -> str:
    """Build the terse AISP-register system prompt."""

    prompt = (
        f"𝔸{AISP_VERSION}.rosetta\n"
        "γ≔prose→AISP\n\n"
        "⟦Ω:Meta⟧{\n"
        "  role≜converter\n"
        "  ∀p∈Prose:out(p)≜AISP(p)\n"
        "  ¬explain ∧ ¬hallucinate\n"
        "}\n\n"
        "⟦Σ:Symbols⟧{\n"
        f"{build_symbol_reference()}\n"
        "}\n\n"
        "⟦Γ:Tiers⟧{\n"
        "  minimal≜symbols only\n"
        "  standard≜header+⟦Ω⟧+⟦Λ⟧+⟦Ε⟧\n"
        "  full≜header+⟦Ω⟧+⟦Σ⟧+⟦Γ⟧+⟦Λ⟧+⟦Ε⟧\n"
        "}\n\n"
        "⟦Λ:Out⟧{ output≔AISP notation only }"
    )

    return prompt


def build_user_prompt(
    prose: str,
    tier: ConversionTier,
    unmapped: Sequence[str] = (),
    partial_output: str | None = None,
) -> str:
    """Build user input for the fallback model."""

    prompt = f'Convert this prose to AISP ({ConversionTier(tier).value} tier):\n\n"{prose}"'

    if unmapped:
        prompt += (
            "\n\nNote: These phrases couldn't be mapped deterministically: "
            f"{', '.join(unmapped)}"
        )

    if partial_output:
        prompt += f"\n\nPartial conversion attempt:\n{partial_output}"

    return prompt


def system_prompt_for(style: PromptStyle) -> str:
    """System prompt in the requested register."""
    if PromptStyle(style) is PromptStyle.AISP:
        return build_aisp_system_prompt()
    return build_system_prompt()
