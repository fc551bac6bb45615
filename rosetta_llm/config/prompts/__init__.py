"""System prompts for the conversion fallback."""

from rosetta_llm.config.prompts.conversion import (
    build_aisp_system_prompt,
    build_symbol_reference,
    build_system_prompt,
    build_user_prompt,
    system_prompt_for,
)

__all__ = [
    "build_aisp_system_prompt",
    "build_symbol_reference",
    "build_system_prompt",
    "build_user_prompt",
    "system_prompt_for",
]
