"""Prompt benchmark for the LLM fallback."""
