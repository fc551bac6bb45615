"""Reference deterministic converter and symbol table."""

from rosetta_llm.services.rosetta.converter import RosettaConverter
from rosetta_llm.services.rosetta.symbols import (
    SYMBOLS,
    SymbolInfo,
    get_all_categories,
    prose_to_symbol,
    symbol_to_prose,
    symbols_by_category,
)

__all__ = [
    "RosettaConverter",
    "SYMBOLS",
    "SymbolInfo",
    "get_all_categories",
    "prose_to_symbol",
    "symbol_to_prose",
    "symbols_by_category",
]
