"""
Reference symbol table (the "Rosetta stone") grouped by category.

Each symbol lists its prose patterns; the first pattern is canonical and is
what the reverse converter emits.
"""

from dataclasses import asdict, dataclass
from functools import lru_cache

from rosetta_llm.utils.text_processing import words


@dataclass(frozen=True)
class SymbolInfo:
    """One notation symbol and the prose that maps to it."""

    symbol: str
    category: str
    patterns: tuple[str, ...]

    @property
    def canonical(self) -> str:
        return self.patterns[0]

    def to_dict(self) -> dict:
        return asdict(self)


SYMBOLS: tuple[SymbolInfo, ...] = (
    # ==========================================================================
    # Quantifiers
    # ==========================================================================
    SymbolInfo("∀", "quantifier", ("for all", "for every", "for each", "forall")),
    SymbolInfo("∃", "quantifier", ("there exists", "there is", "exists", "some")),
    SymbolInfo("∄", "quantifier", ("there is no", "no such", "none")),
    # ==========================================================================
    # Definition
    # ==========================================================================
    SymbolInfo("≜", "definition", ("defined as", "is defined as", "denotes")),
    SymbolInfo("≔", "definition", ("assigned", "is assigned", "becomes", "set to")),
    SymbolInfo("λ", "definition", ("function", "lambda", "maps")),
    # ==========================================================================
    # Logic
    # ==========================================================================
    SymbolInfo("∧", "logic", ("and", "both")),
    SymbolInfo("∨", "logic", ("or", "either")),
    SymbolInfo("¬", "logic", ("not", "otherwise", "else")),
    SymbolInfo("→", "logic", ("then", "leads to", "before")),
    SymbolInfo("⇒", "logic", ("implies", "therefore", "hence")),
    SymbolInfo("↔", "logic", ("if and only if", "iff")),
    SymbolInfo(":", "logic", ("such that", "where")),
    # ==========================================================================
    # Sets
    # ==========================================================================
    SymbolInfo("∈", "set", ("in", "element of", "member of", "belongs to")),
    SymbolInfo("∉", "set", ("not in", "not element of", "not member of")),
    SymbolInfo("⊆", "set", ("subset of", "contained in")),
    SymbolInfo("∪", "set", ("union", "union of")),
    SymbolInfo("∩", "set", ("intersection", "intersection of")),
    SymbolInfo("∅", "set", ("empty set", "empty", "nothing")),
    # ==========================================================================
    # Comparison
    # ==========================================================================
    SymbolInfo("=", "comparison", ("equals", "is equal to", "equal to", "equal")),
    SymbolInfo("≠", "comparison", ("not equal to", "differs from", "unequal")),
    SymbolInfo("≤", "comparison", ("at most", "less than or equal to")),
    SymbolInfo("≥", "comparison", ("at least", "greater than or equal to")),
    SymbolInfo("<", "comparison", ("less than", "below")),
    SymbolInfo(">", "comparison", ("greater than", "above", "more than")),
    SymbolInfo("≡", "comparison", ("equivalent to", "is equivalent to", "identical to")),
    SymbolInfo("≈", "comparison", ("approximately", "approximates", "roughly")),
    SymbolInfo("∝", "comparison", ("proportional to", "correlates with", "correlation")),
    # ==========================================================================
    # Types
    # ==========================================================================
    SymbolInfo("ℕ", "type", ("natural number", "natural numbers", "count")),
    SymbolInfo("ℤ", "type", ("integer", "integers")),
    SymbolInfo("ℝ", "type", ("real number", "real numbers", "real")),
    SymbolInfo("𝔹", "type", ("boolean", "booleans", "flag")),
    SymbolInfo("𝕊", "type", ("string", "strings", "text")),
    # ==========================================================================
    # Truth
    # ==========================================================================
    SymbolInfo("⊤", "truth", ("true", "valid", "allowed")),
    SymbolInfo("⊥", "truth", ("false", "invalid", "rejected")),
    SymbolInfo("⊢", "truth", ("proves", "entails", "derives")),
    SymbolInfo("∎", "truth", ("qed", "done", "end of proof")),
)

_BY_SYMBOL: dict[str, SymbolInfo] = {info.symbol: info for info in SYMBOLS}


@lru_cache
def _pattern_index() -> dict[str, str]:
    """Lower-cased pattern -> symbol. First definition of a pattern wins."""
    index: dict[str, str] = {}
    for info in SYMBOLS:
        for pattern in info.patterns:
            index.setdefault(pattern.lower(), info.symbol)
    return index


def get_all_categories() -> list[str]:
    """Categories in table order."""
    seen: list[str] = []
    for info in SYMBOLS:
        if info.category not in seen:
            seen.append(info.category)
    return seen


def symbols_by_category(category: str) -> list[str]:
    category = category.lower()
    return [info.symbol for info in SYMBOLS if info.category == category]


def prose_to_symbol(pattern: str) -> str | None:
    """Look up the symbol for a prose pattern (case-insensitive)."""
    return _pattern_index().get(" ".join(words(pattern)))


def symbol_to_prose(symbol: str) -> str | None:
    """Canonical prose for a symbol."""
    info = _BY_SYMBOL.get(symbol.strip())
    return info.canonical if info else None


def is_symbol(token: str) -> bool:
    return token in _BY_SYMBOL


def max_pattern_words() -> int:
    return max(len(pattern.split()) for pattern in _pattern_index())
