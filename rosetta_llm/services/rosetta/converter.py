"""Reference deterministic converter (prose <-> AISP notation)."""

import logging
import re

from rosetta_llm.config.constants import AISP_VERSION, ConversionTier
from rosetta_llm.services.conversion.models import PrimaryResult
from rosetta_llm.services.rosetta.symbols import (
    is_symbol,
    max_pattern_words,
    prose_to_symbol,
    symbol_to_prose,
)
from rosetta_llm.services.tier.selector import TierPolicy, select_tier
from rosetta_llm.utils.text_processing import (
    STOPWORDS,
    content_words,
    is_word,
    normalize_text,
    tokenize,
)

logger = logging.getLogger(__name__)

# Clause templates that need reordering, applied before phrase matching.
_TEMPLATES: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"\bdefine\s+(\w+)\s+as\s+(\w+)", re.IGNORECASE), r"\1 ≜ \2"),
    (
        re.compile(
            r"\bif\s+([^,.;]+?)\s+then\s+([^,.;]+?)\s+else\s+([^,.;]+)", re.IGNORECASE
        ),
        r"\1 → \2 ; ¬ \1 → \3",
    ),
    (re.compile(r"\bif\s+([^,.;]+?)\s+then\s+", re.IGNORECASE), r"\1 → "),
)

# Symbols rendered without surrounding spaces
_TIGHT_SYMBOLS = frozenset("≜≔∈∉⊆∪∩=≠≤≥<>≡≈∝→⇒↔∧∨")
_PREFIX_SYMBOLS = frozenset("∀∃∄¬λ")
_TRAILING_PUNCT = frozenset(",;.:!?)]")

_HEADER_PREFIXES = ("𝔸", "γ≔", "ρ≔", "⟦Ε⟧")
_FUNCS_BLOCK_RE = re.compile(r"⟦Λ:Funcs⟧\{(.*?)\}", re.DOTALL)
_BLOCK_LINE_RE = re.compile(r"^\s*(⟦[^⟧]*⟧\{?|\})\s*$")


class RosettaConverter:
    """
    Greedy phrase-table converter.

    Longest prose pattern wins; single-letter variables and numbers pass
    through; stopwords are dropped. Confidence is the share of content
    characters that were mapped.
    """

    def __init__(self, tier_policy: TierPolicy | None = None):
        self.tier_policy = tier_policy or TierPolicy()
        self._window = max_pattern_words()

    # ------------------------------------------------------------------
    # Forward
    # ------------------------------------------------------------------

    def convert(self, prose: str, tier_hint: ConversionTier | None = None) -> PrimaryResult:
        """Convert prose to notation at the hinted (or detected) tier."""
        text = normalize_text(prose)
        body, mapped_chars, total_chars, unmapped = self._convert_body(text)
        confidence = self.confidence(total_chars, mapped_chars)
        tier = select_tier(text, unmapped, tier_hint, self.tier_policy)
        output = self._render(text, body, tier, confidence, unmapped)
        logger.debug(
            "Rosetta converted %d chars (tier=%s, confidence=%.2f, unmapped=%d)",
            len(text),
            tier.value,
            confidence,
            len(unmapped),
        )
        return PrimaryResult(
            output=output, confidence=confidence, unmapped=tuple(unmapped), tier=tier
        )

    def detect_tier(self, prose: str) -> ConversionTier:
        _, _, _, unmapped = self._convert_body(normalize_text(prose))
        return select_tier(prose, unmapped, None, self.tier_policy)

    @staticmethod
    def confidence(total_chars: int, mapped_chars: int) -> float:
        if total_chars <= 0:
            return 0.0
        return round(min(mapped_chars / total_chars, 1.0), 4)

    def _convert_body(self, text: str) -> tuple[str, int, int, list[str]]:
        templated = text
        for pattern, replacement in _TEMPLATES:
            templated = pattern.sub(replacement, templated)

        tokens = tokenize(templated)
        out: list[str] = []
        unmapped: list[str] = []
        mapped_chars = 0
        total_chars = 0
        i = 0
        while i < len(tokens):
            token = tokens[i]
            if not is_word(token):
                if is_symbol(token):
                    mapped_chars += len(token)
                    total_chars += len(token)
                out.append(token)
                i += 1
                continue

            match_len, symbol = self._longest_match(tokens, i)
            if symbol is not None:
                span = tokens[i : i + match_len]
                chars = sum(len(t) for t in span)
                mapped_chars += chars
                total_chars += chars
                out.append(symbol)
                i += match_len
                continue

            lower = token.lower()
            if lower in STOPWORDS:
                i += 1
                continue
            total_chars += len(token)
            if self._is_literal(token):
                mapped_chars += len(token)
            elif lower not in unmapped:
                unmapped.append(lower)
            out.append(token)
            i += 1

        return self._join(out), mapped_chars, total_chars, unmapped

    def _longest_match(self, tokens: list[str], start: int) -> tuple[int, str | None]:
        """Longest run of word tokens starting at `start` that is a known pattern."""
        for length in range(self._window, 0, -1):
            span = tokens[start : start + length]
            if len(span) < length or not all(is_word(t) for t in span):
                continue
            symbol = prose_to_symbol(" ".join(span))
            if symbol is not None:
                return length, symbol
        return 0, None

    @staticmethod
    def _is_literal(token: str) -> bool:
        return len(token) == 1 or token.replace(".", "", 1).isdigit()

    @staticmethod
    def _join(tokens: list[str]) -> str:
        parts: list[str] = []
        for token in tokens:
            if not parts:
                parts.append(token)
                continue
            prev = parts[-1]
            tight = (
                token in _TIGHT_SYMBOLS
                or token in _TRAILING_PUNCT
                or prev in _TIGHT_SYMBOLS
                or prev in _PREFIX_SYMBOLS
            )
            parts.append(token if tight else f" {token}")
        return "".join(parts).strip()

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def _render(
        self,
        prose: str,
        body: str,
        tier: ConversionTier,
        confidence: float,
        unmapped: list[str],
    ) -> str:
        if tier is ConversionTier.MINIMAL:
            return body

        name = self._document_name(prose)
        tau = "◊⁺⁺" if confidence >= 0.8 else "◊⁺" if confidence >= 0.5 else "◊"
        lines = [f"𝔸{AISP_VERSION}.{name}", f"γ≔{name}"]
        if tier is ConversionTier.FULL:
            lines.append(f"ρ≔⟨{name},types,rules⟩")
        lines += ["", "⟦Ω:Meta⟧{", f"  domain≜{name}"]
        if tier is ConversionTier.FULL:
            lines += ["  version≜1.0.0", "  ∀D∈AISP:Ambig(D)<0.02"]
        lines.append("}")

        if tier is ConversionTier.FULL:
            types = sorted({t for t in tokenize(body) if t in "ℕℤℝ𝔹𝕊"})
            rules = [clause.strip() for clause in body.split(";") if "→" in clause or "∀" in clause]
            lines += ["", "⟦Σ:Types⟧{"] + [f"  {t}" for t in types] + ["}"]
            lines += ["", "⟦Γ:Rules⟧{"] + [f"  {r}" for r in rules] + ["}"]

        lines += ["", "⟦Λ:Funcs⟧{", f"  {body}", "}", ""]
        evidence = f"⟦Ε⟧⟨δ≜{confidence:.2f};τ≜{tau}"
        if tier is ConversionTier.FULL:
            evidence += f";φ≜{round(confidence * 100)};⊢valid;∎"
        lines.append(evidence + "⟩")
        return "\n".join(lines)

    @staticmethod
    def _document_name(prose: str) -> str:
        for word in sorted(content_words(prose), key=lambda w: prose.lower().find(w)):
            if len(word) > 3 and word.isalpha():
                return word
        return "doc"

    # ------------------------------------------------------------------
    # Reverse
    # ------------------------------------------------------------------

    def to_prose(self, symbolic: str) -> str:
        """Convert notation back to prose using canonical patterns."""
        body = self._extract_body(symbolic)
        out: list[str] = []
        for token in tokenize(body):
            prose = symbol_to_prose(token)
            out.append(prose if prose is not None else token)
        text = " ".join(out)
        text = re.sub(r"\s+([,;.!?)\]])", r"\1", text)
        return normalize_text(text)

    @staticmethod
    def _extract_body(symbolic: str) -> str:
        match = _FUNCS_BLOCK_RE.search(symbolic)
        if match:
            return match.group(1).strip()
        kept = [
            line
            for line in symbolic.splitlines()
            if line.strip()
            and not line.strip().startswith(_HEADER_PREFIXES)
            and not _BLOCK_LINE_RE.match(line)
        ]
        return " ".join(line.strip() for line in kept)
