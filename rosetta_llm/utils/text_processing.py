"""Text processing utilities."""

import re

# Words that carry no meaning for symbol mapping; never reported as unmapped.
STOPWORDS = frozenset(
    {
        "a",
        "an",
        "the",
        "is",
        "are",
        "be",
        "been",
        "of",
        "to",
        "that",
        "this",
        "with",
        "which",
        "must",
        "should",
        "will",
    }
)

_TOKEN_RE = re.compile(r"\w+|[^\w\s]", re.UNICODE)
_SENTENCE_END_RE = re.compile(r"[.!?]+(?:\s|$)")
_FENCE_RE = re.compile(r"^```[\w-]*\s*\n?(.*?)\n?```$", re.DOTALL)


def normalize_text(text: str) -> str:
    """
    Normalize text for processing.

    Args:
        text: Input text

    Returns:
        Normalized text
    """
    # Remove extra whitespace
    text = re.sub(r"\s+", " ", text)
    # Trim
    text = text.strip()
    return text


def tokenize(text: str) -> list[str]:
    """Split text into word tokens and single non-word characters."""
    return _TOKEN_RE.findall(text)


def is_word(token: str) -> bool:
    return bool(token) and (token[0].isalnum() or token[0] == "_")


def words(text: str) -> list[str]:
    """Lower-cased word tokens."""
    return [t.lower() for t in tokenize(text) if is_word(t)]


def content_words(text: str) -> set[str]:
    """Distinct lower-cased words excluding stopwords."""
    return {w for w in words(text) if w not in STOPWORDS}


def count_sentences(text: str) -> int:
    stripped = text.strip()
    if not stripped:
        return 0
    ends = len(_SENTENCE_END_RE.findall(stripped))
    # A trailing fragment without terminal punctuation is still a sentence
    if not _SENTENCE_END_RE.search(stripped[-1] + " "):
        ends += 1
    return max(ends, 1)


def similarity(a: str, b: str) -> float:
    """
    Token-level Jaccard similarity between two strings.

    Symbols count as tokens, so this works for prose and notation alike.
    Two empty strings are identical.
    """
    tokens_a = {t.lower() for t in tokenize(a)}
    tokens_b = {t.lower() for t in tokenize(b)}
    if not tokens_a and not tokens_b:
        return 1.0
    union = tokens_a | tokens_b
    return round(len(tokens_a & tokens_b) / len(union), 4)


def strip_code_fences(text: str) -> str:
    """Remove a surrounding markdown code fence and stray backticks."""
    stripped = text.strip()
    match = _FENCE_RE.match(stripped)
    if match:
        stripped = match.group(1).strip()
    return stripped.strip("`").strip()
