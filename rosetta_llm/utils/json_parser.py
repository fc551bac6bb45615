"""
JSON Parser utility for extracting JSON from LLM responses.
"""
import json
import logging
import re
from typing import Any, Dict

logger = logging.getLogger(__name__)

_FENCED_OBJECT_RE = re.compile(r"```(?:json)?\s*(\{.*?\})\s*```", re.DOTALL)
_ANY_OBJECT_RE = re.compile(r"(\{.*\})", re.DOTALL)


class JSONParser:
    """Helper class to extract clean JSON from LLM responses."""

    @staticmethod
    def extract_json(text: str) -> Dict[str, Any]:
        """Attempts to extract a JSON object from text.

        Looks at the raw text, then inside <answer> tags, then in code
        blocks, then at any brace-delimited span. Returns an empty dict when
        nothing parses (caller should handle this).
        """
        parsed = JSONParser._loads_object(text)
        if parsed is not None:
            return parsed

        # Try to find JSON inside <answer> tags
        answer_match = re.search(r"<answer>\s*(.*?)\s*</answer>", text, re.DOTALL | re.IGNORECASE)
        if answer_match:
            parsed = JSONParser._search(answer_match.group(1))
            if parsed is not None:
                return parsed

        parsed = JSONParser._search(text)
        if parsed is not None:
            return parsed

        logger.debug("JSONParser: Could not extract JSON from text, returning empty dict")
        return {}

    @staticmethod
    def _search(text: str) -> Dict[str, Any] | None:
        for pattern in (_FENCED_OBJECT_RE, _ANY_OBJECT_RE):
            match = pattern.search(text)
            if match:
                parsed = JSONParser._loads_object(match.group(1))
                if parsed is not None:
                    return parsed
        return JSONParser._loads_object(text)

    @staticmethod
    def _loads_object(text: str) -> Dict[str, Any] | None:
        try:
            value = json.loads(text)
        except (json.JSONDecodeError, TypeError):
            return None
        return value if isinstance(value, dict) else None
