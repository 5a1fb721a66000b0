"""
AI Mode: intent classification - routes a request to query mode or action mode.

Local keyword heuristic, no LLM call. The lexicon favors recall over precision.
"""

import re
from typing import List

from ai_mode.actions import ACTION, QUERY

ACTION_KEYWORDS = (
    "add", "create", "new", "update", "change", "modify", "mark", "set", "delete", "remove",
)

_ACTION_PATTERN = re.compile(
    r"\b("
    r"add(?:s|ed|ing)?"
    r"|creat(?:e|es|ed|ing)"
    r"|new"
    r"|updat(?:e|es|ed|ing)"
    r"|chang(?:e|es|ed|ing)"
    r"|modif(?:y|ies|ied|ying)"
    r"|mark(?:s|ed|ing)?"
    r"|set(?:s|ting)?"
    r"|delet(?:e|es|ed|ing)"
    r"|remov(?:e|es|ed|ing)"
    r")\b",
    re.IGNORECASE,
)


def find_action_keywords(text: str) -> List[str]:
    """Action lexemes present in text, lower-cased, in order of appearance."""
    if not text:
        return []
    return [m.group(1).lower() for m in _ACTION_PATTERN.finditer(text)]


def classify_intent(text: str) -> str:
    """Return "action" if any action lexeme occurs in text, else "query"."""
    return ACTION if find_action_keywords(text) else QUERY
