"""
AI Mode: entity resolution - find the catalog entry a free-text title refers to.

The catalog snapshot is always passed in (newest-first, bounded to the recent
window); nothing here reads the store.

Matching: both sides are lower-cased and trimmed. An exact match wins outright.
Otherwise every entry whose title contains the query, or is contained in it, is
a candidate; candidates are scored by difflib similarity and the highest score
wins, ties going to the most recent entry.
"""

from difflib import SequenceMatcher
from typing import Any, Iterable, Mapping, Optional

from ai_mode.schema import MatchedEntry


def normalize_title(title: Any) -> str:
    if not isinstance(title, str):
        return ""
    return title.strip().lower()


def _to_matched_entry(entry: Mapping[str, Any]) -> MatchedEntry:
    return MatchedEntry(id=str(entry["id"]), title=entry["title"], status=entry.get("status"))


def find_matching_entry(title: str, catalog: Iterable[Mapping[str, Any]]) -> Optional[MatchedEntry]:
    """
    Best catalog match for title, or None.
    catalog: rows with at least id and title (status optional), sorted newest-first.
    """
    query = normalize_title(title)
    if not query:
        return None

    best = None
    best_score = -1.0
    for entry in catalog:
        candidate = normalize_title(entry.get("title"))
        if not candidate:
            continue
        if candidate == query:
            return _to_matched_entry(entry)
        if query in candidate or candidate in query:
            score = SequenceMatcher(None, query, candidate).ratio()
            # strict '>' keeps the earliest (most recent) entry on ties
            if score > best_score:
                best, best_score = entry, score

    return _to_matched_entry(best) if best is not None else None
