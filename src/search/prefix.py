"""Case-insensitive prefix search over example utterances."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

MIN_QUERY_LENGTH = 3
MAX_RESULTS = 5


def normalize_term(text: str) -> str:
    """Normalize text for prefix comparison (strip surrounding whitespace, lowercase)."""

    return text.strip().lower()


def is_searchable(term: str) -> bool:
    """Short terms are suppressed; the length check uses the raw, untrimmed term."""

    return len(term) >= MIN_QUERY_LENGTH


def search_utterances(utterances: Iterable[Any], term: str, *, limit: int = MAX_RESULTS) -> list[str]:
    """Return the first `limit` utterances starting with `term`, in input order.

    Null, empty and non-string entries are skipped. The returned strings are the original,
    un-normalized utterances.
    """

    needle = normalize_term(term)
    matches: list[str] = []

    for candidate in utterances:
        if not candidate or not isinstance(candidate, str):
            continue
        if normalize_term(candidate).startswith(needle):
            matches.append(candidate)
            if len(matches) >= limit:
                break

    return matches
