"""In-memory memo of flattened example utterances.

The cache is filled on the first search and never refreshed for the life of the process. With the
`company` scope each company gets its own entry; with the `global` scope the first company to
search fills a single shared entry that every later search uses, whatever its company.
"""

from __future__ import annotations

from typing import Any

from src.config.settings import CacheScope

_GLOBAL_KEY = ""


class UtteranceCache:
    """Utterances keyed by company (or by a single shared key)."""

    def __init__(self, scope: CacheScope = "company") -> None:
        if scope not in ("company", "global"):
            raise ValueError(f"unknown cache scope: {scope!r}")
        self.scope: CacheScope = scope
        self._entries: dict[str, list[Any]] = {}

    def _key(self, company_id: str) -> str:
        return company_id if self.scope == "company" else _GLOBAL_KEY

    def get(self, company_id: str) -> list[Any] | None:
        """Return the cached utterances, or `None` if the entry is missing or empty."""

        return self._entries.get(self._key(company_id)) or None

    def put(self, company_id: str, utterances: list[Any]) -> None:
        self._entries[self._key(company_id)] = utterances

    def reset(self, company_id: str | None = None) -> None:
        """Drop one company's entry, or everything when `company_id` is omitted."""

        if company_id is None:
            self._entries.clear()
        else:
            self._entries.pop(self._key(company_id), None)

    def __len__(self) -> int:
        return len(self._entries)
