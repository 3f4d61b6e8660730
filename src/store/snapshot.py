"""Helpers for working with JSON values returned by the Realtime Database.

The REST API returns plain JSON, so two details of the database have to be restored locally:

- Child ordering. A JSON object carries no reliable order, so children are re-sorted the way the
  database orders keys: keys that parse as 32-bit integers first (numerically), then all other
  keys lexicographically.
- Arrays. Nodes whose keys are all small integers come back as JSON arrays (with `null` holes).
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from typing import Any

_INT_KEY_RE = re.compile(r"^-?(0|[1-9][0-9]*)$")
_INT32_MIN = -(2**31)
_INT32_MAX = 2**31 - 1


def key_sort_key(key: str) -> tuple[int, int, str]:
    """Return a sort key reproducing the database's default key ordering."""

    if _INT_KEY_RE.fullmatch(key):
        number = int(key)
        if _INT32_MIN <= number <= _INT32_MAX:
            return (0, number, "")
    return (1, 0, key)


def iter_children(value: Any) -> Iterator[tuple[str, Any]]:
    """Yield `(key, child)` pairs of a node in database key order.

    Leaves and missing nodes have no children. `null` array holes are skipped.
    """

    if isinstance(value, dict):
        for key in sorted(value, key=key_sort_key):
            yield key, value[key]
    elif isinstance(value, list):
        for index, child in enumerate(value):
            if child is not None:
                yield str(index), child


def as_mapping(value: Any) -> dict[str, Any]:
    """Return a node's children as a dict (arrays become index-keyed dicts)."""

    return dict(iter_children(value))
