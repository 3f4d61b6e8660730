"""Realtime Database streaming protocol.

A streaming GET answers with server-sent events. `put` replaces the value at a path relative to the
watched location, `patch` merges children into it; `keep-alive` carries nothing; `cancel` and
`auth_revoked` end the stream.
"""

from __future__ import annotations

from collections.abc import AsyncIterable, AsyncIterator
from typing import Any

from src.store.snapshot import as_mapping

TERMINAL_EVENTS = frozenset({"cancel", "auth_revoked"})


async def iter_sse_events(lines: AsyncIterable[str]) -> AsyncIterator[tuple[str, str]]:
    """Group raw SSE lines into `(event, data)` pairs."""

    event = "message"
    data_lines: list[str] = []

    async for line in lines:
        if not line:
            if data_lines or event != "message":
                yield event, "\n".join(data_lines)
            event, data_lines = "message", []
            continue
        if line.startswith(":"):
            continue

        field, _, value = line.partition(":")
        if value.startswith(" "):
            value = value[1:]
        if field == "event":
            event = value
        elif field == "data":
            data_lines.append(value)

    if data_lines:
        yield event, "\n".join(data_lines)


def apply_event(root: Any, path: str, data: Any, *, merge: bool = False) -> Any:
    """Apply a `put` (or, with `merge=True`, a `patch`) to the watched value.

    Returns a new root; nodes along `path` are copied, the input is left untouched. Writing `None`
    deletes the child; a node left without children becomes `None`.
    """

    segments = [segment for segment in path.split("/") if segment]

    if merge:
        for key, child in (data or {}).items():
            root = apply_event(root, "/".join([*segments, key]), child)
        return root

    if not segments:
        return data
    return _set(root, segments, data)


def _set(node: Any, segments: list[str], data: Any) -> Any:
    head, *rest = segments
    children = dict(node) if isinstance(node, dict) else as_mapping(node)

    if rest:
        data = _set(children.get(head), rest, data)

    if data is None:
        children.pop(head, None)
    else:
        children[head] = data
    return children or None
