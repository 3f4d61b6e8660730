"""FastAPI route handlers.

Handlers only extract parameters and delegate to `src.intents.queries`; error reporting is done by
the exception handlers registered in `src.api.errors`.
"""

from __future__ import annotations

import json
from collections.abc import AsyncIterator
from contextlib import aclosing
from typing import Any

from fastapi import Depends, Path, Query, Request
from fastapi.responses import PlainTextResponse, StreamingResponse

from src.app import App
from src.intents.queries import (
    UpstreamError,
    get_intent_examples,
    list_workspace_intents,
    search_examples,
    watch_intent_examples,
)

GREETING = "NLP Server v1.0"


def get_app(request: Request) -> App:
    """Return the application container attached at startup."""

    return request.app.state.app


def _sse_format(data: Any, *, event_type: str | None = None) -> str:
    # `data:` must be one line; json.dumps produces a single line by default.
    head = f"event: {event_type}\n" if event_type else ""
    return head + f"data: {json.dumps(data, separators=(',', ':'), ensure_ascii=False)}\n\n"


async def root() -> PlainTextResponse:
    return PlainTextResponse(GREETING)


async def list_intents(
        app: App = Depends(get_app),
        company_id: str | None = Query(
            default=None, alias="companyId", description="id of company that owns the workspace"
        ),
        workspace_id: str | None = Query(
            default=None, alias="workspaceId", description="id of workspace that packages the intents"
        ),
) -> list[list[Any]]:
    """Get the list of intents for a workspace."""

    return await list_workspace_intents(app.store, company_id, workspace_id)


async def list_intent_examples(
        app: App = Depends(get_app),
        intent_id: str = Path(alias="intentId", description="id of intent that contains the examples"),
        company_id: str | None = Query(
            default=None, alias="companyId", description="id of company that owns the workspace"
        ),
        watch: bool = Query(
            default=False,
            description="stream the example list again every time the intent changes (text/event-stream)",
        ),
) -> Any:
    """Get the list of example utterances for an intent."""

    if not watch:
        return await get_intent_examples(app.store, company_id, intent_id)

    updates = watch_intent_examples(app.store, company_id, intent_id)

    async def stream() -> AsyncIterator[str]:
        try:
            async with aclosing(updates):
                async for utterances in updates:
                    yield _sse_format(utterances)
        except UpstreamError as exc:
            yield _sse_format(exc.body(), event_type="error")

    return StreamingResponse(stream(), media_type="text/event-stream")


async def search_intent_examples(
        app: App = Depends(get_app),
        q: str = Path(description="the search term to find examples that start with the term"),
        company_id: str | None = Query(
            default=None, alias="companyId", description="id of company that owns the workspace"
        ),
) -> list[str]:
    """Get the list of suggested examples for the search term."""

    return await search_examples(app.store, app.cache, company_id, q)
