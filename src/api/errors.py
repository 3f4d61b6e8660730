"""Cross-origin headers and error responses.

Every response carries permissive CORS headers, and every error body has the shape
`{"status": 500, "message": "..."}`.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable

from fastapi import Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from src.api.handlers import list_intent_examples, list_intents, search_intent_examples
from src.intents.queries import EXAMPLES_USAGE, INTENTS_USAGE, SEARCH_USAGE, IntentQueryError

logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "Origin, X-Requested-With, Content-Type, Accept",
}

USAGE_BY_ENDPOINT = {
    list_intents: INTENTS_USAGE,
    list_intent_examples: EXAMPLES_USAGE,
    search_intent_examples: SEARCH_USAGE,
}


class ErrorBody(BaseModel):
    """Error response body."""

    status: int
    message: str


async def add_cors_headers(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
) -> Response:
    response = await call_next(request)
    response.headers.update(CORS_HEADERS)
    return response


async def handle_query_error(request: Request, exc: IntentQueryError) -> JSONResponse:
    return JSONResponse(status_code=exc.status, content=exc.body())


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    # Runs outside the CORS middleware, so the headers are attached here.
    logger.error("request failed path=%s", request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=500,
        content={"status": 500, "message": "Internal server error"},
        headers=CORS_HEADERS,
    )


async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report malformed parameters (e.g. `watch=maybe`) with the route's usage message."""

    usage = USAGE_BY_ENDPOINT.get(request.scope.get("endpoint"), "invalid params")
    logger.error("%s errors=%s", usage, exc.errors())
    return JSONResponse(status_code=500, content={"status": 500, "message": usage})
