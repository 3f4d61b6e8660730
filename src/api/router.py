"""API router composition.

Routes are also served with a trailing slash (`/examples/search/<q>/`) instead of redirecting.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from fastapi import APIRouter

from src.api.errors import ErrorBody
from src.api.handlers import list_intent_examples, list_intents, root, search_intent_examples


def _responses(failure: str) -> dict[int | str, dict]:
    return {
        200: {"description": "Successful request"},
        500: {"model": ErrorBody, "description": failure},
    }


def _add_get(path: str, endpoint: Callable[..., Any], **kwargs: Any) -> None:
    router.add_api_route(path, endpoint, methods=["GET"], **kwargs)
    router.add_api_route(f"{path}/", endpoint, methods=["GET"], include_in_schema=False, **kwargs)


router = APIRouter()
router.add_api_route("/", root, methods=["GET"], include_in_schema=False)
_add_get("/intents", list_intents, responses=_responses("Error fetching intents from Firebase"))
_add_get(
    "/intents/{intentId}/examples",
    list_intent_examples,
    response_model=None,
    responses=_responses("Error fetching examples from Firebase"),
)
_add_get(
    "/examples/search/{q}",
    search_intent_examples,
    responses=_responses("Error fetching suggested examples from Firebase"),
)
