"""Intent read operations served by the API.

Contract shared by every operation:
    - Missing (or empty) required parameters raise `UsageError` before the store is contacted.
    - Any store failure is logged here and raised as `UpstreamError` with a fixed message; the
      underlying error never reaches the caller.
    - Both errors are reported to HTTP clients as status 500.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from contextlib import aclosing
from typing import Any

from src.intents.schema import Intent, intent_from_obj, intents_from_collection
from src.search.cache import UtteranceCache
from src.search.prefix import is_searchable, search_utterances
from src.store.client import DocumentStore, StoreError
from src.store.paths import company_intents_path, intent_path

logger = logging.getLogger(__name__)

INTENTS_LIMIT = 900

INTENTS_USAGE = "invalid params - use /intents?companyId=<>&workspaceId=<>"
EXAMPLES_USAGE = "invalid params - use /intents/<intentId>/examples?companyId=<>"
SEARCH_USAGE = "invalid params - use /examples/search/<q>/?companyId=<>"

INTENTS_FAILED = "Error fetching intents"
EXAMPLES_FAILED = "Error fetching examples"


class IntentQueryError(Exception):
    """Base class for errors reported to API clients."""

    status = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def body(self) -> dict[str, Any]:
        return {"status": self.status, "message": self.message}


class UsageError(IntentQueryError):
    """Raised when a required parameter is missing."""


class UpstreamError(IntentQueryError):
    """Raised when the document store read fails."""


def _require(*values: str | None, usage: str) -> None:
    if not all(values):
        logger.error(usage)
        raise UsageError(usage)


def flatten_utterances(intents: list[Intent]) -> list[Any]:
    """Concatenate utterance lists (intents in key order, then utterance order)."""

    return [utterance for intent in intents for utterance in intent.utterances]


async def list_workspace_intents(
        store: DocumentStore,
        company_id: str | None,
        workspace_id: str | None,
) -> list[list[Any]]:
    """Return `[id, name]` pairs of the company's intents that belong to the workspace.

    Only the last `INTENTS_LIMIT` intents (in key order) are considered; the workspace filter is
    applied after the cap.
    """

    logger.info("intents called company_id=%s workspace_id=%s", company_id, workspace_id)
    _require(company_id, workspace_id, usage=INTENTS_USAGE)
    assert company_id is not None and workspace_id is not None

    try:
        raw = await store.read(company_intents_path(company_id), limit_to_last=INTENTS_LIMIT)
        intents = intents_from_collection(raw)
    except (StoreError, ValueError) as exc:
        logger.exception("Error fetching intents company_id=%s", company_id)
        raise UpstreamError(INTENTS_FAILED) from exc

    return [intent.as_pair() for intent in intents if intent.in_workspace(workspace_id)]


def _utterances_of(raw: Any, intent_id: str) -> list[Any]:
    if raw is None:
        return []
    return intent_from_obj(raw, key=intent_id).utterances


async def get_intent_examples(
        store: DocumentStore,
        company_id: str | None,
        intent_id: str | None,
) -> list[Any]:
    """Return the intent's utterance list verbatim (empty if the intent does not exist)."""

    logger.info("examples called company_id=%s intent_id=%s", company_id, intent_id)
    _require(company_id, intent_id, usage=EXAMPLES_USAGE)
    assert company_id is not None and intent_id is not None

    try:
        raw = await store.read(intent_path(company_id, intent_id))
        return _utterances_of(raw, intent_id)
    except (StoreError, ValueError) as exc:
        logger.exception("Error fetching examples company_id=%s intent_id=%s", company_id, intent_id)
        raise UpstreamError(EXAMPLES_FAILED) from exc


def watch_intent_examples(
        store: DocumentStore,
        company_id: str | None,
        intent_id: str | None,
) -> AsyncGenerator[list[Any], None]:
    """Validate parameters, then return an iterator of the utterance list after every change.

    Parameters are checked eagerly so usage errors surface before a streaming response starts.
    """

    logger.info("examples watch called company_id=%s intent_id=%s", company_id, intent_id)
    _require(company_id, intent_id, usage=EXAMPLES_USAGE)
    assert company_id is not None and intent_id is not None

    async def _watch() -> AsyncGenerator[list[Any], None]:
        try:
            async with aclosing(store.listen(intent_path(company_id, intent_id))) as values:
                async for raw in values:
                    yield _utterances_of(raw, intent_id)
        except (StoreError, ValueError) as exc:
            logger.exception(
                "Error watching examples company_id=%s intent_id=%s", company_id, intent_id
            )
            raise UpstreamError(EXAMPLES_FAILED) from exc
        finally:
            logger.info("examples watch closed company_id=%s intent_id=%s", company_id, intent_id)

    return _watch()


async def load_company_utterances(store: DocumentStore, company_id: str) -> list[Any]:
    """Read the whole intents collection of a company and flatten its utterances."""

    raw = await store.read(company_intents_path(company_id))
    return flatten_utterances(intents_from_collection(raw))


async def search_examples(
        store: DocumentStore,
        cache: UtteranceCache,
        company_id: str | None,
        term: str | None,
) -> list[str]:
    """Return up to five cached utterances starting with `term`.

    Terms shorter than three characters return `[]` without touching the store or the cache. On a
    cache miss the company's utterances are loaded once and memoized; a failed load leaves the cache
    untouched.
    """

    _require(company_id, term, usage=SEARCH_USAGE)
    assert company_id is not None and term is not None

    if not is_searchable(term):
        return []

    utterances = cache.get(company_id)
    if utterances is None:
        logger.info("populating utterance cache company_id=%s scope=%s", company_id, cache.scope)
        try:
            utterances = await load_company_utterances(store, company_id)
        except (StoreError, ValueError) as exc:
            logger.exception("Error fetching examples company_id=%s", company_id)
            raise UpstreamError(EXAMPLES_FAILED) from exc
        cache.put(company_id, utterances)

    return search_utterances(utterances, term)
