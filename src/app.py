"""Application composition root.

This module wires together configuration, the document store client, and the utterance cache for
the API runtime.
"""

from __future__ import annotations

from dataclasses import dataclass

from src.config.settings import Settings
from src.search.cache import UtteranceCache
from src.store.client import DocumentStore, create_store


@dataclass(frozen=True)
class App:
    """Shared application dependencies for handlers."""

    settings: Settings
    store: DocumentStore
    cache: UtteranceCache


def create_app(settings: Settings) -> App:
    """Create the application container.

    Note:
        The store client owns an HTTP connection pool. Call `await app.store.aclose()` at shutdown.
    """

    store = create_store(settings)
    cache = UtteranceCache(scope=settings.search_cache_scope)
    return App(settings=settings, store=store, cache=cache)
