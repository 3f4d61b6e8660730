"""Async Realtime Database client (REST API over httpx).

The service only reads. Every read is a single awaited request; `listen` keeps a streaming request
open and yields the full watched value after each change.
"""

from __future__ import annotations

import json
import logging
from collections.abc import AsyncGenerator
from typing import Any, Protocol

import httpx

from src.config.settings import Settings
from src.store.paths import encode_path
from src.store.stream import TERMINAL_EVENTS, apply_event, iter_sse_events

logger = logging.getLogger(__name__)


class StoreError(RuntimeError):
    """Raised when the document store cannot be read."""


class StoreStreamError(StoreError):
    """Raised when the database closes a live stream (`cancel` / `auth_revoked`)."""


class DocumentStore(Protocol):
    """Read-only view of the document store used by the intent queries."""

    async def read(self, path: str, *, limit_to_last: int | None = None) -> Any: ...

    def listen(self, path: str) -> AsyncGenerator[Any, None]: ...

    async def aclose(self) -> None: ...


class FirebaseStore:
    """Realtime Database client bound to one database URL."""

    def __init__(
            self,
            database_url: str,
            *,
            auth_token: str | None = None,
            timeout: float = 30.0,
            client: httpx.AsyncClient | None = None,
    ) -> None:
        self._base_url = database_url.rstrip("/")
        self._auth_token = auth_token
        self._timeout = timeout
        self._client = client or httpx.AsyncClient(timeout=timeout, follow_redirects=True)

    def _url(self, path: str) -> str:
        return f"{self._base_url}/{encode_path(path)}.json"

    def _params(self) -> dict[str, str]:
        if self._auth_token:
            return {"auth": self._auth_token}
        return {}

    async def read(self, path: str, *, limit_to_last: int | None = None) -> Any:
        """Read the value at `path` once.

        `limit_to_last` keeps only the last N children in key order, as `limitToLast` does in the
        client SDKs. A missing node reads as `None`.
        """

        params = self._params()
        if limit_to_last is not None:
            params["orderBy"] = '"$key"'
            params["limitToLast"] = str(limit_to_last)

        try:
            response = await self._client.get(self._url(path), params=params)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPError as exc:
            raise StoreError(f"read failed path={path}: {exc}") from exc
        except ValueError as exc:
            raise StoreError(f"invalid JSON path={path}: {exc}") from exc

    async def listen(self, path: str) -> AsyncGenerator[Any, None]:
        """Yield the value at `path` now and again after every change.

        The stream stays open until the caller stops iterating or the database ends it.
        """

        params = self._params()
        headers = {"Accept": "text/event-stream"}
        timeout = httpx.Timeout(self._timeout, read=None)
        value: Any = None

        try:
            async with self._client.stream(
                "GET", self._url(path), params=params, headers=headers, timeout=timeout
            ) as response:
                response.raise_for_status()
                async for event, data in iter_sse_events(response.aiter_lines()):
                    if event in ("put", "patch"):
                        payload = json.loads(data)
                        value = apply_event(
                            value, payload["path"], payload["data"], merge=event == "patch"
                        )
                        yield value
                    elif event in TERMINAL_EVENTS:
                        raise StoreStreamError(f"stream closed by server path={path} event={event}")
                    elif event != "keep-alive":
                        logger.debug("ignoring stream event=%s path=%s", event, path)
        except httpx.HTTPError as exc:
            raise StoreError(f"stream failed path={path}: {exc}") from exc
        except (ValueError, KeyError, TypeError, AttributeError) as exc:
            raise StoreError(f"invalid stream event path={path}: {exc}") from exc

    async def aclose(self) -> None:
        await self._client.aclose()


def create_store(settings: Settings) -> FirebaseStore:
    """Create the store client for the configured database."""

    return FirebaseStore(
        settings.firebase_url,
        auth_token=settings.firebase_auth_token,
        timeout=settings.store_timeout_seconds,
    )
