"""API process entrypoint."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError

from src.api.errors import (
    add_cors_headers,
    handle_query_error,
    handle_unexpected_error,
    handle_validation_error,
)
from src.api.router import router
from src.app import App, create_app
from src.config.logging import configure_logging
from src.config.settings import load_settings
from src.intents.queries import IntentQueryError

logger = logging.getLogger(__name__)


def build_api(app: App) -> FastAPI:
    """Create the FastAPI application serving `app`.

    The machine-readable API description is served at `/api-docs.json`.
    """

    @asynccontextmanager
    async def lifespan(_api: FastAPI) -> AsyncIterator[None]:
        try:
            yield
        finally:
            logger.info("shutting down")
            await app.store.aclose()

    api = FastAPI(
        title="nlp-server",
        version="1.0.0",
        openapi_url="/api-docs.json",
        lifespan=lifespan,
    )
    api.state.app = app
    api.middleware("http")(add_cors_headers)
    api.add_exception_handler(IntentQueryError, handle_query_error)
    api.add_exception_handler(RequestValidationError, handle_validation_error)
    api.add_exception_handler(Exception, handle_unexpected_error)
    api.include_router(router)
    return api


def main() -> None:
    """Run the HTTP server."""

    settings = load_settings()
    configure_logging(settings.log_level)

    app = create_app(settings)
    api = build_api(app)

    logger.info("NLP server running on port:%d", settings.port)
    uvicorn.run(api, host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    main()
