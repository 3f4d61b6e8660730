"""Logging configuration for the NLP server process.

One configuration is shared by the app loggers and uvicorn (started with `log_config=None`), so
request handling, store failures and server lifecycle messages all use the same format.
"""

from __future__ import annotations

import logging
import os

# httpx logs every store request at INFO; the query layer already logs each call.
_QUIET_LOGGERS = ("httpx", "httpcore")


def configure_logging(level: str | None = None) -> None:
    """Configure Python logging for the process.

    `level` comes from `Settings.log_level`; `LOG_LEVEL` is read directly when it is omitted.
    Store error details are logged here and never returned to HTTP clients.
    """

    log_level = (level or os.getenv("LOG_LEVEL") or "INFO").upper()
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
