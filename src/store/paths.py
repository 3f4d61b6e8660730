"""Document paths inside the Realtime Database.

All intent data lives under `data/companies/<companyId>/intents/<intentId>`.
"""

from __future__ import annotations

from urllib.parse import quote

_ROOT = "data/companies"


def company_intents_path(company_id: str) -> str:
    """Path of the intents collection owned by a company."""

    return f"{_ROOT}/{company_id}/intents"


def intent_path(company_id: str, intent_id: str) -> str:
    """Path of a single intent document."""

    return f"{company_intents_path(company_id)}/{intent_id}"


def encode_path(path: str) -> str:
    """Percent-encode every segment of a slash-separated path for use in a REST URL."""

    return "/".join(quote(segment, safe="") for segment in path.strip("/").split("/"))
