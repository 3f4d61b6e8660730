"""Pytest configuration.

The repository uses a flat `src/` layout without an installed package. This conftest ensures tests
can import from the `src.*` namespace when running `pytest` locally.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

import pytest

# Ensure `import src...` works when running pytest without installing the package.
REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT))

from tests.fakes import FakeStore  # noqa: E402


@pytest.fixture
def company_intents() -> dict[str, Any]:
    return {
        "-b": {
            "id": "b",
            "name": "B",
            "workspaces": {"w2": True},
            "utterances": ["Cancel booking"],
        },
        "-a": {
            "id": "a",
            "name": "A",
            "workspaces": {"w1": True},
            "utterances": ["Book a flight", "book a hotel"],
        },
    }


@pytest.fixture
def fake_store(company_intents: dict[str, Any]) -> FakeStore:
    return FakeStore({"data/companies/c/intents": company_intents})
