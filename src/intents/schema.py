"""Intent document schema (Pydantic models).

Intent documents are created by the workspace editor, so the model is lenient: unknown fields are
ignored and absent collections read as empty. Only the shape of a document is enforced.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.store.snapshot import as_mapping, iter_children


class Intent(BaseModel):
    """A named group of example utterances, visible in the workspaces it is a member of."""

    model_config = ConfigDict(extra="ignore")

    id: Any = None
    name: Any = None
    workspaces: dict[str, Any] = Field(default_factory=dict)
    utterances: list[Any] = Field(default_factory=list)

    @field_validator("workspaces", mode="before")
    @classmethod
    def coerce_workspaces(cls, value: Any) -> dict[str, Any]:
        """Read a missing membership map as empty (and an array-shaped one as index-keyed)."""

        if value is None:
            return {}
        if isinstance(value, (dict, list)):
            return as_mapping(value)
        raise ValueError("workspaces must be an object")

    @field_validator("utterances", mode="before")
    @classmethod
    def coerce_utterances(cls, value: Any) -> list[Any]:
        """Keep arrays verbatim; an object-shaped list is read in key order."""

        if value is None:
            return []
        if isinstance(value, list):
            return value
        if isinstance(value, dict):
            return [child for _, child in iter_children(value)]
        raise ValueError("utterances must be an array")

    def in_workspace(self, workspace_id: str) -> bool:
        return workspace_id in self.workspaces

    def as_pair(self) -> list[Any]:
        """Return the `[id, name]` pair served by the intents listing."""

        return [self.id, self.name]


def intent_from_obj(obj: Any, *, key: str | None = None) -> Intent:
    """Validate a raw intent document.

    `key` is the document's key in its collection; it stands in for a missing `id` field.

    Raises:
        ValueError: If the document is not an object or has malformed collections.
    """

    if not isinstance(obj, dict):
        raise ValueError(f"intent document must be an object, got {type(obj).__name__}")

    intent = Intent.model_validate(obj)
    if intent.id is None and key is not None:
        intent = intent.model_copy(update={"id": key})
    return intent


def intents_from_collection(value: Any) -> list[Intent]:
    """Validate every document of an intents collection, in database key order."""

    return [intent_from_obj(child, key=key) for key, child in iter_children(value)]
