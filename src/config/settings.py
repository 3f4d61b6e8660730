"""Environment configuration and validation.

This module defines strongly-typed application settings loaded from environment variables
(optionally via a local `.env` file).

The Firebase connection parameters accept both the plain `FIREBASE_*` names and the
`REACT_APP_FIREBASE_*` names shared with the web console's `.env` file.
"""

from __future__ import annotations

from typing import Literal

from pydantic import AliasChoices, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

CacheScope = Literal["company", "global"]


def _firebase_env(name: str) -> AliasChoices:
    return AliasChoices(f"FIREBASE_{name}", f"REACT_APP_FIREBASE_{name}")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    firebase_api_key: str | None = Field(default=None, validation_alias=_firebase_env("API_KEY"))
    firebase_auth_domain: str | None = Field(default=None, validation_alias=_firebase_env("AUTH_DOMAIN"))
    firebase_url: str = Field(validation_alias=_firebase_env("URL"))
    firebase_storage_bucket: str | None = Field(
        default=None, validation_alias=_firebase_env("STORAGE_BUCKET")
    )
    firebase_messaging_sender_id: str | None = Field(
        default=None, validation_alias=_firebase_env("MESSAGING_SENDER_ID")
    )
    firebase_auth_token: str | None = Field(default=None, validation_alias="FIREBASE_AUTH_TOKEN")

    host: str = Field(default="0.0.0.0", validation_alias="HOST")
    port: int = Field(default=8080, validation_alias="PORT")
    store_timeout_seconds: float = Field(default=30.0, gt=0, validation_alias="STORE_TIMEOUT_SECONDS")
    search_cache_scope: CacheScope = Field(default="company", validation_alias="SEARCH_CACHE_SCOPE")
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

    @field_validator("firebase_url")
    @classmethod
    def validate_firebase_url(cls, value: str) -> str:
        """Validate the database URL and drop any trailing slash."""

        value = value.strip()
        if not value.startswith(("https://", "http://")):
            raise ValueError("FIREBASE_URL must be an http(s) URL")
        return value.rstrip("/")

    @field_validator("search_cache_scope", mode="before")
    @classmethod
    def normalize_cache_scope(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().lower()
        return value


def load_settings() -> Settings:
    """Load and validate settings from environment variables.

    Raises:
        RuntimeError: If the environment configuration is missing or invalid.
    """

    try:
        return Settings()
    except ValidationError as exc:
        raise RuntimeError(f"Invalid environment configuration: {exc}") from exc
