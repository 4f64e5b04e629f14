"""Configuration loaded from environment / .env file."""

from __future__ import annotations

from enum import Enum

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="LDSHACL_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ── Shapes ───────────────────────────────────────────
    shape_iri: str = Field(
        default="http://ld-shacl-bridge.org/shapes/NodeShape",
        description="Subject IRI given to every generated NodeShape",
    )
    sort_predicates: bool = Field(
        default=False,
        description="Order property shapes by predicate IRI instead of first-seen order",
    )

    # ── Expansion ────────────────────────────────────────
    allow_remote_contexts: bool = Field(
        default=True,
        description="Fetch unregistered @context URLs over the network",
    )

    # ── Logging ──────────────────────────────────────────
    log_level: LogLevel = LogLevel.INFO


_settings: Settings | None = None


def get_settings() -> Settings:
    """Return the cached singleton settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()  # type: ignore[call-arg]
    return _settings


def reset_settings() -> None:
    """Drop the cached instance so the next call re-reads the environment."""
    global _settings
    _settings = None
