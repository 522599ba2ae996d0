"""
Album API — Application Configuration
======================================

What:  Centralized configuration management using Pydantic Settings.
Why:   Type-safe environment variable loading with validation on startup.
       Fails fast if the Airtable credentials are missing.
How:   Pydantic Settings reads from environment variables (or an optional .env
       file), validates types/ranges, and produces an immutable Settings value
       that is passed to the constructors that need it.
Who:   Built once by the process entry point (albumapi.__main__) and by
       create_app() when no Settings are injected.
When:  Loaded once at startup; never re-read per request.
"""

from functools import lru_cache
from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from albumapi.exceptions import ConfigurationError


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    The three Airtable values have no usable default: they are empty until the
    environment (or .env) provides them, and validate_required() refuses to
    start the service without them.
    """

    # ── Airtable ──────────────────────────────────────────────────────────
    # What: Personal access token, sent as "Authorization: Bearer <token>"
    airtable_token: str = Field(default="", description="Airtable access token")

    # What: The base (workspace) that holds the albums table, e.g. appXXXXXXXXXXXXXX
    airtable_base_id: str = Field(default="", description="Airtable base identifier")

    # What: Table name or table id inside the base
    airtable_table: str = Field(default="", description="Airtable table name or id")

    airtable_api_url: str = Field(default="https://api.airtable.com/v0")

    # What: Per-request timeout for backend calls, in seconds
    # No retry happens on timeout; the error is relayed to the caller as 500
    airtable_timeout: float = Field(default=30.0, gt=0, le=300)

    # ── Server ────────────────────────────────────────────────────────────
    backend_host: str = Field(default="localhost")
    backend_port: int = Field(default=8080, ge=1, le=65535)

    # What: Controls verbosity of application logging
    # Valid: DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    @field_validator("airtable_api_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,  # AIRTABLE_TOKEN and airtable_token both work
        extra="ignore",
        frozen=True,
    )

    @property
    def missing_required(self) -> List[str]:
        """Names of the required environment variables that are empty."""
        required = {
            "AIRTABLE_TOKEN": self.airtable_token,
            "AIRTABLE_BASE_ID": self.airtable_base_id,
            "AIRTABLE_TABLE": self.airtable_table,
        }
        return [name for name, value in required.items() if not value.strip()]

    def validate_required(self) -> None:
        """
        What:  Validates that the backend credentials are configured.
        When:  Called by the process entry point before the listener starts,
               and by create_app() before building the Airtable client.
        Raises: ConfigurationError listing every missing variable.
        """
        missing = self.missing_required
        if missing:
            raise ConfigurationError(
                "missing required env vars: " + ", ".join(missing),
                context={"missing": missing},
            )


@lru_cache
def get_settings() -> Settings:
    """Process-wide Settings, read from the environment on first use."""
    return Settings()
