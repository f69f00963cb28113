"""Settings model for the stickies client."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Annotated, Any

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from .domain.entities.note import DEFAULT_COLOR, PALETTE
from .exceptions import ConfigurationError

_HEX_COLOR = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")


class Config(BaseSettings):
    """Client configuration using pydantic-settings."""

    model_config = SettingsConfigDict(
        env_prefix="STICKIES_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        case_sensitive=False,
        extra="ignore",
        validate_assignment=True,
    )

    # Remote API
    api_base_url: str = Field(
        default="http://127.0.0.1:3000",
        description="Base URL of the stickies server (the API lives under /api/)",
    )
    request_timeout: float = Field(
        default=10.0, gt=0, description="HTTP request timeout in seconds"
    )

    # Save behaviour
    debounce_seconds: float = Field(
        default=1.0,
        gt=0,
        description="Delay after the last edit before a save is attempted",
    )

    # Notes
    default_color: str = Field(
        default=DEFAULT_COLOR, description="Colour of blank placeholder notes"
    )
    palette: Annotated[list[str], NoDecode] = Field(
        default_factory=lambda: list(PALETTE),
        description="Colours new notes are drawn from and cycled through",
    )

    # Logging
    log_level: str = Field(default="INFO", description="Log level")
    log_file: Path | None = Field(
        default=None, description="Optional JSON log file (rotated at 10MB)"
    )

    @field_validator("api_base_url", mode="before")
    @classmethod
    def normalize_base_url(cls, v: Any) -> str:
        """Strip trailing slashes so paths can be joined predictably."""
        if not isinstance(v, str) or not v.strip():
            msg = "api_base_url must be a non-empty string"
            raise ValueError(msg)
        url = v.strip().rstrip("/")
        if not url.startswith(("http://", "https://")):
            msg = f"api_base_url must start with http:// or https://, got {url!r}"
            raise ValueError(msg)
        return url

    @field_validator("default_color")
    @classmethod
    def validate_default_color(cls, v: str) -> str:
        if not _HEX_COLOR.match(v):
            msg = f"default_color must be a hex colour, got {v!r}"
            raise ValueError(msg)
        return v.lower()

    @field_validator("palette", mode="before")
    @classmethod
    def parse_palette(cls, v: Any) -> list[str]:
        """Accept a comma separated string (env vars) or a list."""
        if isinstance(v, str):
            v = [c.strip() for c in v.split(",") if c.strip()]
        if not isinstance(v, list) or not v:
            msg = "palette must be a non-empty list of hex colours"
            raise ValueError(msg)
        bad = [c for c in v if not isinstance(c, str) or not _HEX_COLOR.match(c)]
        if bad:
            msg = f"palette contains invalid colours: {bad}"
            raise ValueError(msg)
        return [c.lower() for c in v]

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "WARN", "ERROR", "CRITICAL"}:
            msg = f"Unknown log level: {v}"
            raise ValueError(msg)
        return level

    @model_validator(mode="after")
    def check_default_in_palette(self) -> Config:
        if self.default_color not in self.palette:
            self.palette.insert(0, self.default_color)
        return self

    @property
    def api_url(self) -> str:
        """Root of the REST API, always ending with a slash."""
        return f"{self.api_base_url}/api/"

    def document_url(self, stickies_id: str | None) -> str:
        """Browser-facing URL for a document (``/`` when there is none)."""
        if stickies_id:
            return f"{self.api_base_url}/{stickies_id}"
        return f"{self.api_base_url}/"

    def validate_config(self) -> None:
        """Cross-field checks that pydantic validators cannot express."""
        duplicates = sorted({c for c in self.palette if self.palette.count(c) > 1})
        if duplicates:
            msg = f"palette lists colours more than once: {duplicates}"
            raise ConfigurationError(
                msg, suggestion="Colour cycling needs each palette entry once."
            )
