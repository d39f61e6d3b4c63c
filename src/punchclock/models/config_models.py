"""Configuration models for punchclock."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from punchclock.utils.logger import LOG_LEVELS


class OutputConfig(BaseModel):
    """Output configuration."""

    format: str = Field(default="pretty")

    @field_validator("format")
    @classmethod
    def validate_format(cls, v: str) -> str:
        if v not in ("pretty", "table", "json", "yaml"):
            raise ValueError(f"Unsupported output format: {v}")
        return v


class AppConfig(BaseModel):
    """Main punchclock configuration."""

    database_path: str | None = Field(
        default=None, description="SQLite database file; None uses the data dir"
    )
    owner_id: str = Field(
        default="local", description="Owner identifier used for new projects"
    )
    output: OutputConfig = Field(default_factory=OutputConfig)
    log_level: str | None = Field(
        default=None, description="Log file level; None keeps the default (DEBUG)"
    )

    @field_validator("owner_id")
    @classmethod
    def validate_owner_id(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("owner_id cannot be empty")
        return v.strip()

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str | None) -> str | None:
        if v is None:
            return v
        level = v.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Unsupported log level: {v}")
        return level
