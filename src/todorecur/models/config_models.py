"""Configuration models for todorecur."""

from __future__ import annotations

from typing import Literal
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, Field, field_validator


class DatabaseConfig(BaseModel):
    """Local SQLite storage configuration."""

    path: str | None = Field(
        default=None, description="Database file path (None uses the data dir)"
    )


class SchedulerConfig(BaseModel):
    """Batch pass configuration."""

    max_workers: int = Field(default=1, ge=1, description="Concurrent patterns per pass")
    timezone: str | None = Field(
        default=None, description="IANA zone used for 'today' (None uses the system zone)"
    )

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError("timezone cannot be empty")
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"Unknown timezone: {v}") from e
        return v


class OutputConfig(BaseModel):
    """Output configuration."""

    format: Literal["pretty", "table", "json", "yaml"] = Field(default="pretty")
    color: bool = Field(default=True)


class AppConfig(BaseModel):
    """Main todorecur configuration"""

    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    scheduler: SchedulerConfig = Field(default_factory=SchedulerConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
