"""Pydantic models for validating the TOML config file.

The config file is user-edited, so unknown keys and wrongly typed values
are reported with precise locations instead of failing later.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from repodigest.domain import FilterMode


class DigestSectionModel(BaseModel):
    """Pydantic model for the [digest] section."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    max_size_kb: int | None = None
    mode: str | None = None
    patterns: list[str] | None = None
    workers: int | None = Field(default=None, ge=1)
    follow_symlinks: bool | None = None

    @field_validator("mode")
    @classmethod
    def validate_mode(cls, v: str | None) -> str | None:
        """Casefold and check the filter mode name."""
        if v is None:
            return None
        return FilterMode.parse(v).value


class LoggingSectionModel(BaseModel):
    """Pydantic model for the [logging] section."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    level: str | None = None
    file: str | None = None
    format: str | None = None
    include_stderr: bool | None = None
    max_bytes: int | None = Field(default=None, ge=1)
    backup_count: int | None = Field(default=None, ge=0)

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str | None) -> str | None:
        """Casefold and check the log level."""
        if v is None:
            return None
        level = v.casefold()
        if level not in {"debug", "info", "warning", "error"}:
            raise ValueError(f"unknown log level: {v}")
        return level

    @field_validator("format")
    @classmethod
    def validate_format(cls, v: str | None) -> str | None:
        """Casefold and check the log format."""
        if v is None:
            return None
        log_format = v.casefold()
        if log_format not in {"text", "json"}:
            raise ValueError(f"unknown log format: {v}")
        return log_format


class ConfigFileModel(BaseModel):
    """Pydantic model for the whole config file."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    digest: DigestSectionModel = Field(default_factory=DigestSectionModel)
    logging: LoggingSectionModel = Field(default_factory=LoggingSectionModel)
