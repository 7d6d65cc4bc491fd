"""Configuration builder with explicit layering.

This module provides ConfigBuilder for building RepoDigestConfig by composing
multiple configuration sources with explicit precedence handling.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

from repodigest.config.env import EnvReader
from repodigest.config.models import (
    DEFAULT_MAX_SIZE_KB,
    DigestConfig,
    LoggingConfig,
    RepoDigestConfig,
)
from repodigest.domain import FilterMode


@dataclass
class ConfigSource:
    """Configuration values from a single source.

    None values indicate "not specified in this source" and will not
    override values from lower-precedence sources.
    """

    # Digest config
    max_size_kb: int | None = None
    mode: str | None = None
    patterns: list[str] | None = None
    workers: int | None = None
    follow_symlinks: bool | None = None

    # Logging config
    logging_level: str | None = None
    logging_file: Path | None = None
    logging_format: str | None = None
    logging_include_stderr: bool | None = None
    logging_max_bytes: int | None = None
    logging_backup_count: int | None = None


class ConfigBuilder:
    """Builds RepoDigestConfig by layering ConfigSources with precedence.

    Later sources override earlier ones (for non-None values). Each value
    remembers which source supplied it, for startup diagnostics.

    Example:
        builder = ConfigBuilder()
        builder.apply(source_from_file(file_config), source_name="file")
        builder.apply(source_from_env(reader), source_name="env")
        builder.apply(cli_source, source_name="cli")
        config = builder.build()
    """

    def __init__(self) -> None:
        """Initialize the builder with no values set."""
        self._values: dict[str, Any] = {}
        self._sources: dict[str, str] = {}

    def apply(self, source: ConfigSource, source_name: str = "unknown") -> None:
        """Apply configuration source, overriding existing values.

        Args:
            source: Configuration source to apply.
            source_name: Label recorded for each value this source sets.
        """
        for field_obj in fields(source):
            value = getattr(source, field_obj.name)
            if value is not None:
                self._values[field_obj.name] = value
                self._sources[field_obj.name] = source_name

    def source_of(self, key: str) -> str:
        """Return the name of the source that set a value ("default" if none)."""
        return self._sources.get(key, "default")

    def _get(self, key: str, default: Any) -> Any:
        return self._values.get(key, default)

    def build(self) -> RepoDigestConfig:
        """Build the final RepoDigestConfig with defaults for unset values.

        Returns:
            Complete RepoDigestConfig with all values resolved.

        Raises:
            ValueError: If a resolved value fails model validation.
        """
        digest = DigestConfig(
            max_size_kb=self._get("max_size_kb", DEFAULT_MAX_SIZE_KB),
            mode=FilterMode.parse(self._get("mode", FilterMode.EXCLUDE)),
            patterns=list(self._get("patterns", [])),
            workers=self._get("workers", 1),
            follow_symlinks=self._get("follow_symlinks", False),
        )

        default_logging = LoggingConfig()
        logging_config = LoggingConfig(
            level=self._get("logging_level", default_logging.level),
            file=self._get("logging_file", default_logging.file),
            format=self._get("logging_format", default_logging.format),
            include_stderr=self._get(
                "logging_include_stderr", default_logging.include_stderr
            ),
            max_bytes=self._get("logging_max_bytes", default_logging.max_bytes),
            backup_count=self._get(
                "logging_backup_count", default_logging.backup_count
            ),
        )

        return RepoDigestConfig(digest=digest, logging=logging_config)


def source_from_file(file_config: dict[str, Any]) -> ConfigSource:
    """Create ConfigSource from a validated config file dictionary.

    Args:
        file_config: Dictionary returned by load_toml_file().

    Returns:
        ConfigSource with values from the config file.
    """
    digest = file_config.get("digest", {})
    logging_conf = file_config.get("logging", {})

    log_file_str = logging_conf.get("file")
    log_file = Path(log_file_str).expanduser() if log_file_str else None

    return ConfigSource(
        # Digest
        max_size_kb=digest.get("max_size_kb"),
        mode=digest.get("mode"),
        patterns=digest.get("patterns"),
        workers=digest.get("workers"),
        follow_symlinks=digest.get("follow_symlinks"),
        # Logging
        logging_level=logging_conf.get("level"),
        logging_file=log_file,
        logging_format=logging_conf.get("format"),
        logging_include_stderr=logging_conf.get("include_stderr"),
        logging_max_bytes=logging_conf.get("max_bytes"),
        logging_backup_count=logging_conf.get("backup_count"),
    )


def source_from_env(reader: EnvReader) -> ConfigSource:
    """Create ConfigSource from environment variables.

    Args:
        reader: EnvReader instance for reading environment variables.

    Returns:
        ConfigSource with values from environment variables.
    """
    return ConfigSource(
        # Digest
        max_size_kb=reader.get_int("REPODIGEST_MAX_SIZE_KB"),
        mode=reader.get_str("REPODIGEST_MODE"),
        patterns=reader.get_list("REPODIGEST_PATTERNS"),
        workers=reader.get_int("REPODIGEST_WORKERS"),
        follow_symlinks=None,  # No env var
        # Logging
        logging_level=reader.get_str("REPODIGEST_LOG_LEVEL"),
        logging_file=reader.get_path("REPODIGEST_LOG_FILE"),
        logging_format=None,
        logging_include_stderr=None,
        logging_max_bytes=None,
        logging_backup_count=None,
    )
