"""Configuration data models.

This module defines dataclasses for repodigest configuration options.
"""

from dataclasses import dataclass, field
from pathlib import Path

from repodigest.domain import FilterMode

# Default size ceiling in kB
DEFAULT_MAX_SIZE_KB = 50


@dataclass
class DigestConfig:
    """Defaults for digest scans."""

    # Size ceiling per file in kB (1 kB = 1024 bytes)
    max_size_kb: int = DEFAULT_MAX_SIZE_KB

    # Pattern polarity: exclude or include
    mode: FilterMode = FilterMode.EXCLUDE

    # Include/Exclude patterns applied when none are given on the command line
    patterns: list[str] = field(default_factory=list)

    # Maximum concurrent file reads
    workers: int = 1

    # Whether to descend into symlinked directories
    follow_symlinks: bool = False

    def __post_init__(self) -> None:
        """Validate configuration."""
        self.mode = FilterMode.parse(self.mode)
        if self.workers < 1:
            raise ValueError(f"workers must be at least 1, got {self.workers}")


@dataclass
class LoggingConfig:
    """Configuration for structured logging."""

    # Log level: debug, info, warning, error
    level: str = "warning"

    # Log file path (None = stderr only)
    file: Path | None = None

    # Log format: text or json
    format: str = "text"

    # Also log to stderr when file is set
    include_stderr: bool = False

    # Rotation threshold in bytes (default 10MB)
    max_bytes: int = 10_485_760

    # Number of rotated files to keep
    backup_count: int = 5

    def __post_init__(self) -> None:
        """Validate configuration."""
        valid_levels = {"debug", "info", "warning", "error"}
        if self.level.lower() not in valid_levels:
            raise ValueError(f"level must be one of {valid_levels}, got {self.level}")
        valid_formats = {"text", "json"}
        if self.format.lower() not in valid_formats:
            raise ValueError(
                f"format must be one of {valid_formats}, got {self.format}"
            )


@dataclass
class RepoDigestConfig:
    """Main configuration container."""

    digest: DigestConfig = field(default_factory=DigestConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
