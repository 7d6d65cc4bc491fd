"""Configuration loader with precedence handling.

Configuration is loaded with the following precedence (highest to lowest):
1. CLI arguments (passed directly to functions)
2. Environment variables (REPODIGEST_*)
3. Config file (~/.repodigest/config.toml)
4. Default values

Environment variables:
- REPODIGEST_CONFIG_PATH: Path to config file (overrides default location)
- REPODIGEST_MAX_SIZE_KB: Per-file size ceiling in kB
- REPODIGEST_MODE: Pattern polarity (exclude or include)
- REPODIGEST_PATTERNS: Comma-separated Include/Exclude patterns
- REPODIGEST_WORKERS: Maximum concurrent file reads
- REPODIGEST_LOG_LEVEL: Log level (debug, info, warning, error)
- REPODIGEST_LOG_FILE: Log file path
"""

from __future__ import annotations

import logging
import os
import threading
from pathlib import Path

from repodigest.config.builder import (
    ConfigBuilder,
    ConfigSource,
    source_from_env,
    source_from_file,
)
from repodigest.config.env import EnvReader
from repodigest.config.models import RepoDigestConfig
from repodigest.config.toml_parser import load_toml_file

logger = logging.getLogger(__name__)

# Default config location
DEFAULT_CONFIG_DIR = Path.home() / ".repodigest"
DEFAULT_CONFIG_FILE = DEFAULT_CONFIG_DIR / "config.toml"

# Cache for loaded config files ((path, strict) -> (parsed dict, mtime))
# Reloads automatically when the file's mtime changes
_config_cache: dict[tuple[Path, bool], tuple[dict, float]] = {}
_config_cache_lock = threading.Lock()


def get_default_config_path() -> Path:
    """Get the default config file path.

    Can be overridden by REPODIGEST_CONFIG_PATH environment variable.

    Returns:
        Path to config file.
    """
    env_path = os.environ.get("REPODIGEST_CONFIG_PATH")
    if env_path:
        return Path(env_path).expanduser()
    return DEFAULT_CONFIG_FILE


def load_config_file(path: Path | None = None, *, strict: bool = False) -> dict:
    """Load configuration from TOML file.

    Results are cached per (path, strict) with mtime-based invalidation.
    A strict failure raises and is never cached. Use
    clear_config_cache() to force a reload regardless of mtime.

    Thread-safe: uses a lock to protect concurrent access to the cache.

    Args:
        path: Path to config file. If None, uses default location.
        strict: If True, raise ConfigFileError on parse or validation
                failures. If False (default), return empty dict on errors.

    Returns:
        Validated configuration dict. Empty dict if file doesn't exist.

    Raises:
        ConfigFileError: When strict=True and the file is invalid.
    """
    if path is None:
        path = get_default_config_path()

    try:
        current_mtime = path.stat().st_mtime
    except FileNotFoundError:
        current_mtime = 0.0

    key = (path, strict)
    with _config_cache_lock:
        if key in _config_cache:
            cached_config, cached_mtime = _config_cache[key]
            if current_mtime == cached_mtime:
                return cached_config

        result = load_toml_file(path, strict=strict)
        _config_cache[key] = (result, current_mtime)
        return result


def clear_config_cache() -> None:
    """Clear the config file cache.

    Primarily useful for testing.
    """
    with _config_cache_lock:
        _config_cache.clear()


def build_config(
    config_path: Path | None = None,
    cli_source: ConfigSource | None = None,
    env_reader: EnvReader | None = None,
    *,
    strict: bool = False,
) -> tuple[RepoDigestConfig, ConfigBuilder]:
    """Build configuration and return the builder that produced it.

    The builder records which source supplied each value.

    Args:
        config_path: Path to config file (overrides REPODIGEST_CONFIG_PATH).
        cli_source: Values from command-line options.
        env_reader: Optional EnvReader for testing (uses os.environ if None).
        strict: If True, raise ConfigFileError for an invalid config file.

    Returns:
        Tuple of (config, builder).

    Raises:
        ConfigFileError: When strict=True and the config file is invalid.
        ValueError: If a resolved value fails validation.
    """
    reader = env_reader or EnvReader()
    file_config = load_config_file(config_path, strict=strict)

    builder = ConfigBuilder()
    builder.apply(source_from_file(file_config), source_name="file")
    builder.apply(source_from_env(reader), source_name="env")
    if cli_source is not None:
        builder.apply(cli_source, source_name="cli")

    return builder.build(), builder


def get_config(
    config_path: Path | None = None,
    # CLI overrides (highest precedence)
    max_size_kb: int | None = None,
    mode: str | None = None,
    patterns: list[str] | None = None,
    workers: int | None = None,
    # Optional dependency injection for testing
    env_reader: EnvReader | None = None,
    *,
    strict: bool = False,
) -> RepoDigestConfig:
    """Get repodigest configuration with full precedence handling.

    Precedence (highest to lowest):
    1. CLI arguments passed to this function
    2. Environment variables (REPODIGEST_*)
    3. Config file
    4. Default values

    Args:
        config_path: Path to config file (overrides REPODIGEST_CONFIG_PATH).
        max_size_kb: CLI override for the size ceiling.
        mode: CLI override for the filter mode.
        patterns: CLI override for the pattern list.
        workers: CLI override for the read concurrency.
        env_reader: Optional EnvReader for testing (uses os.environ if None).
        strict: If True, raise ConfigFileError on config file failures.
                If False (default), use defaults for an unusable file.

    Returns:
        RepoDigestConfig with merged configuration.

    Raises:
        ConfigFileError: When strict=True and the config file is invalid.
    """
    cli_source = ConfigSource(
        max_size_kb=max_size_kb,
        mode=mode,
        patterns=patterns,
        workers=workers,
    )
    config, _ = build_config(
        config_path, cli_source, env_reader=env_reader, strict=strict
    )
    return config
