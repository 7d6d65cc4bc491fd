"""Configuration management for repodigest.

This module provides configuration loading with precedence handling:
1. CLI flags (highest priority)
2. Environment variables (REPODIGEST_*)
3. Config file (~/.repodigest/config.toml)
4. Default values (lowest priority)

- EnvReader: Testable environment variable reading with DI support
- ConfigBuilder: Layered config construction with explicit precedence
- load_toml_file: TOML parsing plus schema validation
"""

from repodigest.config.builder import (
    ConfigBuilder,
    ConfigSource,
    source_from_env,
    source_from_file,
)
from repodigest.config.env import EnvReader
from repodigest.config.loader import (
    build_config,
    clear_config_cache,
    get_config,
    get_default_config_path,
    load_config_file,
)
from repodigest.config.models import (
    DEFAULT_MAX_SIZE_KB,
    DigestConfig,
    LoggingConfig,
    RepoDigestConfig,
)
from repodigest.config.toml_parser import (
    ConfigFileError,
    load_toml_file,
    parse_toml,
)

__all__ = [
    # Models
    "DEFAULT_MAX_SIZE_KB",
    "DigestConfig",
    "LoggingConfig",
    "RepoDigestConfig",
    # Loader
    "build_config",
    "clear_config_cache",
    "get_config",
    "get_default_config_path",
    "load_config_file",
    # Layering
    "EnvReader",
    "ConfigBuilder",
    "ConfigSource",
    "source_from_env",
    "source_from_file",
    # Parsing
    "ConfigFileError",
    "parse_toml",
    "load_toml_file",
]
