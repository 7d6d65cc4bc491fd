"""TOML config file parsing and validation."""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from repodigest.config.file_schema import ConfigFileModel

logger = logging.getLogger(__name__)


class ConfigFileError(ValueError):
    """Raised when a config file cannot be parsed or fails validation."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid config file {path}: {reason}")


def parse_toml(content: str) -> dict[str, Any]:
    """Parse TOML content into a dictionary.

    Args:
        content: TOML file content as a string.

    Returns:
        Parsed dictionary.

    Raises:
        tomllib.TOMLDecodeError: If the content is not valid TOML.
    """
    return tomllib.loads(content)


def validate_config_data(data: dict[str, Any]) -> dict[str, Any]:
    """Validate parsed config data against the config file schema.

    Args:
        data: Parsed TOML dictionary.

    Returns:
        Normalized dictionary containing only the keys that were set.

    Raises:
        pydantic.ValidationError: If the data does not match the schema.
    """
    model = ConfigFileModel.model_validate(data)
    return model.model_dump(exclude_none=True)


def load_toml_file(path: Path, *, strict: bool = False) -> dict[str, Any]:
    """Load, parse and validate a TOML config file.

    Args:
        path: Path to the TOML file.
        strict: If True, raise ConfigFileError on parse or validation
                failures. If False (default), log a warning and return
                an empty dict.

    Returns:
        Validated dictionary. Empty dict if the file doesn't exist.

    Raises:
        ConfigFileError: When strict=True and the file is invalid.
    """
    if not path.exists():
        logger.debug("TOML file not found: %s", path)
        return {}

    try:
        content = path.read_text(encoding="utf-8")
        config = validate_config_data(parse_toml(content))
    except (OSError, tomllib.TOMLDecodeError, ValidationError) as e:
        if strict:
            raise ConfigFileError(path, str(e)) from e
        logger.warning("Failed to load TOML file %s: %s", path, e)
        return {}

    logger.debug("Loaded TOML config from %s", path)
    return config
