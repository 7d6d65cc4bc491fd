"""CLI module for repodigest."""

from __future__ import annotations

import logging
from dataclasses import replace
from pathlib import Path
from typing import TYPE_CHECKING, Any

import click

from repodigest.cli.exit_codes import ExitCode
from repodigest.cli.output import error_exit

if TYPE_CHECKING:
    from repodigest.config.models import LoggingConfig

logger = logging.getLogger(__name__)


def _load_configuration(config_path: Path | None):
    """Load layered configuration, exiting on an invalid config file.

    Args:
        config_path: Explicit config file path, or None for the default.

    Returns:
        Tuple of (config, builder) from build_config().
    """
    from repodigest.config import ConfigFileError, build_config

    try:
        return build_config(config_path, strict=True)
    except ConfigFileError as e:
        error_exit(str(e), ExitCode.CONFIG_ERROR)
    except ValueError as e:
        error_exit(f"Invalid configuration: {e}", ExitCode.CONFIG_ERROR)


def _configure_logging(
    base_config: LoggingConfig,
    log_level: str | None,
    log_file: Path | None,
    log_json: bool,
) -> LoggingConfig:
    """Configure logging from the loaded config and CLI options.

    Options left unset keep the value from configuration.

    Args:
        base_config: LoggingConfig from the layered configuration.
        log_level: Override log level (debug, info, warning, error).
        log_file: Override log file path.
        log_json: Use JSON log format.

    Returns:
        The LoggingConfig that was applied.

    Raises:
        ValueError: If an override fails LoggingConfig validation.
    """
    from repodigest.logging import configure_logging

    overrides: dict[str, Any] = {}
    if log_level is not None:
        overrides["level"] = log_level
    if log_file is not None:
        overrides["file"] = log_file
    if log_json:
        overrides["format"] = "json"

    config = replace(base_config, **overrides)
    configure_logging(config)
    return config


@click.group()
@click.version_option(package_name="repodigest")
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="Config file path (default: ~/.repodigest/config.toml).",
)
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"], case_sensitive=False),
    default=None,
    help="Override log level (default: warning).",
)
@click.option(
    "--log-file",
    type=click.Path(path_type=Path),
    default=None,
    help="Override log file path.",
)
@click.option(
    "--log-json",
    is_flag=True,
    default=False,
    help="Use JSON log format.",
)
@click.pass_context
def main(
    ctx: click.Context,
    config_path: Path | None,
    log_level: str | None,
    log_file: Path | None,
    log_json: bool,
) -> None:
    """repodigest - Turn a source tree into a single LLM-ready text digest."""
    ctx.ensure_object(dict)

    config, builder = _load_configuration(config_path)
    ctx.obj["config_builder"] = builder

    _configure_logging(config.logging, log_level, log_file, log_json)


# Defer import to avoid circular dependency
def _register_commands():
    from repodigest.cli.digest import digest_command

    main.add_command(digest_command)


_register_commands()
