"""Stderr reporting for the digest CLI.

The digest itself is the only thing written to stdout. Errors, warnings and
the closing summary line go to stderr, and in JSON mode errors are a single
JSON object so callers can parse them.
"""

from __future__ import annotations

import json
import sys
from collections.abc import Mapping
from typing import Any, NoReturn

import click

from repodigest.core import format_size_kb, format_token_count
from repodigest.domain import DigestResult

from .exit_codes import ExitCode


def error_exit(
    message: str,
    code: ExitCode | int,
    json_output: bool = False,
    *,
    details: Mapping[str, Any] | None = None,
) -> NoReturn:
    """Report an error on stderr and exit.

    Args:
        message: Error message to display.
        code: Exit code to use (ExitCode enum or int).
        json_output: Emit a JSON error object instead of "Error: ...".
        details: Extra fields for the JSON error object, such as the
            relative_path of an unreadable file. In text mode they are
            omitted, since the message already names them.

    JSON shape:
        {"status": "failed",
         "error": {"code": "READ_ERROR", "message": "...", **details}}
    """
    if isinstance(code, ExitCode):
        code_name = code.name
    else:
        code_name = "UNKNOWN_ERROR"

    if json_output:
        error: dict[str, Any] = {"code": code_name, "message": message}
        error.update(details or {})
        click.echo(json.dumps({"status": "failed", "error": error}), err=True)
    else:
        click.echo(f"Error: {message}", err=True)

    sys.exit(int(code))


def warning_output(message: str, json_output: bool = False) -> None:
    """Print "Warning: ..." to stderr; suppressed in JSON mode."""
    if not json_output:
        click.echo(f"Warning: {message}", err=True)


def format_summary(result: DigestResult, max_size_kb: int) -> str:
    """Build the one-line digest summary.

    Example:
        Files: 12, Tokens: ~3.4k, Max size: 50kB
    """
    return (
        f"Files: {result.file_count}, "
        f"Tokens: ~{format_token_count(result.token_count)}, "
        f"Max size: {format_size_kb(max_size_kb)}"
    )


def summary_output(
    result: DigestResult,
    max_size_kb: int,
    json_output: bool = False,
) -> None:
    """Report the outcome of a digest on stderr.

    Warns when nothing matched, then prints the summary line. In JSON mode
    the same figures are part of the JSON document, so nothing is printed.
    """
    if json_output:
        return
    if result.file_count == 0:
        warning_output("No files matched")
    click.echo(format_summary(result, max_size_kb), err=True)
