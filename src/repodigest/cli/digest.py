"""Digest command for repodigest CLI."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

import click

from repodigest.cli.exit_codes import ExitCode
from repodigest.cli.output import error_exit, summary_output, warning_output
from repodigest.config import ConfigBuilder, ConfigSource
from repodigest.core import format_size_kb
from repodigest.digest import UnreadableContentError, digest, parse_pattern_list
from repodigest.domain import DigestResult, FilterMode, ScanRequest
from repodigest.render import render_directory_tree
from repodigest.sources import entries_from_directory
from repodigest.tokens import count_tokens

logger = logging.getLogger(__name__)


def validate_root(ctx, param, value):
    """Validate that the root path is an existing directory."""
    path = Path(value)
    if not path.exists():
        raise click.BadParameter(f"Directory not found: {path}")
    if not path.is_dir():
        raise click.BadParameter(f"Not a directory: {path}")
    return path


def _collect_patterns(values: tuple[str, ...]) -> list[str] | None:
    """Flatten repeated --pattern values, splitting each on commas.

    Returns None when no --pattern option was given, so configured
    patterns apply.
    """
    if not values:
        return None
    patterns: list[str] = []
    for value in values:
        patterns.extend(parse_pattern_list(value))
    return patterns


def _log_effective_settings(builder: ConfigBuilder, root: Path) -> None:
    """Log key settings with the source each came from."""
    config = builder.build()
    logger.info(
        "Digesting %s: mode=%s (%s), max_size=%s (%s), patterns=%d (%s), "
        "workers=%d (%s)",
        root,
        config.digest.mode.value,
        builder.source_of("mode"),
        format_size_kb(config.digest.max_size_kb),
        builder.source_of("max_size_kb"),
        len(config.digest.patterns),
        builder.source_of("patterns"),
        config.digest.workers,
        builder.source_of("workers"),
    )


def format_digest_output(
    result: DigestResult,
    *,
    tree_only: bool = False,
    content_only: bool = False,
) -> str:
    """Compose the text written for a digest.

    Args:
        result: Digest to format.
        tree_only: Emit only the rendered directory tree.
        content_only: Emit only the concatenated file contents.

    Returns:
        Tree and/or content separated by a blank line.
    """
    parts: list[str] = []
    if not content_only:
        parts.append(render_directory_tree(result.directory_structure))
    if not tree_only:
        parts.append(result.text)
    return "\n\n".join(parts)


@click.command("digest")
@click.argument("root", callback=validate_root)
@click.option(
    "--max-size",
    "max_size_kb",
    type=int,
    default=None,
    help="Skip files larger than this many kB (default: 50).",
)
@click.option(
    "--mode",
    type=click.Choice([m.value for m in FilterMode], case_sensitive=False),
    default=None,
    help="Whether patterns exclude or include files (default: exclude).",
)
@click.option(
    "--pattern",
    "-p",
    "pattern_values",
    multiple=True,
    help="Pattern such as '*.md' or 'node_modules'. Repeatable; commas split.",
)
@click.option(
    "--workers",
    type=click.IntRange(min=1),
    default=None,
    help="Maximum number of files read concurrently (default: 1).",
)
@click.option(
    "--follow-symlinks/--no-follow-symlinks",
    default=None,
    help="Descend into symlinked directories (default: no).",
)
@click.option(
    "--output",
    "-o",
    "output_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="Write the digest to this file instead of stdout.",
)
@click.option("--tree-only", is_flag=True, help="Output only the directory tree.")
@click.option("--content-only", is_flag=True, help="Output only the file contents.")
@click.option(
    "--json",
    "json_output",
    is_flag=True,
    help="Output the digest as a JSON object.",
)
@click.pass_context
def digest_command(
    ctx: click.Context,
    root: Path,
    max_size_kb: int | None,
    mode: str | None,
    pattern_values: tuple[str, ...],
    workers: int | None,
    follow_symlinks: bool | None,
    output_path: Path | None,
    tree_only: bool,
    content_only: bool,
    json_output: bool,
) -> None:
    """Digest the text files under ROOT.

    Prints the pruned directory tree followed by every selected file's
    contents, each preceded by a FILE header.

    Examples:

        repodigest digest ./my-project

        repodigest digest ./my-project --max-size 200 -p node_modules -p "*.lock"

        repodigest digest ./my-project --mode include -p "*.py,docs"
    """
    if tree_only and content_only:
        raise click.UsageError("--tree-only and --content-only are mutually exclusive")

    builder: ConfigBuilder = ctx.obj["config_builder"]
    builder.apply(
        ConfigSource(
            max_size_kb=max_size_kb,
            mode=mode,
            patterns=_collect_patterns(pattern_values),
            workers=workers,
            follow_symlinks=follow_symlinks,
        ),
        source_name="cli",
    )
    try:
        config = builder.build().digest
    except ValueError as e:
        error_exit(f"Invalid configuration: {e}", ExitCode.CONFIG_ERROR, json_output)

    _log_effective_settings(builder, root)

    if config.mode is FilterMode.INCLUDE and not config.patterns:
        warning_output("Include mode without patterns selects no files", json_output)

    try:
        entries = entries_from_directory(root, follow_symlinks=config.follow_symlinks)
    except OSError as e:
        error_exit(
            f"Cannot list {root}: {e}",
            ExitCode.TARGET_NOT_FOUND,
            json_output,
            details={"root": str(root)},
        )

    request = ScanRequest.from_kilobytes(
        entries,
        max_size_kb=config.max_size_kb,
        mode=config.mode,
        patterns=config.patterns,
        workers=config.workers,
    )

    try:
        result = digest(request)
    except UnreadableContentError as e:
        logger.debug("Digest failed: %s", e)
        error_exit(
            str(e),
            ExitCode.READ_ERROR,
            json_output,
            details={"relative_path": e.relative_path, "reason": e.reason},
        )
    except KeyboardInterrupt:
        click.echo("\nDigest aborted by user.", err=True)
        sys.exit(ExitCode.INTERRUPTED)

    result = result.with_token_count(count_tokens(result.text))

    if json_output:
        text = json.dumps(result.to_dict(), indent=2)
    else:
        text = format_digest_output(
            result, tree_only=tree_only, content_only=content_only
        )

    if output_path is not None:
        try:
            output_path.write_text(text + "\n", encoding="utf-8")
        except OSError as e:
            error_exit(
                f"Cannot write {output_path}: {e}",
                ExitCode.OPERATION_FAILED,
                json_output,
                details={"output_path": str(output_path)},
            )
    else:
        click.echo(text)

    summary_output(result, config.max_size_kb, json_output)
