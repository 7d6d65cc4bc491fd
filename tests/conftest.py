"""Shared test fixtures for repodigest."""

import logging
import os
from collections.abc import Callable
from pathlib import Path
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from repodigest.config import clear_config_cache
from repodigest.domain import InputEntry


class RecordingReader:
    """Content reader that counts how often it is invoked."""

    def __init__(self, content: str) -> None:
        self.content = content
        self.calls = 0

    def __call__(self) -> str:
        self.calls += 1
        return self.content


def make_entry(
    relative_path: str,
    content: str = "",
    size_bytes: int | None = None,
) -> InputEntry:
    """Build an InputEntry with an in-memory content reader.

    Args:
        relative_path: Root-prefixed slash-delimited path.
        content: Text returned by the reader.
        size_bytes: Reported size; defaults to the UTF-8 length of content.

    Returns:
        InputEntry whose content_reader is a RecordingReader.
    """
    if size_bytes is None:
        size_bytes = len(content.encode("utf-8"))
    return InputEntry(
        relative_path=relative_path,
        size_bytes=size_bytes,
        content_reader=RecordingReader(content),
    )


@pytest.fixture
def entry_factory() -> Callable[..., InputEntry]:
    """Return the make_entry factory."""
    return make_entry


@pytest.fixture
def runner() -> CliRunner:
    """Create a CLI runner."""
    return CliRunner()


@pytest.fixture
def sample_project(tmp_path: Path) -> Path:
    """Create a small project tree on disk.

    Layout:
        project/
            README.md
            logo.png
            src/
                main.py
                util/
                    helpers.py
            node_modules/
                lib/
                    index.js
    """
    root = tmp_path / "project"
    (root / "src" / "util").mkdir(parents=True)
    (root / "node_modules" / "lib").mkdir(parents=True)

    (root / "README.md").write_text("# Project\n")
    (root / "logo.png").write_bytes(b"\x89PNG\r\n\x1a\n")
    (root / "src" / "main.py").write_text("print('main')\n")
    (root / "src" / "util" / "helpers.py").write_text("def helper():\n    pass\n")
    (root / "node_modules" / "lib" / "index.js").write_text("module.exports = 1;\n")
    return root


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path):
    """Point configuration at an empty temp location for every test.

    Removes REPODIGEST_* variables from the environment, sets
    REPODIGEST_CONFIG_PATH to a file that does not exist, and clears the
    config cache before and after the test.
    """
    config_path = tmp_path / ".repodigest" / "config.toml"
    clean_env = {
        key: value
        for key, value in os.environ.items()
        if not key.startswith("REPODIGEST_")
    }
    clean_env["REPODIGEST_CONFIG_PATH"] = str(config_path)

    clear_config_cache()
    with patch.dict(os.environ, clean_env, clear=True):
        yield config_path
    clear_config_cache()


@pytest.fixture(autouse=True)
def reset_root_logger():
    """Save and restore root logger state between tests."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    yield
    root.handlers[:] = original_handlers
    root.setLevel(original_level)
