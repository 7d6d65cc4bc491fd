"""Tests for the digest CLI command."""

import json
import logging

import pytest

from repodigest.cli import main
from repodigest.cli.digest import _collect_patterns, format_digest_output
from repodigest.digest import UnreadableContentError
from repodigest.domain import DigestResult, DirectoryNode

EXPECTED_TREE = [
    "Directory structure:",
    "└── project/",
    "    ├── README.md",
    "    ├── node_modules/",
    "    │   └── lib/",
    "    │       └── index.js",
    "    └── src/",
    "        ├── main.py",
    "        └── util/",
    "            └── helpers.py",
]


class TestDigestCommand:
    """Tests for `repodigest digest`."""

    def test_default_output(self, runner, sample_project) -> None:
        """Default run prints the tree then every text file's content."""
        result = runner.invoke(main, ["digest", str(sample_project)])

        assert result.exit_code == 0, result.output
        lines = result.stdout.splitlines()
        assert lines[: len(EXPECTED_TREE)] == EXPECTED_TREE
        assert "FILE: project/README.md" in lines
        assert "FILE: project/src/util/helpers.py" in lines
        assert "logo.png" not in result.stdout
        assert "Files: 4, Tokens: ~" in result.stderr
        assert "Max size: 50kB" in result.stderr

    def test_exclude_pattern(self, runner, sample_project) -> None:
        """--pattern removes matching directories."""
        result = runner.invoke(
            main, ["digest", str(sample_project), "-p", "node_modules"]
        )

        assert result.exit_code == 0, result.output
        assert "node_modules" not in result.stdout
        assert "module.exports" not in result.stdout
        assert "Files: 3" in result.stderr

    def test_comma_separated_patterns(self, runner, sample_project) -> None:
        """A single --pattern value may carry several comma-separated patterns."""
        result = runner.invoke(
            main, ["digest", str(sample_project), "-p", "node_modules, *.md"]
        )

        assert result.exit_code == 0, result.output
        assert "README.md" not in result.stdout
        assert "Files: 2" in result.stderr

    def test_include_mode(self, runner, sample_project) -> None:
        """Include mode keeps only matching files."""
        result = runner.invoke(
            main,
            ["digest", str(sample_project), "--mode", "include", "-p", "src"],
        )

        assert result.exit_code == 0, result.output
        assert "FILE: project/src/main.py" in result.stdout
        assert "FILE: project/README.md" not in result.stdout
        assert "Files: 2" in result.stderr

    def test_include_mode_without_patterns_warns(
        self, runner, sample_project
    ) -> None:
        """Include mode with no patterns warns and matches nothing."""
        result = runner.invoke(
            main, ["digest", str(sample_project), "--mode", "include"]
        )

        assert result.exit_code == 0
        assert "Warning: Include mode without patterns" in result.stderr
        assert "Warning: No files matched" in result.stderr
        assert "(no files matched)" in result.stdout

    def test_max_size(self, runner, sample_project) -> None:
        """Files larger than --max-size are skipped."""
        (sample_project / "big.md").write_text("x" * 2048)

        result = runner.invoke(
            main, ["digest", str(sample_project), "--max-size", "1"]
        )

        assert result.exit_code == 0, result.output
        assert "big.md" not in result.stdout
        assert "Max size: 1kB" in result.stderr

    def test_workers_do_not_change_output(self, runner, sample_project) -> None:
        """Concurrent reading produces identical output."""
        sequential = runner.invoke(main, ["digest", str(sample_project)])
        concurrent = runner.invoke(
            main, ["digest", str(sample_project), "--workers", "4"]
        )

        assert concurrent.exit_code == 0, concurrent.output
        assert concurrent.stdout == sequential.stdout

    def test_tree_only(self, runner, sample_project) -> None:
        """--tree-only prints the tree without content."""
        result = runner.invoke(main, ["digest", str(sample_project), "--tree-only"])

        assert result.exit_code == 0
        assert result.stdout.splitlines() == EXPECTED_TREE

    def test_content_only(self, runner, sample_project) -> None:
        """--content-only prints content without the tree."""
        result = runner.invoke(
            main, ["digest", str(sample_project), "--content-only"]
        )

        assert result.exit_code == 0
        assert "Directory structure:" not in result.stdout
        assert result.stdout.startswith("=" * 48 + "\nFILE: project/README.md\n")

    def test_tree_only_and_content_only_conflict(
        self, runner, sample_project
    ) -> None:
        """The two output filters are mutually exclusive."""
        result = runner.invoke(
            main,
            ["digest", str(sample_project), "--tree-only", "--content-only"],
        )

        assert result.exit_code == 2
        assert "mutually exclusive" in result.stderr

    def test_json_output(self, runner, sample_project) -> None:
        """--json prints a single JSON document and no summary."""
        result = runner.invoke(main, ["digest", str(sample_project), "--json"])

        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert data["file_count"] == 4
        assert data["token_count"] > 0
        assert data["directory_structure"]["name"] == "project"
        assert "FILE: project/src/main.py" in data["content"]
        assert "Files:" not in result.stderr

    def test_output_file(self, runner, sample_project, tmp_path) -> None:
        """--output writes the digest to a file instead of stdout."""
        output = tmp_path / "digest.txt"

        result = runner.invoke(
            main, ["digest", str(sample_project), "-o", str(output)]
        )

        assert result.exit_code == 0, result.output
        assert result.stdout == ""
        assert output.read_text().splitlines()[: len(EXPECTED_TREE)] == EXPECTED_TREE

    def test_output_file_unwritable(self, runner, sample_project, tmp_path) -> None:
        """A failing output write exits with OPERATION_FAILED."""
        output = tmp_path / "missing-dir" / "digest.txt"

        result = runner.invoke(
            main, ["digest", str(sample_project), "-o", str(output)]
        )

        assert result.exit_code == 40
        assert "Cannot write" in result.stderr

    def test_missing_root(self, runner, tmp_path) -> None:
        """A nonexistent root is a usage error."""
        result = runner.invoke(main, ["digest", str(tmp_path / "nope")])

        assert result.exit_code == 2
        assert "Directory not found" in result.stderr

    def test_root_is_file(self, runner, tmp_path) -> None:
        """A file root is a usage error."""
        path = tmp_path / "file.py"
        path.write_text("x = 1\n")

        result = runner.invoke(main, ["digest", str(path)])

        assert result.exit_code == 2
        assert "Not a directory" in result.stderr

    def test_read_error(self, runner, sample_project, monkeypatch) -> None:
        """An unreadable file fails the command with READ_ERROR."""

        def failing_digest(request):
            raise UnreadableContentError("project/src/main.py", "permission denied")

        monkeypatch.setattr("repodigest.cli.digest.digest", failing_digest)

        result = runner.invoke(main, ["digest", str(sample_project)])

        assert result.exit_code == 21
        assert result.stderr.count("Cannot read project/src/main.py") == 1
        assert "Error: Cannot read project/src/main.py: permission denied" in (
            result.stderr
        )
        assert result.stdout == ""

    def test_read_error_json(self, runner, sample_project, monkeypatch) -> None:
        """In JSON mode the error is reported as JSON on stderr."""

        def failing_digest(request):
            raise UnreadableContentError("project/README.md", "gone")

        monkeypatch.setattr("repodigest.cli.digest.digest", failing_digest)

        result = runner.invoke(main, ["digest", str(sample_project), "--json"])

        assert result.exit_code == 21
        error = json.loads(result.stderr)["error"]
        assert error["code"] == "READ_ERROR"
        assert error["relative_path"] == "project/README.md"
        assert error["reason"] == "gone"

    def test_interrupted(self, runner, sample_project, monkeypatch) -> None:
        """Ctrl+C during the scan exits with INTERRUPTED."""

        def interrupted_digest(request):
            raise KeyboardInterrupt

        monkeypatch.setattr("repodigest.cli.digest.digest", interrupted_digest)

        result = runner.invoke(main, ["digest", str(sample_project)])

        assert result.exit_code == 2
        assert "Digest aborted by user." in result.stderr


class TestDigestConfiguration:
    """Tests for config file and environment handling."""

    def test_config_file_patterns(
        self, runner, sample_project, isolated_config
    ) -> None:
        """Patterns from the config file apply when none are given."""
        isolated_config.parent.mkdir(parents=True)
        isolated_config.write_text('[digest]\npatterns = ["node_modules"]\n')

        result = runner.invoke(main, ["digest", str(sample_project)])

        assert result.exit_code == 0, result.output
        assert "node_modules" not in result.stdout

    def test_cli_patterns_replace_config(
        self, runner, sample_project, isolated_config
    ) -> None:
        """--pattern replaces configured patterns rather than adding to them."""
        isolated_config.parent.mkdir(parents=True)
        isolated_config.write_text('[digest]\npatterns = ["node_modules"]\n')

        result = runner.invoke(main, ["digest", str(sample_project), "-p", "*.md"])

        assert result.exit_code == 0, result.output
        assert "FILE: project/node_modules/lib/index.js" in result.stdout
        assert "FILE: project/README.md" not in result.stdout

    def test_explicit_config_option(self, runner, sample_project, tmp_path) -> None:
        """--config selects a specific file."""
        path = tmp_path / "custom.toml"
        path.write_text('[digest]\nmode = "include"\npatterns = ["*.py"]\n')

        result = runner.invoke(
            main, ["--config", str(path), "digest", str(sample_project)]
        )

        assert result.exit_code == 0, result.output
        assert "Files: 2" in result.stderr

    def test_invalid_config_file(self, runner, sample_project, tmp_path) -> None:
        """An invalid config file exits with CONFIG_ERROR."""
        path = tmp_path / "bad.toml"
        path.write_text("[digest]\nworkers = 0\n")

        result = runner.invoke(
            main, ["--config", str(path), "digest", str(sample_project)]
        )

        assert result.exit_code == 11
        assert "Invalid config file" in result.stderr

    def test_environment_variables(self, runner, sample_project) -> None:
        """REPODIGEST_* variables configure the scan."""
        result = runner.invoke(
            main,
            ["digest", str(sample_project)],
            env={"REPODIGEST_MODE": "include", "REPODIGEST_PATTERNS": "*.md"},
        )

        assert result.exit_code == 0, result.output
        assert "Files: 1" in result.stderr

    def test_invalid_env_mode(self, runner, sample_project) -> None:
        """An invalid mode from the environment exits with CONFIG_ERROR."""
        result = runner.invoke(
            main,
            ["digest", str(sample_project)],
            env={"REPODIGEST_MODE": "sideways"},
        )

        assert result.exit_code == 11
        assert "Invalid configuration" in result.stderr

    def test_log_level_info_reports_sources(self, runner, sample_project) -> None:
        """Info logging reports effective settings and their sources."""
        result = runner.invoke(
            main,
            ["--log-level", "info", "digest", str(sample_project), "-p", "dist"],
        )

        assert result.exit_code == 0, result.output
        assert "mode=exclude (default)" in result.stderr
        assert "patterns=1 (cli)" in result.stderr

    def test_log_file(self, runner, sample_project, tmp_path) -> None:
        """--log-file sends log records to a file."""
        log_file = tmp_path / "logs" / "digest.log"

        result = runner.invoke(
            main,
            [
                "--log-level",
                "info",
                "--log-file",
                str(log_file),
                "digest",
                str(sample_project),
            ],
        )

        assert result.exit_code == 0, result.output
        for handler in logging.getLogger().handlers:
            handler.close()
        assert "Digested 4 of 5 files" in log_file.read_text()


class TestHelpers:
    """Tests for digest command helpers."""

    def test_collect_patterns_none(self) -> None:
        """No --pattern options give None so configured patterns apply."""
        assert _collect_patterns(()) is None

    def test_collect_patterns_flattens(self) -> None:
        """Repeated options are split on commas and flattened."""
        assert _collect_patterns(("*.md, dist", "build")) == ["*.md", "dist", "build"]

    @pytest.mark.parametrize(
        ("tree_only", "content_only", "expected"),
        [
            (False, False, "Directory structure:\n└── r/\n    └── a.ts\n\nbody"),
            (True, False, "Directory structure:\n└── r/\n    └── a.ts"),
            (False, True, "body"),
        ],
    )
    def test_format_digest_output(self, tree_only, content_only, expected) -> None:
        """Tree and content are joined by a blank line."""
        result = DigestResult(
            file_count=1,
            content_lines=("body",),
            directory_structure=DirectoryNode("r", file_names=("a.ts",)),
        )

        assert (
            format_digest_output(
                result, tree_only=tree_only, content_only=content_only
            )
            == expected
        )
