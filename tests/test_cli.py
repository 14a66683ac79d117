"""Tests for the root CLI group."""

from __future__ import annotations

from pathlib import Path

import pytest
from click.testing import CliRunner

from protodocs import __version__
from protodocs.cli import cli


@pytest.fixture(autouse=True)
def _cwd(isolated_cwd: Path) -> None:
    pass


class TestRoot:
    def test_no_args_shows_help(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, [])
        assert result.exit_code == 0
        assert "Usage" in result.output

    def test_help_lists_commands(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        for name in ("schema", "graph", "summary", "endpoints", "experimental", "links"):
            assert name in result.output

    def test_version(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_help_does_not_need_descriptor(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["schema", "resolve", "--help"])
        assert result.exit_code == 0
        assert "--kind" in result.output

    def test_descriptor_must_be_file(self, cli_runner: CliRunner, isolated_cwd: Path) -> None:
        result = cli_runner.invoke(cli, ["-d", str(isolated_cwd), "summary"])
        assert result.exit_code == 2

    def test_binary_descriptor_is_a_clean_error(
        self, cli_runner: CliRunner, isolated_cwd: Path
    ) -> None:
        binary = isolated_cwd / "lnd.json"
        binary.write_bytes(b"\xff\xfe\x00")
        result = cli_runner.invoke(cli, ["-d", str(binary), "summary"])
        assert result.exit_code == 1
        assert "is not UTF-8 text" in result.output
        assert "Traceback" not in result.output


class TestGlobalFlags:
    def test_verbose_logs_daemon_creation(
        self, cli_runner: CliRunner, descriptor_file: Path
    ) -> None:
        result = cli_runner.invoke(
            cli, ["-v", "--log-json", "-d", str(descriptor_file), "-q", "links"]
        )
        assert result.exit_code == 0, result.output
        assert "Creating daemon lnd with 4 proto files" in result.output

    def test_explicit_config(
        self, cli_runner: CliRunner, descriptor_file: Path, tmp_path: Path
    ) -> None:
        config = tmp_path / "elsewhere.toml"
        config.write_text('[display.proper_names]\nlnd = "Lightning Network Daemon"\n')
        result = cli_runner.invoke(
            cli, ["-c", str(config), "--json", "-d", str(descriptor_file), "summary"]
        )
        assert result.exit_code == 0, result.output
        assert '"display_name": "Lightning Network Daemon"' in result.output
