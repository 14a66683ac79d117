"""Tests for structlog configuration."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import pytest
import structlog
from click.testing import CliRunner

from protodocs.cli import cli
from protodocs.config.logging import bind_daemon_context, configure_logging
from protodocs.domain.descriptor import DaemonDescriptor
from protodocs.registry.daemon import Daemon


def _json_lines(text: str) -> list[dict[str, Any]]:
    return [json.loads(line) for line in text.splitlines() if line.startswith("{")]


class TestConfigureLogging:
    def test_verbose_enables_debug(self) -> None:
        configure_logging(verbose=True, log_json=False)
        assert logging.getLogger("protodocs").level == logging.DEBUG
        assert logging.getLogger().level == logging.WARNING

    def test_non_verbose_sets_warning(self) -> None:
        configure_logging(verbose=False, log_json=False)
        assert logging.getLogger("protodocs").level == logging.WARNING

    def test_json_mode_output(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        log = structlog.get_logger("protodocs.test")
        log.warning("json test", answer=42)
        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["event"] == "json test"
        assert parsed["answer"] == 42
        assert parsed["level"] == "warning"
        assert parsed["logger"] == "protodocs.test"
        assert parsed["timestamp"].endswith("Z")

    def test_registry_logger_gets_structured_fields(
        self, capfd: pytest.CaptureFixture[str]
    ) -> None:
        configure_logging(verbose=True, log_json=True)
        Daemon("lnd", DaemonDescriptor())
        lines = _json_lines(capfd.readouterr().err)
        created = [p for p in lines if p["event"] == "Creating daemon lnd with 0 proto files"]
        assert len(created) == 1
        assert created[0]["level"] == "info"
        assert created[0]["logger"] == "protodocs.registry.daemon"
        assert created[0]["proto_files"] == 0

    def test_duplicate_warning_carries_declaration(
        self, capfd: pytest.CaptureFixture[str]
    ) -> None:
        configure_logging(verbose=False, log_json=True)
        thing = {"name": "Thing", "fields": []}
        Daemon(
            "x",
            DaemonDescriptor.model_validate(
                {
                    "files": [
                        {"name": "a.proto", "package": "pkg", "messages": [thing]},
                        {"name": "b.proto", "package": "pkg", "messages": [thing]},
                    ]
                }
            ),
        )
        (warning,) = _json_lines(capfd.readouterr().err)
        assert warning["level"] == "warning"
        assert warning["package"] == "pkg"
        assert warning["kind"] == "message"
        assert warning["declaration"] == "Thing"
        assert warning["file"] == "b.proto"

    def test_info_hidden_without_verbose(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=False, log_json=True)
        Daemon("lnd", DaemonDescriptor())
        assert capfd.readouterr().err == ""

    def test_third_party_debug_is_suppressed(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        logging.getLogger("networkx").debug("graph noise")
        assert capfd.readouterr().err == ""

    def test_idempotent_calls(self) -> None:
        """Multiple configure_logging calls don't stack handlers."""
        configure_logging(verbose=True, log_json=False)
        configure_logging(verbose=True, log_json=True)
        assert len(logging.getLogger().handlers) == 1


class TestDaemonContext:
    def test_bound_daemon_tags_records(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        bind_daemon_context("loop", Path("protos") / "loop.json")
        logging.getLogger("protodocs.test").warning("swap lookup")
        (parsed,) = _json_lines(capfd.readouterr().err)
        assert parsed["daemon"] == "loop"
        assert parsed["descriptor"] == str(Path("protos") / "loop.json")

    def test_descriptor_optional(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        bind_daemon_context("pool")
        logging.getLogger("protodocs.test").warning("order lookup")
        (parsed,) = _json_lines(capfd.readouterr().err)
        assert parsed["daemon"] == "pool"
        assert "descriptor" not in parsed

    def test_reconfigure_drops_stale_context(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        bind_daemon_context("loop")
        configure_logging(verbose=True, log_json=True)
        logging.getLogger("protodocs.test").warning("fresh run")
        (parsed,) = _json_lines(capfd.readouterr().err)
        assert "daemon" not in parsed

    def test_cli_failure_log_names_daemon_and_op(
        self, cli_runner: CliRunner, descriptor_file: Path, isolated_cwd: Path
    ) -> None:
        result = cli_runner.invoke(
            cli,
            ["-v", "--log-json", "-d", str(descriptor_file), "schema", "resolve", "lnrpc.Payment"],
        )
        assert result.exit_code == 1
        failures = [p for p in _json_lines(result.output) if p.get("op") == "resolve"]
        assert len(failures) == 1
        assert failures[0]["code"] == "UNKNOWN_MESSAGE"
        assert failures[0]["daemon"] == "lnd"
        assert failures[0]["descriptor"] == str(descriptor_file)
        assert failures[0]["logger"] == "protodocs.services.base"
