"""Shared pytest fixtures for protodocs tests."""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Generator
from pathlib import Path
from typing import Any

import pytest
import structlog
from click.testing import CliRunner

from protodocs.domain.descriptor import DaemonDescriptor
from protodocs.registry.daemon import Daemon


def _field(name: str, full_type: str, label: str = "") -> dict[str, Any]:
    short = full_type.rsplit(".", 1)[-1]
    return {"name": name, "type": short, "longType": short, "fullType": full_type, "label": label}


def _message(name: str, *fields: dict[str, Any], long_name: str | None = None) -> dict[str, Any]:
    return {"name": name, "longName": long_name or name, "fields": list(fields)}


def _enum(name: str, *values: str, long_name: str | None = None) -> dict[str, Any]:
    return {
        "name": name,
        "longName": long_name or name,
        "values": [{"name": v, "number": str(i)} for i, v in enumerate(values)],
    }


def lnd_descriptor_data() -> dict[str, Any]:
    """A trimmed lnd descriptor spanning two packages and four files."""
    lightning = {
        "name": "lightning.proto",
        "package": "lnrpc",
        "messages": [
            _message("GetInfoRequest"),
            _message(
                "GetInfoResponse",
                _field("version", "string"),
                _field("chains", "lnrpc.Chain", "repeated"),
            ),
            _message("Chain", _field("chain", "string"), _field("network", "string")),
            _message(
                "Invoice",
                _field("memo", "string"),
                _field("r_hash", "bytes"),
                _field("state", "lnrpc.Invoice.InvoiceState"),
                _field("htlcs", "lnrpc.InvoiceHTLC", "repeated"),
            ),
            _message(
                "InvoiceHTLC",
                _field("chan_id", "uint64"),
                _field("state", "lnrpc.InvoiceHTLCState"),
            ),
            _message("AddInvoiceResponse", _field("r_hash", "bytes")),
            _message(
                "SendRequest",
                _field("dest", "bytes"),
                _field("route_hints", "lnrpc.RouteHint", "repeated"),
            ),
            _message("SendResponse", _field("payment_route", "lnrpc.Route")),
            _message("RouteHint", _field("hop_hints", "lnrpc.HopHint", "repeated")),
            _message("HopHint", _field("node_id", "string")),
            _message(
                "Route", _field("total_fees", "int64"), _field("hops", "lnrpc.Hop", "repeated")
            ),
            _message("Hop", _field("chan_id", "uint64"), _field("mpp_record", "lnrpc.MPPRecord")),
            _message("MPPRecord", _field("payment_addr", "bytes")),
        ],
        "enums": [_enum("InvoiceHTLCState", "ACCEPTED", "SETTLED", "CANCELED")],
        "services": [
            {
                "name": "Lightning",
                "methods": [
                    {
                        "name": "GetInfo",
                        "description": "lncli: `getinfo`\nGetInfo returns general information.",
                        "requestType": "GetInfoRequest",
                        "requestFullType": "lnrpc.GetInfoRequest",
                        "responseType": "GetInfoResponse",
                        "responseFullType": "lnrpc.GetInfoResponse",
                        "restMapping": {"method": "GET", "path": "/v1/getinfo"},
                    },
                    {
                        "name": "SendPayment",
                        "description": "Deprecated, use routerrpc.SendPaymentV2.",
                        "requestFullType": "lnrpc.SendRequest",
                        "responseFullType": "lnrpc.SendResponse",
                        "requestStreaming": True,
                        "responseStreaming": True,
                    },
                    {
                        "name": "AddInvoice",
                        "requestFullType": "lnrpc.Invoice",
                        "responseFullType": "lnrpc.AddInvoiceResponse",
                        "options": {
                            "google.api.http": {
                                "rules": [{"method": "POST", "pattern": "/v1/invoices"}]
                            }
                        },
                    },
                ],
            }
        ],
    }
    invoices = {
        "name": "invoices.proto",
        "package": "lnrpc",
        "enums": [
            _enum(
                "InvoiceState",
                "OPEN",
                "SETTLED",
                "CANCELED",
                long_name="Invoice.InvoiceState",
            )
        ],
    }
    router = {
        "name": "routerrpc/router.proto",
        "package": "routerrpc",
        "messages": [
            _message(
                "SendPaymentRequest",
                _field("dest", "bytes"),
                _field("route_hints", "lnrpc.RouteHint", "repeated"),
            ),
            _message("SendToRouteRequest", _field("route", "lnrpc.Route")),
        ],
        "services": [
            {
                "name": "Router",
                "methods": [
                    {
                        "name": "SendPaymentV2",
                        "description": (
                            "lncli: `sendpayment`\nSendPaymentV2 attempts to route a payment."
                        ),
                        "requestFullType": "routerrpc.SendPaymentRequest",
                        "responseFullType": "lnrpc.Payment",
                        "responseStreaming": True,
                        "restMapping": {"method": "POST", "path": "/v2/router/send"},
                    },
                    {
                        "name": "TrackPaymentV2",
                        "requestFullType": "routerrpc.SendToRouteRequest",
                        "responseFullType": "lnrpc.Route",
                        "restMapping": {
                            "method": "GET",
                            "path": "/v2/router/track/{payment_hash}",
                        },
                    },
                ],
            }
        ],
    }
    unlocker = {
        "name": "walletunlocker.proto",
        "package": "lnrpc",
        "services": [
            {
                "name": "WalletUnlocker",
                "methods": [
                    {
                        "name": "GenSeed",
                        "requestFullType": "lnrpc.GetInfoRequest",
                        "responseFullType": "lnrpc.GetInfoResponse",
                        "restMapping": {"method": "GET", "path": "/v1/genseed"},
                    }
                ],
            }
        ],
    }
    return {
        "files": [lightning, invoices, router, unlocker],
        "restTypes": [{"message": "lnrpc.Invoice", "field": "r_hash", "type": "string"}],
        "repoURL": "https://github.com/lightningnetwork/lnd",
        "commit": "abc123",
        "protoSrcDir": "lnrpc",
        "experimentalPackages": ["routerrpc"],
        "grpcPort": 10009,
        "restPort": 8080,
        "cliCmd": "lncli",
        "daemonCmd": "lnd",
    }


@pytest.fixture(autouse=True)
def _isolate_logging() -> Generator[None]:
    """Undo handler and level changes made by CLI invocations."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    pd_level = logging.getLogger("protodocs").level
    yield
    structlog.contextvars.clear_contextvars()
    root.handlers = handlers
    root.setLevel(level)
    logging.getLogger("protodocs").setLevel(pd_level)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def descriptor() -> DaemonDescriptor:
    return DaemonDescriptor.model_validate(lnd_descriptor_data())


@pytest.fixture
def daemon(descriptor: DaemonDescriptor) -> Daemon:
    """Registry built from the trimmed lnd descriptor."""
    return Daemon("lnd", descriptor)


@pytest.fixture
def descriptor_file(tmp_path: Path) -> Path:
    """The lnd descriptor written to ``<tmp>/lnd.json``."""
    path = tmp_path / "lnd.json"
    path.write_text(json.dumps(lnd_descriptor_data()), encoding="utf-8")
    return path


@pytest.fixture
def make_daemon() -> Callable[..., Daemon]:
    """Build a daemon from a single-package map of message name -> field types.

    ``make_daemon({"A": ["cyc.B"], "B": ["cyc.A"]}, enums=["E"])`` declares
    messages A and B in package ``cyc`` with one field per listed type.
    """

    def _make(
        messages: dict[str, list[str]],
        *,
        enums: list[str] | None = None,
        package: str = "cyc",
        **kwargs: Any,
    ) -> Daemon:
        data = {
            "files": [
                {
                    "name": f"{package}.proto",
                    "package": package,
                    "messages": [
                        _message(name, *(_field(f"f{i}", t) for i, t in enumerate(types)))
                        for name, types in messages.items()
                    ],
                    "enums": [_enum(name, "ZERO") for name in enums or []],
                }
            ]
        }
        return Daemon(package, DaemonDescriptor.model_validate(data), **kwargs)

    return _make


@pytest.fixture
def isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run from an empty directory with no config env vars set."""
    for name in ("PROTODOCS_CONFIG", "PROTODOCS_DESCRIPTOR_PATH", "PROTODOCS_DAEMON_NAME"):
        monkeypatch.delenv(name, raising=False)
    workdir = tmp_path / "work"
    workdir.mkdir()
    monkeypatch.chdir(workdir)
    return workdir
