"""Command group: type resolution and closures."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from protodocs.commands._base import ExampleGroup
from protodocs.domain.types import EntityKind
from protodocs.services.schema import SchemaService

if TYPE_CHECKING:
    from protodocs.commands._context import AppContext

_SCHEMA_EXAMPLES = """\
  protodocs -d lnd.json schema resolve lnrpc.Invoice
  protodocs -d lnd.json schema resolve lnrpc.Invoice.InvoiceState --kind enum
  protodocs -d lnd.json schema closure lnrpc.Invoice --kind enum
  protodocs -d lnd.json schema method lnrpc.Lightning.GetInfo"""

_KIND_CHOICE = click.Choice([k.value for k in EntityKind])


@click.group(cls=ExampleGroup, examples=_SCHEMA_EXAMPLES)
def schema() -> None:
    """Resolve types and walk type references."""


@schema.command(
    examples="""\
  protodocs -d lnd.json schema resolve lnrpc.Invoice
  protodocs -d lnd.json schema resolve lnrpc.Invoice --rest
  protodocs -d lnd.json --json schema resolve lnrpc.Invoice.InvoiceState --kind enum"""
)
@click.argument("full_type")
@click.option("--kind", type=_KIND_CHOICE, default="message", help="Entity kind to resolve.")
@click.option("--rest", is_flag=True, help="Apply REST type overrides to message fields.")
@click.pass_obj
def resolve(app: AppContext, full_type: str, kind: str, rest: bool) -> None:
    """Resolve a full type name to a message or enum."""
    app.emit(SchemaService(app.daemon).resolve(full_type, kind=kind, rest=rest))


@schema.command(
    examples="""\
  protodocs -d lnd.json schema closure lnrpc.Invoice
  protodocs -d lnd.json schema closure lnrpc.Invoice --kind enum"""
)
@click.argument("full_type")
@click.option("--kind", type=_KIND_CHOICE, default="message", help="Entity kind to collect.")
@click.pass_obj
def closure(app: AppContext, full_type: str, kind: str) -> None:
    """List the messages or enums reachable from a message."""
    app.emit(SchemaService(app.daemon).closure(full_type, kind=kind))


@schema.command(
    examples="""\
  protodocs -d lnd.json schema method lnrpc.Lightning.GetInfo
  protodocs -d lnd.json -v schema method routerrpc.Router.SendPaymentV2"""
)
@click.argument("full_name")
@click.pass_obj
def method(app: AppContext, full_name: str) -> None:
    """Describe an RPC method and its related types."""
    app.emit(SchemaService(app.daemon).describe_method(full_name))
