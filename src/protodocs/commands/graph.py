"""Command group: type dependency graph."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from protodocs.commands._base import ExampleGroup
from protodocs.services.graph import TypeGraphService

if TYPE_CHECKING:
    from protodocs.commands._context import AppContext

_GRAPH_EXAMPLES = """\
  protodocs -d lnd.json graph deps lnrpc.Invoice
  protodocs -d lnd.json graph dependents lnrpc.Invoice.InvoiceState
  protodocs -d lnd.json graph cycles"""


@click.group(cls=ExampleGroup, examples=_GRAPH_EXAMPLES)
def graph() -> None:
    """Explore the type reference graph."""


@graph.command(
    name="deps",
    examples="""\
  protodocs -d lnd.json graph deps lnrpc.Invoice
  protodocs -d lnd.json --json graph deps lnrpc.Payment""",
)
@click.argument("full_type")
@click.pass_obj
def deps(app: AppContext, full_type: str) -> None:
    """Types a message depends on, directly or transitively."""
    app.emit(TypeGraphService(app.daemon).dependencies(full_type))


@graph.command(
    examples="""\
  protodocs -d lnd.json graph dependents lnrpc.Invoice.InvoiceState"""
)
@click.argument("full_type")
@click.pass_obj
def dependents(app: AppContext, full_type: str) -> None:
    """Messages that refer to a type, directly or transitively."""
    app.emit(TypeGraphService(app.daemon).dependents(full_type))


@graph.command(
    examples="""\
  protodocs -d lnd.json graph cycles"""
)
@click.pass_obj
def cycles(app: AppContext) -> None:
    """Report reference cycles between messages."""
    app.emit(TypeGraphService(app.daemon).cycles())
