"""Standalone commands: daemon-wide aggregated views."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from protodocs.commands._base import ExampleCommand
from protodocs.services.schema import SchemaService

if TYPE_CHECKING:
    from protodocs.commands._context import AppContext


@click.command(
    cls=ExampleCommand,
    examples="""\
  protodocs -d lnd.json summary
  protodocs -d lnd.json -v summary""",
)
@click.pass_obj
def summary(app: AppContext) -> None:
    """Show the daemon's packages and metadata."""
    app.emit(SchemaService(app.daemon).summary())


@click.command(
    cls=ExampleCommand,
    examples="""\
  protodocs -d lnd.json endpoints
  protodocs -d lnd.json -q endpoints""",
)
@click.pass_obj
def endpoints(app: AppContext) -> None:
    """List REST endpoints sorted by path."""
    app.emit(SchemaService(app.daemon).rest_endpoints())


@click.command(
    cls=ExampleCommand,
    examples="""\
  protodocs -d lnd.json experimental""",
)
@click.pass_obj
def experimental(app: AppContext) -> None:
    """List services in experimental packages."""
    app.emit(SchemaService(app.daemon).experimental_services())


@click.command(
    cls=ExampleCommand,
    examples="""\
  protodocs -d lnd.json links
  protodocs -d lnd.json -v links""",
)
@click.pass_obj
def links(app: AppContext) -> None:
    """List repository links for every proto file."""
    app.emit(SchemaService(app.daemon).repository_links())
