"""Subcommand modules for protodocs.

Provides register_commands() which uses deferred imports to keep
``protodocs --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all command groups and standalone commands on the root CLI group."""
    # --- Groups ---
    from protodocs.commands.graph import graph
    from protodocs.commands.schema import schema

    cli.add_command(schema)
    cli.add_command(graph)

    # --- Standalone commands ---
    from protodocs.commands.views import endpoints, experimental, links, summary

    cli.add_command(summary)
    cli.add_command(endpoints)
    cli.add_command(experimental)
    cli.add_command(links)
