"""Root CLI group for protodocs with global flags and command registration."""

from __future__ import annotations

from pathlib import Path

import click

from protodocs import __version__
from protodocs.commands import register_commands
from protodocs.commands._context import AppContext
from protodocs.config.settings import ProtodocsSettings


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="protodocs")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug info.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.option(
    "-d",
    "--descriptor",
    "descriptor_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="JSON descriptor produced by the proto doc generator.",
)
@click.option("-n", "--name", "daemon_name", default=None, help="Daemon name (default: file stem).")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
    descriptor_path: Path | None,
    daemon_name: str | None,
) -> None:
    """Inspect an RPC daemon's schema for documentation."""
    ctx.ensure_object(dict)
    settings = ProtodocsSettings.from_cli(
        config_path=config_path,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
        descriptor_path=descriptor_path,
        daemon_name=daemon_name,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
