"""AppContext: shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``. Provides lazy Daemon construction and centralized
result emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from protodocs.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from protodocs.config.settings import ProtodocsSettings
    from protodocs.registry.daemon import Daemon
    from protodocs.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    The daemon is built on first use so ``--help`` and ``--examples``
    never read the descriptor.
    """

    def __init__(self, settings: ProtodocsSettings) -> None:
        self.settings = settings
        self._daemon: Daemon | None = None

        from protodocs.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @property
    def daemon(self) -> Daemon:
        """The schema registry (loaded lazily on first access)."""
        if self._daemon is None:
            from protodocs.config.logging import bind_daemon_context
            from protodocs.domain.errors import DescriptorError, DuplicateDeclarationError
            from protodocs.infrastructure.descriptor import load_descriptor
            from protodocs.registry.daemon import Daemon

            path = self.settings.descriptor_path
            if path is None:
                msg = (
                    "No descriptor given. Pass --descriptor or set descriptor_path "
                    "in protodocs.toml."
                )
                raise click.UsageError(msg)
            bind_daemon_context(self.settings.resolved_daemon_name, path)
            try:
                descriptor = load_descriptor(path)
                self._daemon = Daemon(
                    self.settings.resolved_daemon_name,
                    descriptor,
                    resolution=self.settings.resolution,
                    display=self.settings.display,
                )
            except (DescriptorError, DuplicateDeclarationError) as exc:
                raise click.ClickException(str(exc)) from exc
        return self._daemon

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings are emitted to stderr so they don't pollute piped output.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
