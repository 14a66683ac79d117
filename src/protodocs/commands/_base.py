"""Click base classes for commands that carry usage examples.

``--examples`` prints a command's examples and exits before any descriptor
is read. Examples are written against the placeholder ``-d lnd.json``; when
the invocation already names a descriptor, they are shown against that file
instead. ``--help`` lists the first example and points at ``--examples``.
"""

from __future__ import annotations

import textwrap
from typing import Any

import click

from protodocs.commands._context import AppContext

EXAMPLE_DESCRIPTOR = "lnd.json"


class _ExamplesMixin:
    examples: str | None
    params: list[click.Parameter]

    def _init_examples(self, examples: str | None) -> None:
        self.examples = textwrap.dedent(examples).strip("\n") if examples else None
        if self.examples:
            self.params.append(
                click.Option(
                    ["--examples"],
                    is_flag=True,
                    expose_value=False,
                    is_eager=True,
                    callback=self._show_examples,
                    help="Show usage examples and exit.",
                )
            )

    def examples_for(self, ctx: click.Context) -> str:
        """The examples, pointed at the invocation's descriptor when it has one."""
        text = self.examples or ""
        app = ctx.find_object(AppContext)
        if app is not None and app.settings.descriptor_path is not None:
            text = text.replace(f"-d {EXAMPLE_DESCRIPTOR}", f"-d {app.settings.descriptor_path}")
        return text

    def _show_examples(self, ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value or ctx.resilient_parsing:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(textwrap.indent(self.examples_for(ctx), "  "))
        ctx.exit(0)

    def format_epilog(self, ctx: click.Context, formatter: click.HelpFormatter) -> None:
        super().format_epilog(ctx, formatter)  # type: ignore[misc]
        if not self.examples:
            return
        first = self.examples_for(ctx).splitlines()[0]
        with formatter.section("Example"):
            formatter.write_text(first)
            formatter.write_text("Run with --examples for more.")


class ExampleCommand(_ExamplesMixin, click.Command):
    """Click Command with an ``--examples`` flag."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._init_examples(examples)


class ExampleGroup(_ExamplesMixin, click.Group):
    """Click Group with ``--examples`` whose subcommands default to :class:`ExampleCommand`."""

    command_class = ExampleCommand

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._init_examples(examples)
