"""Rich Console factory and theme for protodocs output.

Creates Console instances that render to a StringIO buffer, preserving
the ``format_result() -> str`` contract. In non-TTY environments
(tests, pipes) Rich automatically disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

PROTODOCS_THEME = Theme(
    {
        "pd.ok": "bold green",
        "pd.error": "bold red",
        "pd.warning": "bold yellow",
        "pd.op": "bold cyan",
        "pd.key": "dim",
        "pd.type": "bold blue",
        "pd.path": "dim",
        "pd.name": "bold",
        "pd.kind.message": "green",
        "pd.kind.enum": "magenta",
        "pd.verb": "yellow",
    }
)

_KIND_STYLES: dict[str, str] = {
    "message": "pd.kind.message",
    "enum": "pd.kind.enum",
}


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes (used in tests).
        width: Override terminal width (useful for consistent test output).
    """
    return Console(
        file=StringIO(),
        theme=PROTODOCS_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_kind(kind: str) -> str:
    """Return the Rich style name for an entity kind."""
    return _KIND_STYLES.get(kind, "")
