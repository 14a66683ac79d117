"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO). The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from protodocs.output.console import create_console, get_output, style_for_kind

if TYPE_CHECKING:
    from rich.console import Console

    from protodocs.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode: one key per line."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    if items := result.items:
        return "\n".join(key for key in (_item_key(item) for item in items) if key)

    if "full_name" in result.data:
        return str(result.data["full_name"])
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _item_key(item: Any) -> str:
    """Extract the identifying value from a list item."""
    if isinstance(item, dict):
        for key in ("full_type", "rest_path", "name"):
            val = item.get(key)
            if val:
                return str(val)
    return ""


def _status_line(console: Console, result: ServiceResult) -> None:
    label = Text("OK", style="pd.ok")
    op = Text(f"  {result.op}", style="pd.op")
    console.print(label, op, end="")
    console.print()


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="pd.key")
    if key in ("full_name", "full_type", "root", "source", "target"):
        v = Text(str(value), style="pd.type")
    elif key.endswith("url") or key == "file":
        v = Text(str(value), style="pd.path")
    elif key in ("name", "display_name"):
        v = Text(str(value), style="pd.name")
    else:
        v = Text(str(value))
    console.print(k, v, end="")
    console.print()


def _count_footer(console: Console, result: ServiceResult, noun: str) -> None:
    count = result.data.get("count", len(result.items))
    console.print(f"\n{count} {noun}")


def _render_warnings(console: Console, result: ServiceResult) -> None:
    for warning in result.warnings:
        console.print(Text("  warning: ", style="pd.warning"), warning)


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="pd.error")
    op = Text(f"  {result.op}", style="pd.op")
    sep = Text(" — ")
    console.print(label, op, sep, msg)

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(f"    {k}: {v}")


# ── Schema renderers ──────────────────────────────────────────────────


def _render_summary(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    _status_line(console, result)
    for key in (
        "display_name",
        "name",
        "repo_url",
        "commit",
        "grpc_port",
        "rest_port",
        "rest_overrides",
    ):
        if d.get(key):
            _field(console, key, d[key])

    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Package", style="pd.name", no_wrap=True)
    table.add_column("Messages", justify="right")
    table.add_column("Enums", justify="right")
    table.add_column("Services", justify="right")
    table.add_column("Experimental")
    if verbose:
        table.add_column("Files", style="pd.path")
    for pkg in d.get("packages", []):
        row = [
            str(pkg["name"]),
            str(pkg["messages"]),
            str(pkg["enums"]),
            str(pkg["services"]),
            "yes" if pkg["experimental"] else "",
        ]
        if verbose:
            row.append(", ".join(pkg.get("files", [])))
        table.add_row(*row)
    console.print()
    console.print(table)


def _render_entity(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render a resolved message (field table) or enum (value table) in a panel."""
    d = result.data
    kind = str(d.get("kind", ""))
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    if kind == "enum":
        table.add_column("Value", style="pd.name")
        table.add_column("Number", justify="right")
        table.add_column("Description")
        for v in d.get("values", []):
            table.add_row(str(v["name"]), str(v["number"]), str(v.get("description", "")))
    else:
        table.add_column("Field", style="pd.name")
        table.add_column("Type", style="pd.type")
        table.add_column("Label")
        if verbose:
            table.add_column("Description")
        for f in d.get("fields", []):
            row = [str(f["name"]), str(f["full_type"]), str(f.get("label", ""))]
            if verbose:
                row.append(str(f.get("description", "")))
            table.add_row(*row)

    title = f"{kind} {d.get('full_name', '?')}"
    border = style_for_kind(kind) or "dim"
    console.print(Panel(table, title=title, border_style=border, expand=False))
    if d.get("file"):
        _field(console, "file", d["file"])


def _type_table(items: list[dict[str, Any]]) -> Table:
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Type", style="pd.type", no_wrap=True)
    table.add_column("Package")
    has_kind = any("kind" in item for item in items)
    if has_kind:
        table.add_column("Kind")
    for item in items:
        row = [str(item.get("full_type", "")), str(item.get("package", ""))]
        if has_kind:
            kind = str(item.get("kind", ""))
            row.append(f"[{style_for_kind(kind)}]{kind}[/]" if style_for_kind(kind) else kind)
        table.add_row(*row)
    return table


def _render_type_list(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render closure, dependencies, and dependents results."""
    _status_line(console, result)
    for key in ("root", "kind", "source", "target"):
        if key in result.data:
            _field(console, key, result.data[key])
    items = result.items
    if items:
        console.print()
        console.print(_type_table(items))
    _count_footer(console, result, "types")


def _render_method(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    _status_line(console, result)
    for key in ("full_name", "request_full_type", "response_full_type", "streaming"):
        if d.get(key):
            _field(console, key, d[key])
    if d.get("rest_path"):
        _field(console, "rest", f"{d.get('rest_method', '')} {d['rest_path']}")
    if d.get("deprecated"):
        console.print(Text("  deprecated", style="pd.warning"))
    if d.get("related_messages"):
        _field(console, "related_messages", ", ".join(d["related_messages"]))
    if d.get("related_enums"):
        _field(console, "related_enums", ", ".join(d["related_enums"]))
    if verbose and d.get("description"):
        console.print()
        console.print(d["description"].strip())
    _render_warnings(console, result)


def _render_endpoints(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Verb", style="pd.verb", no_wrap=True)
    table.add_column("Path", style="pd.type")
    table.add_column("Method", style="pd.name")
    if verbose:
        table.add_column("Link", style="pd.path")
    for item in result.items:
        row = [str(item["rest_method"]), str(item["rest_path"]), str(item["method_name"])]
        if verbose:
            row.append(str(item["link_url"]))
        table.add_row(*row)
    console.print(table)
    _count_footer(console, result, "endpoints")


def _render_experimental(
    result: ServiceResult, console: Console, *, verbose: bool = False
) -> None:
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Service", style="pd.name", no_wrap=True)
    table.add_column("File", style="pd.path")
    for item in result.items:
        table.add_row(str(item["name"]), str(item["file"]))
    console.print(table)
    _count_footer(console, result, "experimental services")


def _render_links(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("File", style="pd.name", no_wrap=True)
    table.add_column("gRPC", style="pd.path")
    if verbose:
        table.add_column("REST", style="pd.path")
    for item in result.items:
        row = [str(item["name"]), str(item["grpc_url"])]
        if verbose:
            row.append(str(item["rest_url"]))
        table.add_row(*row)
    console.print(table)
    _count_footer(console, result, "files")


def _render_cycles(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for cycle in result.data.get("cycles", []):
        console.print(f"  {' -> '.join(cycle)} -> {cycle[0]}")
    _count_footer(console, result, "cycles")


# ── Generic fallback ──────────────────────────────────────────────────


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        if isinstance(value, (dict, list)):
            _field(console, key, json.dumps(value, separators=(",", ":")))
        else:
            _field(console, key, value)
    _render_warnings(console, result)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Any] = {
    "summary": _render_summary,
    "resolve": _render_entity,
    "closure": _render_type_list,
    "describe_method": _render_method,
    "rest_endpoints": _render_endpoints,
    "experimental_services": _render_experimental,
    "repository_links": _render_links,
    "dependencies": _render_type_list,
    "dependents": _render_type_list,
    "cycles": _render_cycles,
}
