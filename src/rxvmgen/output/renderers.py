"""Rich renderers for ServiceResult, one per operation.

``render`` (with ``--output``) prints the written path, ``inspect`` prints
one member table per interface, and any other op falls back to plain
key-value lines. Source-derived strings are always wrapped in
:class:`~rich.text.Text` so attribute syntax like ``[Once]`` is never
read as Rich markup.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from rich.padding import Padding
from rich.table import Table
from rich.text import Text
from rich.tree import Tree

from rxvmgen.output.console import create_console, get_output, style_for_role

if TYPE_CHECKING:
    from rich.console import Console

    from rxvmgen.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Human-readable text for *result*, chosen by ``result.op``."""
    console = create_console()
    renderer = _OP_RENDERERS.get(result.op, _render_generic) if result.ok else _render_error
    renderer(result, console, verbose=verbose)
    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"
    if "path" in result.data:
        return str(result.data["path"])
    interfaces = result.data.get("interfaces")
    if interfaces and isinstance(interfaces, list):
        return "\n".join(_interface_name(item) for item in interfaces)
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _interface_name(item: Any) -> str:
    if isinstance(item, dict):
        return str(item.get("interfaceName", ""))
    return str(item)


def _status_line(console: Console, result: ServiceResult) -> None:
    """Print the OK status line."""
    console.print(Text("OK", style="rxv.ok"), Text(f"  {result.op}", style="rxv.op"))


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="rxv.key")
    style = "rxv.path" if key in ("path", "source") else ""
    console.print(k, Text(str(value), style=style), sep="")


def _render_meta(console: Console, result: ServiceResult) -> None:
    """Print ``meta`` entries; the telemetry span tree is drawn as a tree."""
    if not result.meta:
        return

    console.print()
    console.print(Text("  meta:", style="dim"))
    for key, value in result.meta.items():
        if key == "telemetry":
            tree = Tree(_span_label(value), guide_style="dim")
            _add_span_children(tree, value)
            console.print(Padding(tree, (0, 0, 0, 4)))
        else:
            console.print(Text(f"    {key}: {value}"))


def _span_label(span: dict[str, Any]) -> Text:
    duration = span.get("duration_ms", 0.0)
    style = "bold red" if duration > 1000 else "yellow" if duration > 100 else "dim"
    label = Text.assemble((f"{duration:.2f}ms", style), f"  {span.get('name', '?')}")
    annotations = span.get("annotations") or {}
    if annotations:
        label.append("  (" + ", ".join(f"{k}={v}" for k, v in annotations.items()) + ")")
    return label


def _add_span_children(tree: Tree, span: dict[str, Any]) -> None:
    for child in span.get("children", []):
        _add_span_children(tree.add(_span_label(child)), child)


def _table_title(iface: dict[str, Any]) -> Text:
    routable = "  (routable)" if iface.get("isRoutableViewModel") else ""
    return Text.assemble(
        (iface.get("interfaceName", "?"), "rxv.name"),
        " -> ",
        (iface.get("implClassName", "?"), "rxv.name"),
        routable,
    )


def _opaque_summary(text: str) -> str:
    """The member's declaration line, skipping attribute lines."""
    lines = [line.strip() for line in text.split("\n") if line.strip()]
    return next((line for line in lines if not line.startswith("[")), lines[0] if lines else "")


def _member_table(iface: dict[str, Any]) -> Table:
    """Build a Rich Table listing one interface's classified members.

    The caller prints :func:`_table_title` above it; a table title would
    wrap to the width of the columns.
    """
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Member", no_wrap=True)
    table.add_column("Role")
    table.add_column("Type")

    for prop in iface.get("properties", []):
        role = prop.get("role", "")
        if role == "opaque":
            summary = _opaque_summary(str(prop.get("text", "")))
            name, type_text = Text(summary, style="rxv.role.opaque"), Text("")
        else:
            name, type_text = Text(str(prop.get("name", ""))), Text(str(prop.get("type", "")))
        table.add_row(name, Text(role, style=style_for_role(role)), type_text)

    return table


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    console.print(
        Text("ERROR", style="rxv.error"),
        Text(f"  {result.op}", style="rxv.op"),
        Text(" — "),
        Text(msg),
        sep="",
    )

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(Text(f"    {k}: {v}"))


# ── Operation renderers ───────────────────────────────────────────────


def _render_written(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render a ``render --output`` result (the code went to a file)."""
    _status_line(console, result)
    for key in ("source", "path"):
        if key in result.data:
            _field(console, key, result.data[key])
    _field(console, "interfaces", ", ".join(result.data.get("interfaces", [])))
    if verbose:
        _render_meta(console, result)


def _render_inspect(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render one member table per interface."""
    _status_line(console, result)
    _field(console, "source", result.data.get("source", ""))
    for iface in result.data.get("interfaces", []):
        console.print()
        console.print(_table_title(iface))
        console.print(_member_table(iface))
        if verbose and iface.get("definition"):
            console.print(Text(iface["definition"], style="dim"))
    if verbose:
        _render_meta(console, result)


# ── Generic fallback ──────────────────────────────────────────────────


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        if isinstance(value, (dict, list)):
            _field(console, key, json.dumps(value, separators=(",", ":")))
        else:
            _field(console, key, value)
    if verbose:
        _render_meta(console, result)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Any] = {
    "render": _render_written,
    "inspect": _render_inspect,
}
