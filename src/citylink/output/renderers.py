"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO).  Renderers
are dispatched by ``result.op`` in :func:`render_result`.

Every line is printed with ``soft_wrap=True``: a neighbour-table row for
a large graph must stay on one line whatever the console width.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rich.text import Text

from citylink.domain.closure import CLOSURE_HEADER, format_edge
from citylink.domain.pathfinder import format_path
from citylink.output.console import create_console, get_output

if TYPE_CHECKING:
    from collections.abc import Callable

    from rich.console import Console

    from citylink.services.result import ServiceResult

NEIGHBOR_HEADER = "Neighbor table"
PATH_FOUND = "Yes Path Exists!"
PATH_MISSING = "No Path Exists!"


# ── Public API ────────────────────────────────────────────────────────


def render_result(
    result: ServiceResult,
    *,
    verbose: bool = False,
    path_separator: str = "=>",
) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text when Rich detects no terminal, which is the case
    inside Click's CliRunner and piped output.
    """
    console = create_console()

    if result.ok:
        _OP_RENDERERS[result.op](result, console, path_separator=path_separator)
        if verbose:
            _render_meta(console, result)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult, *, path_separator: str = "=>") -> str:
    """Bare output for ``--quiet``: no headers, no banners."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    data = result.data
    if result.op == "inspect":
        return "\n".join(_row_line(row) for row in data.get("rows", []))
    if result.op == "route":
        if not data.get("exists"):
            return PATH_MISSING
        return format_path(data.get("path", []), path_separator)
    if result.op == "closure":
        return "\n".join(format_edge(tuple(edge)) for edge in data.get("edges", []))
    return str(data.get("output", ""))


# ── Helpers ───────────────────────────────────────────────────────────


def _row_line(row: list[int]) -> str:
    return " ".join(str(cell) for cell in row)


def _line(console: Console, text: Text | str) -> None:
    console.print(text, soft_wrap=True)


def _render_meta(console: Console, result: ServiceResult) -> None:
    """Print the meta block, including the telemetry span tree."""
    if not result.meta:
        return

    console.print()
    console.print(Text("  meta:", style="dim"))

    for k, v in result.meta.items():
        if k == "telemetry":
            _render_telemetry_tree(console, v, indent=4)
        else:
            _line(console, Text(f"    {k}: {v}"))


def _render_telemetry_tree(
    console: Console,
    span_data: dict[str, Any],
    indent: int = 4,
) -> None:
    """Render a span tree with color-coded timing."""
    prefix = " " * indent
    name = span_data.get("name", "?")
    duration = span_data.get("duration_ms", 0.0)

    if duration > 1000:
        style = "bold red"
    elif duration > 100:
        style = "yellow"
    else:
        style = "dim"

    line = Text(prefix)
    line.append(f"{duration:>8.2f}ms", style=style)
    line.append(f"  {name}")
    counters = span_data.get("counters") or {}
    if counters:
        line.append(f"  ({', '.join(f'{k}={v}' for k, v in counters.items())})")
    _line(console, line)

    for child in span_data.get("children", []):
        _render_telemetry_tree(console, child, indent=indent + 4)


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    line = Text("ERROR", style="cl.error")
    line.append(f"  {result.op}", style="cl.op")
    line.append(f" — {msg}")
    _line(console, line)

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            _line(console, Text(f"    {k}: {v}"))


# ── Operation renderers ───────────────────────────────────────────────


def _render_inspect(result: ServiceResult, console: Console, *, path_separator: str) -> None:
    """Neighbour table: header, then one row per vertex."""
    _line(console, Text(NEIGHBOR_HEADER, style="cl.header"))
    for row in result.data.get("rows", []):
        _line(console, Text(_row_line(row)))


def _render_route(result: ServiceResult, console: Console, *, path_separator: str) -> None:
    """Verdict line, then the path as ``v0=>v1=>...``."""
    if not result.data.get("exists"):
        _line(console, Text(PATH_MISSING, style="cl.missing"))
        return

    _line(console, Text(PATH_FOUND, style="cl.ok"))
    chain = Text()
    for index, vertex in enumerate(result.data.get("path", [])):
        if index:
            chain.append(path_separator, style="cl.path")
        chain.append(str(vertex), style="cl.vertex")
    _line(console, chain)


def _render_closure(result: ServiceResult, console: Console, *, path_separator: str) -> None:
    """``R* table`` header and one ``u -> w`` line per edge, in discovery order."""
    _line(console, Text(CLOSURE_HEADER, style="cl.header"))
    for edge in result.data.get("edges", []):
        _line(console, Text(format_edge(tuple(edge)), style="cl.edge"))


def _render_write_closure(result: ServiceResult, console: Console, *, path_separator: str) -> None:
    line = Text("Saving ")
    line.append(str(result.data.get("output", "")), style="cl.path")
    line.append("...")
    _line(console, line)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Callable[..., None]] = {
    "inspect": _render_inspect,
    "route": _render_route,
    "closure": _render_closure,
    "write_closure": _render_write_closure,
}
