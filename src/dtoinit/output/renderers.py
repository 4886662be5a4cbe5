"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO).  The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rich.json import JSON
from rich.table import Table
from rich.text import Text

from dtoinit.output.console import create_console, get_output, style_for_shape
from dtoinit.output.formatters import dump_document

if TYPE_CHECKING:
    from rich.console import Console

    from dtoinit.output.formatters import OutputSettings
    from dtoinit.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, settings: OutputSettings) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, settings=settings)
    else:
        _render_error(result, console, settings=settings)

    return get_output(console).rstrip("\n")


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    label = Text("OK", style="dto.ok")
    op = Text(f"  {result.op}", style="dto.op")
    console.print(label, op, end="")
    type_name = result.data.get("type")
    if type_name:
        console.print(Text(f"  {type_name}", style="dto.type"), end="")
    console.print()


def _field(console: Console, key: str, value: Any) -> None:
    console.print(Text(f"  {key}: ", style="dto.key"), str(value), sep="")


def _render_error(result: ServiceResult, console: Console, *, settings: OutputSettings) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="dto.error")
    op = Text(f"  {result.op}", style="dto.op")
    sep = Text(" — ")
    console.print(label, op, sep, msg)

    if settings.verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(f"    {k}: {v}")


# ── Document renderers ────────────────────────────────────────────────


def _render_document(result: ServiceResult, console: Console, *, settings: OutputSettings) -> None:
    """Status line, then the generated document as pretty JSON."""
    _status_line(console, result)
    mode = result.data.get("mode")
    if mode:
        _field(console, "mode", mode)
    text = dump_document(result.data.get("value"), settings)
    console.print(JSON(text, indent=settings.indent or None, highlight=False))


def _render_describe(result: ServiceResult, console: Console, *, settings: OutputSettings) -> None:
    _status_line(console, result)
    fields: list[dict[str, Any]] = result.data.get("fields", [])
    if not fields:
        console.print(Text("  (no fields)", style="dim"))
        return

    table = Table(show_header=True, header_style="bold", box=None, pad_edge=False)
    table.add_column("Field")
    table.add_column("Shape")
    table.add_column("Type")
    table.add_column("Writable")
    if settings.verbose:
        table.add_column("Key", style="dto.key")

    for item in fields:
        shape = item.get("shape")
        row = [
            item.get("name", ""),
            Text(shape or "skipped", style=style_for_shape(shape)),
            item.get("type") or "-",
            "yes" if item.get("writable") else "no",
        ]
        if settings.verbose:
            row.append(item.get("key", ""))
        table.add_row(*row)
    console.print(table)


def _render_generic(result: ServiceResult, console: Console, *, settings: OutputSettings) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        if key == "type":
            continue
        if isinstance(value, (dict, list)):
            _field(console, key, dump_document(value, settings.model_copy(update={"indent": 0})))
        else:
            _field(console, key, value)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Any] = {
    "skeleton": _render_document,
    "tree": _render_document,
    "describe": _render_describe,
}
