"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO). The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from invoicectl.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from invoicectl.services.result import ServiceResult

# (key, title, justify) in display order.
ITEM_COLUMNS: tuple[tuple[str, str, str], ...] = (
    ("description", "Description", "left"),
    ("start_date", "Start Date", "center"),
    ("end_date", "End Date", "center"),
    ("hours", "Hours", "left"),
    ("rate", "Rate", "center"),
    ("amount", "Amount", "right"),
)


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console)
    else:
        _render_error(result, console, verbose=verbose)

    if verbose:
        _render_meta(console, result)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op}: {msg}"

    if result.op == "build_invoice":
        invoice = result.data.get("invoice", {})
        return f"OK: {result.op} {invoice.get('number', '')} {invoice.get('total_amount', '')}"

    paths = [result.data[key] for key in ("html_path", "pdf_path") if result.data.get(key)]
    if paths:
        return "\n".join(paths)
    return f"OK: {result.op}"


def items_table(items: list[dict[str, Any]]) -> Table:
    """Line-item table: description, dates, hours, rate, amount."""
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    for key, title, justify in ITEM_COLUMNS:
        style = "inv.money" if key == "amount" else None
        table.add_column(title, justify=justify, style=style)  # type: ignore[arg-type]
    for item in items:
        table.add_row(*(Text(str(item.get(key, ""))) for key, _title, _justify in ITEM_COLUMNS))
    return table


def summary_table(summary: dict[str, str]) -> Table:
    """Per-project totals table."""
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Project", justify="left", style="inv.project")
    table.add_column("Total", justify="right", style="inv.money")
    for project, total in summary.items():
        table.add_row(Text(project), Text(total))
    return table


# ── Helpers ───────────────────────────────────────────────────────────


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single key-value line."""
    console.print(Text(f"{key}: ", style="inv.key"), Text(str(value)), sep="")


def _timing_style(duration_ms: float) -> str:
    if duration_ms > 1000:
        return "bold red"
    if duration_ms > 100:
        return "yellow"
    return "dim"


def _span_lines(span: dict[str, Any], depth: int = 0) -> list[Text]:
    """Flatten a telemetry span tree into indented lines, parents first."""
    duration = span.get("duration_ms", 0.0)
    line = Text("    " * (depth + 1))
    line.append(f"{duration:>8.2f}ms", style=_timing_style(duration))
    line.append(f"  {span.get('name', '?')}")
    if notes := span.get("annotations"):
        line.append(f"  ({', '.join(f'{k}={v}' for k, v in notes.items())})")

    lines = [line]
    for child in span.get("children", []):
        lines.extend(_span_lines(child, depth + 1))
    return lines


def _render_meta(console: Console, result: ServiceResult) -> None:
    if not result.meta:
        return
    console.print()
    console.print(Text("  meta:", style="dim"))
    for key, value in result.meta.items():
        if key != "telemetry":
            console.print(Text(f"    {key}: {value}"))
            continue
        for line in _span_lines(value):
            console.print(line)


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="inv.error")
    op = Text(f"  {result.op}", style="inv.op")
    console.print(label, op, Text(": "), Text(msg), sep="")

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(Text(f"    {k}: {v}"))


# ── Operation renderers ──────────────────────────────────────────────


def _render_invoice(result: ServiceResult, console: Console) -> None:
    invoice = result.data["invoice"]
    console.print(Text("Invoice Summary:", style="inv.title"))
    console.print("================")
    _field(console, "Date", invoice["date"])
    _field(console, "Invoice Number", invoice["number"])
    _field(console, "Bill To", invoice["bill_to"].get("name", ""))
    console.print(items_table(invoice["items"]))
    total = Text(invoice["total"], style="inv.total")
    console.print(Text("Total: ", style="inv.key"), total, sep="")
    console.print(summary_table(invoice["summary"]))


def _render_export(result: ServiceResult, console: Console) -> None:
    for key, label in (("html_path", "HTML"), ("pdf_path", "PDF")):
        path = result.data.get(key)
        if path:
            console.print(
                Text(f"Invoice {label} generated: "),
                Text(Path(path).name, style="inv.path"),
                sep="",
            )


def _render_generic(result: ServiceResult, console: Console) -> None:
    console.print(Text("OK", style="inv.ok"), Text(f"  {result.op}", style="inv.op"), sep="")
    for key, value in result.data.items():
        _field(console, f"  {key}", value)


_OP_RENDERERS: dict[str, Callable[[ServiceResult, Console], None]] = {
    "build_invoice": _render_invoice,
    "export_html": _render_export,
    "export_pdf": _render_export,
}
