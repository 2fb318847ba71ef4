"""Rich console used to render results to text.

Renderers print into an in-memory console and hand back a string, which
the CLI echoes through Click. Without a terminal attached (pipes, tests)
Rich emits no colour codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

DEFAULT_WIDTH = 120

INVOICE_THEME = Theme(
    {
        "inv.ok": "bold green",
        "inv.error": "bold red",
        "inv.op": "bold cyan",
        "inv.key": "dim",
        "inv.title": "bold underline",
        "inv.path": "dim",
        "inv.money": "green",
        "inv.total": "bold green",
        "inv.project": "cyan",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Console writing into a private ``StringIO`` buffer."""
    return Console(
        file=StringIO(),
        theme=INVOICE_THEME,
        no_color=no_color,
        highlight=False,
        width=width or DEFAULT_WIDTH,
    )


def get_output(console: Console) -> str:
    """Everything printed to a console made by :func:`create_console`."""
    buffer = console.file
    if not isinstance(buffer, StringIO):
        msg = "console is not backed by a StringIO buffer"
        raise TypeError(msg)
    return buffer.getvalue()
