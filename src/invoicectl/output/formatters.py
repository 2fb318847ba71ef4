"""Rich/JSON output helpers.

The CLI renders ServiceResult for humans (Rich tables) or machines
(--json). The formatter layer adapts ServiceResult to the requested mode.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from invoicectl.output.renderers import render_quiet, render_result

if TYPE_CHECKING:
    from invoicectl.services.result import ServiceResult


@dataclass(frozen=True)
class OutputSettings:
    """Output mode flags taken from the CLI."""

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False


def format_result(result: ServiceResult, *, settings: OutputSettings | None = None) -> str:
    """Format a ServiceResult for display.

    JSON wins over quiet, quiet wins over the default Rich rendering.
    JSON is one line per result so a run prints JSON Lines.
    """
    settings = settings or OutputSettings()
    if settings.json_output:
        return result.model_dump_json()
    if settings.quiet:
        return render_quiet(result)
    return render_result(result, verbose=settings.verbose)
