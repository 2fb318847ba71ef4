"""Per-run application state for the CLI.

``AppContext`` owns the settings of one invocation. Building it sets up
logging (and telemetry under ``--verbose``); :meth:`AppContext.emit` is the
only place that writes results to the terminal.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from invoicectl.config.logging import configure_logging
from invoicectl.output.formatters import OutputSettings, format_result
from invoicectl.services.telemetry import enable_telemetry

if TYPE_CHECKING:
    from invoicectl.config.settings import InvoiceSettings
    from invoicectl.services.result import ServiceResult


class AppContext:
    """Settings and terminal routing for one ``invoicectl`` run."""

    def __init__(self, settings: InvoiceSettings) -> None:
        self.settings = settings
        self.output_settings = OutputSettings(
            json_output=settings.json_output,
            quiet=settings.quiet,
            verbose=settings.verbose,
        )
        configure_logging(verbose=settings.verbose, log_json=settings.log_json)
        if settings.verbose:
            enable_telemetry()

    def emit(self, result: ServiceResult) -> ServiceResult:
        """Print *result* and return it, or exit with status 1 if it failed.

        Successful output goes to stdout. Failures and, outside ``--json``,
        warnings go to stderr.
        """
        text = format_result(result, settings=self.output_settings)
        if not result.ok:
            click.echo(text, err=True)
            raise click.exceptions.Exit(1)

        if text:
            click.echo(text)
        if not self.output_settings.json_output:
            for warning in result.warnings:
                click.echo(f"WARNING: {warning}", err=True)
        return result
