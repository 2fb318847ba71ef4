"""Root CLI command: ``invoicectl [OPTIONS] CSV_PATH``."""

from __future__ import annotations

from pathlib import Path

import click
import structlog

from invoicectl import __version__
from invoicectl.commands._base import InvoiceCommand
from invoicectl.commands._context import AppContext
from invoicectl.config.settings import InvoiceSettings
from invoicectl.services.export import ExportService
from invoicectl.services.invoice import InvoiceService

log = structlog.get_logger(__name__)

_EXAMPLES = """\
  invoicectl timesheet.csv
  invoicectl -c ~/billing/config.json exports/march.csv
  invoicectl --template my-invoice.html --archive-dir out/ march.csv
  invoicectl --json march.csv > run.jsonl"""


@click.command(cls=InvoiceCommand, examples=_EXAMPLES)
@click.version_option(version=__version__, prog_name="invoicectl")
@click.argument(
    "csv_path",
    required=False,
    type=click.Path(dir_okay=False, path_type=Path),
)
@click.option("-c", "--config", "config_path", default=None, help="JSON config file path.")
@click.option(
    "-t",
    "--template",
    default=None,
    type=click.Path(dir_okay=False, path_type=Path),
    help="Jinja2 HTML template (default: packaged template).",
)
@click.option(
    "-o",
    "--archive-dir",
    default=None,
    type=click.Path(file_okay=False, path_type=Path),
    help="Directory for the HTML and PDF files (default: archive/).",
)
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Debug logs and timing spans.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.pass_context
def cli(
    ctx: click.Context,
    csv_path: Path | None,
    config_path: str | None,
    template: Path | None,
    archive_dir: Path | None,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
) -> None:
    """Generate an HTML and PDF invoice from a time-tracking CSV export."""
    if csv_path is None:
        click.echo(ctx.get_usage(), err=True)
        click.echo("Error: Missing argument 'CSV_PATH'.", err=True)
        ctx.exit(1)

    settings = InvoiceSettings.from_cli(
        config_path=config_path,
        template=template,
        archive_dir=archive_dir,
        json_output=json_output or None,
        quiet=quiet or None,
        verbose=verbose or None,
        log_json=log_json or None,
    )
    app = AppContext(settings)
    try:
        generate(app, csv_path)
    except (click.ClickException, click.exceptions.Exit):
        raise
    except Exception as exc:
        log.exception("run.failed", csv_path=str(csv_path))
        msg = f"Unexpected error: {exc}"
        raise click.ClickException(msg) from exc


def generate(app: AppContext, csv_path: Path) -> None:
    """Build the invoice, print the summary, then write HTML and PDF."""
    built = app.emit(InvoiceService(app.settings).build_invoice(csv_path))
    invoice = built.data["invoice"]
    export = ExportService(app.settings)
    html = app.emit(export.export_html(invoice))
    if html.data["html_path"] is not None:
        app.emit(export.export_pdf(invoice))
