"""ExportService: write the invoice as HTML and PDF into the archive.

HTML and PDF are separate steps so the HTML file is reported before the
PDF is attempted. A template problem is a soft failure: the HTML result
stays ``ok`` with ``html_path`` None and a warning; callers skip the PDF.
Write or PDF errors fail their step.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import structlog
from jinja2 import TemplateError
from reportlab.platypus.doctemplate import LayoutError

from invoicectl.infrastructure.pdf import render_pdf
from invoicectl.infrastructure.templates import load_template, render_html
from invoicectl.services._helpers import output_basename
from invoicectl.services.base import BaseService
from invoicectl.services.result import ServiceResult
from invoicectl.services.telemetry import trace_span, traced

log = structlog.get_logger(__name__)

TEMPLATE_WARNING = "Failed to generate invoice HTML due to template error"


class ExportService(BaseService):
    """Render an invoice display record to the archive directory."""

    def output_paths(self, invoice: dict[str, Any]) -> tuple[Path, Path]:
        """``(html_path, pdf_path)`` for *invoice* inside the archive directory."""
        stem = output_basename(invoice["number"], invoice["bill_to"].get("code", ""))
        archive = self._settings.archive_dir
        return archive / f"{stem}.html", archive / f"{stem}.pdf"

    def _render(self, invoice: dict[str, Any]) -> str:
        template = load_template(self._settings.template)
        return render_html(template, invoice)

    @traced
    def export_html(self, invoice: dict[str, Any]) -> ServiceResult:
        """Write ``invoice-<number>-<client>.html`` into the archive."""
        op = "export_html"
        html_path, _ = self.output_paths(invoice)

        with trace_span("render_html"):
            try:
                html = self._render(invoice)
            except (TemplateError, OSError, UnicodeDecodeError) as exc:
                template = str(self._settings.template or "<packaged>")
                log.warning("template.failed", template=template, error=str(exc))
                return ServiceResult(
                    ok=True,
                    op=op,
                    data={"html_path": None},
                    warnings=[f"{TEMPLATE_WARNING}: {exc}"],
                )

        try:
            html_path.parent.mkdir(parents=True, exist_ok=True)
            html_path.write_text(html, encoding="utf-8")
        except OSError as exc:
            return self._fail(op, "WRITE_FAILED", f"Cannot write {html_path}: {exc}")
        log.info("html.written", path=str(html_path))
        return ServiceResult(ok=True, op=op, data={"html_path": str(html_path)})

    @traced
    def export_pdf(self, invoice: dict[str, Any]) -> ServiceResult:
        """Write the PDF next to the HTML file."""
        op = "export_pdf"
        _, pdf_path = self.output_paths(invoice)

        with trace_span("render_pdf"):
            try:
                render_pdf(invoice, pdf_path)
            except (LayoutError, OSError) as exc:
                return self._fail(op, "PDF_FAILED", f"Cannot render {pdf_path}: {exc}")
        log.info("pdf.written", path=str(pdf_path))
        return ServiceResult(ok=True, op=op, data={"pdf_path": str(pdf_path)})
