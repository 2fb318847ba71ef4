"""Tests for ExportService: HTML and PDF output into the archive."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from invoicectl.config.settings import InvoiceSettings
from invoicectl.services.export import TEMPLATE_WARNING, ExportService


@pytest.fixture
def invoice(invoice_display: dict[str, Any]) -> dict[str, Any]:
    return invoice_display


def _with(settings: InvoiceSettings, **update: Any) -> InvoiceSettings:
    return settings.model_copy(update=update)


class TestOutputPaths:
    def test_names_use_number_and_sanitized_code(
        self, settings: InvoiceSettings, invoice: dict[str, Any]
    ) -> None:
        html_path, pdf_path = ExportService(settings).output_paths(invoice)
        assert html_path == settings.archive_dir / "invoice-20240315-ACME-01.html"
        assert pdf_path == settings.archive_dir / "invoice-20240315-ACME-01.pdf"


class TestExportHtml:
    def test_writes_html(self, settings: InvoiceSettings, invoice: dict[str, Any]) -> None:
        result = ExportService(settings).export_html(invoice)
        assert result.ok
        assert result.op == "export_html"
        assert result.warnings == []
        html = Path(result.data["html_path"]).read_text(encoding="utf-8")
        assert "Alpha - Design" in html
        assert "$100.00" in html
        assert "C&amp;C" in html

    def test_archive_dir_created(self, settings: InvoiceSettings, invoice: dict[str, Any]) -> None:
        assert not settings.archive_dir.exists()
        ExportService(settings).export_html(invoice)
        assert settings.archive_dir.is_dir()

    def test_custom_template(
        self, settings: InvoiceSettings, invoice: dict[str, Any], tmp_path: Path
    ) -> None:
        template = tmp_path / "mine.html"
        template.write_text(
            "{{ invoice.number }}|{% for item in invoice['items'] %}{{ item.amount }};"
            "{% endfor %}|{{ invoice.total_amount }}",
            encoding="utf-8",
        )
        result = ExportService(_with(settings, template=template)).export_html(invoice)
        html = Path(result.data["html_path"]).read_text(encoding="utf-8")
        assert html == "20240315|$75.00;$25.00;|$100.00"

    def test_missing_template_is_soft_failure(
        self, settings: InvoiceSettings, invoice: dict[str, Any], tmp_path: Path
    ) -> None:
        service = ExportService(_with(settings, template=tmp_path / "nope.html"))
        result = service.export_html(invoice)
        assert result.ok
        assert result.data == {"html_path": None}
        assert result.warnings[0].startswith(TEMPLATE_WARNING)
        assert not settings.archive_dir.exists()

    def test_broken_template_is_soft_failure(
        self, settings: InvoiceSettings, invoice: dict[str, Any], tmp_path: Path
    ) -> None:
        template = tmp_path / "broken.html"
        template.write_text("{% for x in %}", encoding="utf-8")
        result = ExportService(_with(settings, template=template)).export_html(invoice)
        assert result.ok
        assert len(result.warnings) == 1

    def test_unwritable_archive_fails(
        self, settings: InvoiceSettings, invoice: dict[str, Any], tmp_path: Path
    ) -> None:
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory", encoding="utf-8")
        result = ExportService(_with(settings, archive_dir=blocker / "archive")).export_html(
            invoice
        )
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "WRITE_FAILED"


class TestExportPdf:
    def test_writes_pdf(self, settings: InvoiceSettings, invoice: dict[str, Any]) -> None:
        result = ExportService(settings).export_pdf(invoice)
        assert result.ok
        assert result.op == "export_pdf"
        assert Path(result.data["pdf_path"]).read_bytes().startswith(b"%PDF")

    def test_render_error_is_pdf_failed(
        self,
        settings: InvoiceSettings,
        invoice: dict[str, Any],
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        def broken(_invoice: dict[str, Any], _path: Path) -> None:
            msg = "disk full"
            raise OSError(msg)

        monkeypatch.setattr("invoicectl.services.export.render_pdf", broken)
        result = ExportService(settings).export_pdf(invoice)
        assert not result.ok
        assert result.error_code == "PDF_FAILED"
        assert result.error is not None
        assert "disk full" in result.error.message
