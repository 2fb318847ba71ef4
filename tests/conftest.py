"""Shared pytest fixtures and test helpers for invoicectl tests."""

from __future__ import annotations

import csv
import json
import logging
import os
from collections.abc import Callable, Generator, Sequence
from datetime import date
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from invoicectl.config.settings import InvoiceSettings
from invoicectl.services.invoice import InvoiceService
from invoicectl.services.telemetry import _current_span, disable_telemetry

CSV_HEADER = ["Description", "Project", "Start date", "Start time", "Stop date", "Stop time"]

DEFAULT_CONFIG: dict[str, Any] = {
    "client": {"name": "ACME Corp", "code": "ACME 01"},
    "company": {"name": "Jane Doe Consulting", "email": "jane@example.com"},
    "hourlyRate": 50,
}

Row = Sequence[str]


@pytest.fixture(autouse=True)
def _clean_environment(monkeypatch: pytest.MonkeyPatch) -> Generator[None]:
    """Drop INVOICECTL_* env vars and reset logging and telemetry state."""
    for key in list(os.environ):
        if key.startswith("INVOICECTL_"):
            monkeypatch.delenv(key)

    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    app_logger = logging.getLogger("invoicectl")
    app_level = app_logger.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    app_logger.setLevel(app_level)
    disable_telemetry()
    _current_span.set(None)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


def write_csv(path: Path, rows: Sequence[Row], header: Sequence[str] = CSV_HEADER) -> Path:
    """Write a time-tracking export with *header* and *rows* to *path*."""
    with path.open("w", encoding="utf-8", newline="") as fh:
        writer = csv.writer(fh)
        writer.writerow(header)
        writer.writerows(rows)
    return path


@pytest.fixture
def make_csv(tmp_path: Path) -> Callable[..., Path]:
    """Factory writing a CSV export into tmp_path."""

    def _make(rows: Sequence[Row], name: str = "export.csv", **kwargs: Any) -> Path:
        return write_csv(tmp_path / name, rows, **kwargs)

    return _make


@pytest.fixture
def design_csv(make_csv: Callable[..., Path]) -> Path:
    """Two 'Design' rows for project Alpha: 45 + 40 minutes."""
    return make_csv(
        [
            ["Design", "Alpha", "2024-03-01", "09:00:00", "2024-03-01", "09:45:00"],
            ["Design", "Alpha", "2024-03-02", "10:00:00", "2024-03-02", "10:40:00"],
        ]
    )


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    """A config.json with client, company, and a $50 hourly rate."""
    path = tmp_path / "config.json"
    path.write_text(json.dumps(DEFAULT_CONFIG), encoding="utf-8")
    return path


@pytest.fixture
def settings(tmp_path: Path, config_file: Path) -> InvoiceSettings:
    """Settings loaded from config_file, archiving into tmp_path/archive."""
    return InvoiceSettings.from_cli(
        config_path=str(config_file),
        archive_dir=tmp_path / "archive",
    )


@pytest.fixture
def workspace(tmp_path: Path, config_file: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """CWD set to tmp_path, which holds config.json, so discovery finds it."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def invoice_display(settings: InvoiceSettings, design_csv: Path) -> dict[str, Any]:
    """Display record for the design_csv invoice dated 2024-03-15."""
    result = InvoiceService(settings).build_invoice(design_csv, today=date(2024, 3, 15))
    return result.data["invoice"]
