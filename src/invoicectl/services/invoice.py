"""InvoiceService: read the CSV export and assemble the invoice.

The :class:`InvoiceBuilder` accumulates the total and per-project summary
as line items are added, appends the fixed service fee, and freezes the
result into an :class:`~invoicectl.domain.invoice.Invoice`.
"""

from __future__ import annotations

import csv
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from pathlib import Path

import structlog

from invoicectl.config.models import BillingConfig
from invoicectl.domain.entries import read_entries
from invoicectl.domain.errors import EmptyTimesheetError, InvoiceDataError
from invoicectl.domain.invoice import Invoice, LineItem, Party, ProjectSummary
from invoicectl.domain.money import CENT, ZERO
from invoicectl.services._helpers import invoice_date, invoice_number
from invoicectl.services.aggregate import aggregate
from invoicectl.services.base import BaseService
from invoicectl.services.result import ServiceResult
from invoicectl.services.telemetry import trace_span, traced

log = structlog.get_logger(__name__)

SERVICE_FEE_DESCRIPTION = "Service Fee"
SERVICE_FEE_HOURS = Decimal("1")


class InvoiceBuilder:
    """Accumulates line items into an invoice.

    ``total`` and ``summary`` are updated on every :meth:`add_item`, so the
    two invariants hold at every step, not only once :meth:`build` runs.
    """

    def __init__(
        self,
        *,
        today: date,
        bill_to: Party,
        bill_from: Party,
        hourly_rate: Decimal,
        billing: BillingConfig,
    ) -> None:
        self.today = today
        self.bill_to = bill_to
        self.bill_from = bill_from
        self.hourly_rate = hourly_rate
        self.billing = billing
        self.items: list[LineItem] = []
        self.summary = ProjectSummary()
        self.total = ZERO

    def _append(self, project: str, item: LineItem) -> LineItem:
        self.items.append(item)
        self.total += item.amount
        self.summary.add(project, item.amount)
        return item

    def add_item(
        self,
        *,
        project: str,
        description: str,
        start_date: str,
        end_date: str,
        hours: Decimal,
    ) -> LineItem:
        """Price *hours* at the hourly rate and record the line."""
        amount = (hours * self.hourly_rate).quantize(CENT, rounding=ROUND_HALF_UP)
        item = LineItem(
            description=f"{project} - {description}",
            start_date=start_date,
            end_date=end_date,
            hours=hours,
            rate=self.hourly_rate,
            amount=amount,
        )
        return self._append(project, item)

    def add_service_fee(self) -> LineItem:
        """Append the flat service fee, credited to the default project.

        Its dates mirror the previous line's end date; its hours are shown
        as 1 but do not enter the amount.

        Raises:
            EmptyTimesheetError: No line items have been added.
        """
        if not self.items:
            msg = "No time entries to bill"
            raise EmptyTimesheetError(msg)

        fee = self.billing.service_fee.quantize(CENT, rounding=ROUND_HALF_UP)
        last_date = self.items[-1].end_date
        item = LineItem(
            description=SERVICE_FEE_DESCRIPTION,
            start_date=last_date,
            end_date=last_date,
            hours=SERVICE_FEE_HOURS,
            rate=fee,
            amount=fee,
        )
        return self._append(self.billing.default_project, item)

    def build(self) -> Invoice:
        return Invoice(
            date=invoice_date(self.today),
            number=invoice_number(self.today),
            bill_to=self.bill_to,
            bill_from=self.bill_from,
            hourly_rate=self.hourly_rate,
            items=list(self.items),
            summary=self.summary.as_dict(),
            total=self.total,
        )


class InvoiceService(BaseService):
    """Turn a time-tracking CSV export into an :class:`Invoice`."""

    def new_builder(self, today: date | None = None) -> InvoiceBuilder:
        settings = self._settings
        return InvoiceBuilder(
            today=today or date.today(),
            bill_to=Party.model_validate(settings.client.model_dump()),
            bill_from=Party.model_validate(settings.company.model_dump()),
            hourly_rate=settings.hourly_rate,
            billing=settings.billing,
        )

    def create_invoice(self, csv_path: Path, *, today: date | None = None) -> Invoice:
        """Read, group, price, and finish the invoice for *csv_path*.

        Raises:
            OSError: The CSV file cannot be read.
            InvoiceDataError: The CSV is malformed, an entry is invalid,
                or there is nothing to bill.
        """
        with trace_span("read_entries") as span:
            entries = read_entries(csv_path)
            if span:
                span.annotate("entries", len(entries))
        log.debug("entries.read", path=str(csv_path), entries=len(entries))

        if self._settings.hourly_rate <= 0:
            log.warning("rate.not_positive", hourly_rate=str(self._settings.hourly_rate))

        builder = self.new_builder(today)
        with trace_span("aggregate") as span:
            groups = aggregate(entries, builder, self._settings.billing)
            if span:
                span.annotate("groups", groups)
        builder.add_service_fee()
        return builder.build()

    @traced
    def build_invoice(self, csv_path: Path, *, today: date | None = None) -> ServiceResult:
        """Build the invoice and return its display record.

        ``data["invoice"]`` holds the pre-formatted view used by the console,
        the HTML template, and the PDF.
        """
        op = "build_invoice"
        try:
            invoice = self.create_invoice(csv_path, today=today)
        except InvoiceDataError as exc:
            detail: dict[str, object] = {"path": str(csv_path)}
            if exc.line is not None:
                detail["line"] = exc.line
            return self._fail(op, exc.code, str(exc), **detail)
        except (OSError, UnicodeDecodeError, csv.Error) as exc:
            msg = f"Cannot read {csv_path}: {exc}"
            return self._fail(op, "CSV_UNREADABLE", msg, path=str(csv_path))

        log.info("invoice.built", number=invoice.number, total=str(invoice.total))
        return ServiceResult(
            ok=True,
            op=op,
            data={"invoice": invoice.to_display()},
        )
