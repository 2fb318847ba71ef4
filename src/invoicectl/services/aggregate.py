"""Group time entries by description and price each group.

Grouping is an explicit ordered mapping built in one pass, so groups come
out in the order their description first appears in the CSV, no matter
how rows are interleaved.
"""

from __future__ import annotations

from collections.abc import Iterable
from decimal import Decimal
from typing import TYPE_CHECKING

import structlog

from invoicectl.domain.entries import TimeEntry
from invoicectl.domain.rounding import billed_hours

if TYPE_CHECKING:
    from invoicectl.config.models import BillingConfig
    from invoicectl.services.invoice import InvoiceBuilder

log = structlog.get_logger(__name__)


def group_by_description(entries: Iterable[TimeEntry]) -> dict[str, list[TimeEntry]]:
    """Map each distinct description to its entries, in first-seen order."""
    groups: dict[str, list[TimeEntry]] = {}
    for entry in entries:
        groups.setdefault(entry.description, []).append(entry)
    return groups


def project_label(entry: TimeEntry, billing: BillingConfig) -> str:
    """The entry's project, or the default project when unassigned."""
    if not entry.project or entry.project == billing.placeholder_project:
        return billing.default_project
    return entry.project


def aggregate(
    entries: Iterable[TimeEntry],
    builder: InvoiceBuilder,
    billing: BillingConfig,
) -> int:
    """Add one priced line item per description group to *builder*.

    Returns the number of groups.

    Raises:
        InvalidTimeEntryError: An entry's start/stop cannot be measured.
    """
    groups = group_by_description(entries)
    for description, group in groups.items():
        first, last = group[0], group[-1]
        seconds = sum(entry.seconds(timezone=billing.timezone) for entry in group)
        minutes = Decimal(seconds) / 60
        hours = billed_hours(minutes)
        project = project_label(first, billing)
        item = builder.add_item(
            project=project,
            description=description,
            start_date=first.start_date,
            end_date=last.stop_date,
            hours=hours,
        )
        log.debug(
            "group.billed",
            description=description,
            project=project,
            entries=len(group),
            seconds=seconds,
            hours=str(hours),
            amount=str(item.amount),
        )
    return len(groups)
