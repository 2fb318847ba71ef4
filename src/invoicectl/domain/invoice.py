"""Invoice records: line items, per-project summary, and the invoice itself.

INVARIANT: the sum of line-item amounts and the sum of summary values both
equal ``Invoice.total`` exactly. Amounts are ``Decimal`` quantized to cents
before they are accumulated.
"""

from __future__ import annotations

from collections.abc import Iterator
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, Field, computed_field

from invoicectl.domain.money import ZERO, format_currency

INVOICE_HEADER: tuple[str, ...] = ("Description", "Hours", "Rate", "Amount")


class Party(BaseModel):
    """Bill-to or bill-from identity. Extra keys are kept for templates."""

    model_config = {"frozen": True, "extra": "allow"}

    name: str = ""
    code: str = ""


class LineItem(BaseModel):
    """One billed line; created once per description group."""

    model_config = {"frozen": True}

    description: str
    start_date: str
    end_date: str
    hours: Decimal
    rate: Decimal
    amount: Decimal

    @computed_field  # type: ignore[prop-decorator]
    @property
    def formatted_rate(self) -> str:
        return format_currency(self.rate)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def formatted_amount(self) -> str:
        return format_currency(self.amount)

    def to_display(self) -> dict[str, str]:
        """Presentation row with currency strings for rate and amount."""
        return {
            "description": self.description,
            "start_date": self.start_date,
            "end_date": self.end_date,
            "hours": f"{self.hours.normalize():f}",
            "rate": self.formatted_rate,
            "amount": self.formatted_amount,
        }


class ProjectSummary:
    """Ordered project → accumulated amount mapping.

    Projects keep the order in which they were first credited.
    """

    def __init__(self) -> None:
        self._totals: dict[str, Decimal] = {}

    def get(self, project: str) -> Decimal:
        """Accumulated amount for *project*, zero if never credited."""
        return self._totals.get(project, ZERO)

    def add(self, project: str, amount: Decimal) -> Decimal:
        """Credit *amount* to *project* and return the new subtotal."""
        subtotal = self.get(project) + amount
        self._totals[project] = subtotal
        return subtotal

    def total(self) -> Decimal:
        return sum(self._totals.values(), ZERO)

    def as_dict(self) -> dict[str, Decimal]:
        return dict(self._totals)

    def __iter__(self) -> Iterator[str]:
        return iter(self._totals)

    def __len__(self) -> int:
        return len(self._totals)

    def __contains__(self, project: object) -> bool:
        return project in self._totals


class Invoice(BaseModel):
    """Finished invoice, frozen after the builder completes it."""

    model_config = {"frozen": True}

    date: str
    number: str
    bill_to: Party
    bill_from: Party
    hourly_rate: Decimal
    items: list[LineItem] = Field(default_factory=list)
    summary: dict[str, Decimal] = Field(default_factory=dict)
    total: Decimal = ZERO
    header: tuple[str, ...] = INVOICE_HEADER

    @computed_field  # type: ignore[prop-decorator]
    @property
    def total_amount(self) -> str:
        return format_currency(self.total)

    def to_display(self) -> dict[str, Any]:
        """Template/console view: every amount pre-formatted as a currency string."""
        return {
            "date": self.date,
            "number": self.number,
            "bill_to": self.bill_to.model_dump(),
            "bill_from": self.bill_from.model_dump(),
            "hourly_rate": format_currency(self.hourly_rate),
            "header": list(self.header),
            "items": [item.to_display() for item in self.items],
            "summary": {name: format_currency(value) for name, value in self.summary.items()},
            "total": format_currency(self.total),
            "total_amount": self.total_amount,
        }
