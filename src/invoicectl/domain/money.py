"""Decimal money helpers.

All amounts are ``Decimal`` so that line items, the invoice total, and the
per-project summary add up exactly. Only USD is supported.
"""

from __future__ import annotations

from decimal import Decimal

ZERO = Decimal("0")
CENT = Decimal("0.01")


def to_decimal(value: Decimal | float | int | str) -> Decimal:
    """Convert *value* to ``Decimal`` without binary float artefacts.

    Floats go through ``str`` so ``0.1`` becomes ``Decimal("0.1")``.
    """
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def format_currency(amount: Decimal | float | int) -> str:
    """Format *amount* as US dollars, e.g. ``$1,234.50`` or ``-$5.00``.

    Examples:
        >>> format_currency(Decimal("75"))
        '$75.00'
        >>> format_currency(1234.5)
        '$1,234.50'
        >>> format_currency(Decimal("-5"))
        '-$5.00'
    """
    value = to_decimal(amount).quantize(CENT)
    sign = "-" if value < 0 else ""
    return f"{sign}${abs(value):,.2f}"
