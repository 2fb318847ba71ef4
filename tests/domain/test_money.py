"""Tests for Decimal money helpers."""

from __future__ import annotations

from decimal import Decimal

import pytest

from invoicectl.domain.money import format_currency, to_decimal


class TestToDecimal:
    def test_float_goes_through_str(self) -> None:
        assert to_decimal(0.1) == Decimal("0.1")

    def test_decimal_passthrough(self) -> None:
        value = Decimal("12.34")
        assert to_decimal(value) is value

    def test_int_and_str(self) -> None:
        assert to_decimal(50) == Decimal("50")
        assert to_decimal("62.5") == Decimal("62.5")


class TestFormatCurrency:
    @pytest.mark.parametrize(
        ("amount", "expected"),
        [
            (Decimal("75"), "$75.00"),
            (Decimal("0"), "$0.00"),
            (1234.5, "$1,234.50"),
            (Decimal("1000000"), "$1,000,000.00"),
            (Decimal("-5"), "-$5.00"),
        ],
    )
    def test_formats(self, amount: Decimal | float, expected: str) -> None:
        assert format_currency(amount) == expected
