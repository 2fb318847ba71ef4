"""Tests for the billed-hours rounding ladder."""

from __future__ import annotations

from decimal import Decimal

import pytest

from invoicectl.domain.rounding import billed_hours, hours_from


class TestHoursFrom:
    def test_truncates_to_two_places(self) -> None:
        assert hours_from(85) == Decimal("1.41")
        assert hours_from(100) == Decimal("1.66")

    def test_whole_hours(self) -> None:
        assert hours_from(120) == Decimal("2.00")

    def test_accepts_float_minutes(self) -> None:
        assert hours_from(41.99) == Decimal("0.69")


class TestBilledHours:
    def test_below_twelve_minutes_rounds_down(self) -> None:
        # 125 min -> 2.08h
        assert billed_hours(125) == Decimal("2")

    def test_between_twelve_and_forty_two_adds_half(self) -> None:
        # 100 min -> 1.66h
        assert billed_hours(100) == Decimal("1.5")

    def test_forty_two_or_more_rounds_up(self) -> None:
        # 50 min -> 0.83h
        assert billed_hours(50) == Decimal("1")

    def test_zero_minutes_bills_half_hour(self) -> None:
        assert billed_hours(0) == Decimal("0.5")

    def test_short_interval_bills_half_hour(self) -> None:
        assert billed_hours(5) == Decimal("0.5")

    def test_design_scenario(self) -> None:
        assert billed_hours(85) == Decimal("1.5")

    @pytest.mark.parametrize(
        ("minutes", "expected"),
        [
            (11, "0.5"),
            (12, "0.5"),
            (41, "0.5"),
            (42, "1"),
            (60, "1"),
            (71, "1"),
            (72, "1.5"),
            (101, "1.5"),
            (102, "2"),
        ],
    )
    def test_cutoffs_are_twelve_and_forty_two_minutes(self, minutes: int, expected: str) -> None:
        assert billed_hours(minutes) == Decimal(expected)

    def test_just_under_forty_two_minutes_stays_on_half(self) -> None:
        assert billed_hours(41.99) == Decimal("0.5")

    def test_large_totals(self) -> None:
        # 10h 30m
        assert billed_hours(630) == Decimal("10.5")

    def test_result_is_on_half_hour_ladder(self) -> None:
        for minutes in range(0, 600, 7):
            hours = billed_hours(minutes)
            assert hours > 0
            assert (hours * 2) % 1 == 0

    def test_negative_minutes_rejected(self) -> None:
        with pytest.raises(ValueError, match="non-negative"):
            billed_hours(-1)
