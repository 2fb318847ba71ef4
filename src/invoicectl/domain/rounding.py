"""Billed-hours rounding ladder.

Raw minutes are converted to hours, truncated to two decimal places, and
snapped onto a half-hour ladder:

- less than 12 minutes past the hour rounds down (minimum half an hour),
- 12 up to 42 minutes past the hour bills the extra half hour,
- 42 minutes or more bills the next full hour.

INVARIANT: the cutoffs are exactly 0.20 and 0.70 of an hour.
"""

from __future__ import annotations

from decimal import ROUND_DOWN, Decimal

from invoicectl.domain.money import to_decimal

HALF_HOUR = Decimal("0.5")
ROUND_DOWN_BELOW = Decimal("0.20")
HALF_HOUR_BELOW = Decimal("0.70")

_MINUTES_PER_HOUR = Decimal(60)
_HUNDREDTH = Decimal("0.01")


def hours_from(minutes: Decimal | float | int) -> Decimal:
    """Convert *minutes* to hours truncated to two decimal places.

    Examples:
        >>> hours_from(85)
        Decimal('1.41')
        >>> hours_from(125)
        Decimal('2.08')
    """
    hours = to_decimal(minutes) / _MINUTES_PER_HOUR
    return hours.quantize(_HUNDREDTH, rounding=ROUND_DOWN)


def billed_hours(minutes: Decimal | float | int) -> Decimal:
    """Return the billable hours for a group's total *minutes*.

    Examples:
        >>> billed_hours(125)
        Decimal('2')
        >>> billed_hours(100)
        Decimal('1.5')
        >>> billed_hours(50)
        Decimal('1')
        >>> billed_hours(0)
        Decimal('0.5')
    """
    if to_decimal(minutes) < 0:
        msg = f"minutes must be non-negative, got {minutes}"
        raise ValueError(msg)

    hours = hours_from(minutes)
    whole = Decimal(int(hours))
    fraction = hours - whole

    if fraction < ROUND_DOWN_BELOW:
        return whole if whole > 0 else HALF_HOUR
    if fraction < HALF_HOUR_BELOW:
        return whole + HALF_HOUR
    return whole + 1
