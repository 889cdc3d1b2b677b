"""Rounding helpers matching the behaviour users see in the app."""

from decimal import ROUND_HALF_UP, Decimal


def round_half_up(value: float, places: int = 0) -> float:
    """Round to `places` decimals, halves away from zero.

    Goes through the shortest repr of the float so 2.675 rounds to 2.68.
    """
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def round_to_int(value: float) -> int:
    """Round to the nearest integer, halves away from zero."""
    return int(round_half_up(value, 0))
