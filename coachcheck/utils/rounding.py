"""Deterministic rounding helpers.

Python's built-in ``round`` uses banker's rounding; check-in percentages
are rounded half up so that 72.5 is reported as 73.
"""

from decimal import ROUND_HALF_UP, Decimal


def round_half_up(value: float) -> int:
    """Round a number to the nearest integer, with .5 always rounding up.

    Examples:
        >>> round_half_up(2.5)
        3
        >>> round_half_up(72.4)
        72
    """
    d = Decimal(str(value))
    return int(d.quantize(Decimal("1"), rounding=ROUND_HALF_UP))
