"""
Rounding helpers for reported values.
"""
from decimal import Decimal, ROUND_HALF_UP


def round_half_up(value: float, ndigits: int) -> float:
    """Round to ``ndigits`` decimals, with ties going away from zero.

    Unlike the built-in round(), 0.125 rounds to 0.13 rather than 0.12.
    The float is converted exactly, so 2.675 (stored just below the tie)
    still rounds to 2.67.

    Args:
        value: Value to round
        ndigits: Number of decimal places

    Returns:
        Rounded value as a float
    """
    quantum = Decimal(1).scaleb(-ndigits)
    return float(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))
