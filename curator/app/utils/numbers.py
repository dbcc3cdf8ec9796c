"""
Numeric helpers.

Provides a rounding rule that does not depend on float representation
or on Python's banker's rounding: halves always round away from zero.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal


def round_half_away_from_zero(value: float, decimals: int = 0) -> float:
    quantum = Decimal(1).scaleb(-decimals)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def percentage(part: int, total: int) -> float:
    """
    Unrounded percentage; an empty total counts as fully satisfied.
    """
    if total == 0:
        return 100.0
    return part * 100.0 / total
