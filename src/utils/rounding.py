"""
Rounding utility.

Half-up rounding and zero-guarded means for display statistics.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable


def round1(value: float) -> float:
    """
    Round to one decimal place, halves away from zero (6.05 -> 6.1).

    Python's round() uses banker's rounding and works on the binary value,
    so 6.05 would come out as 6.0. Going through repr() rounds the
    shortest decimal form instead.
    """
    return round_half_up(value, 1)


def round_half_up(value: float, places: int = 1) -> float:
    """Round value to `places` decimals using round-half-up."""
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(repr(float(value))).quantize(quantum, rounding=ROUND_HALF_UP))


def safe_mean(values: Iterable[float]) -> float:
    """Arithmetic mean, 0.0 for an empty input."""
    total = 0.0
    count = 0
    for value in values:
        total += value
        count += 1
    if count == 0:
        return 0.0
    return total / count


# Design Rationale and Trade-offs:
#
# 1. Why Decimal(repr(x)) instead of round()?
#    - round() is half-to-even on the binary value: round(6.05, 1) == 6.0
#    - Trade-off: Slower than round(), irrelevant at these volumes
