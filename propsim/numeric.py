"""
Rounding and number formatting shared by the engine.

Results are rounded half-up (ties toward +inf) at fixed points, and
reasoning strings render numbers the way the dashboards display them.
Python's round() uses banker's rounding, so it is not used for
observable values.
"""

import math
from collections.abc import Iterable
from decimal import ROUND_HALF_UP, Decimal


def round_half_up(value: float, digits: int = 0) -> float:
    """Round to `digits` decimals with ties going toward +inf."""
    if not math.isfinite(value):
        return value
    scale = 10 ** digits
    return math.floor(value * scale + 0.5) / scale


def round_int(value: float) -> int:
    """Half-up rounding to an integer."""
    return int(math.floor(value + 0.5))


def format_fixed(value: float, digits: int) -> str:
    """Fixed-point text with half-up rounding of the exact binary value."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    quantum = Decimal(1).scaleb(-digits)
    return str(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))


def format_number(value: float) -> str:
    """Shortest text for a number: 20.0 -> '20', 20.5 -> '20.5'."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def sequential_sum(values: Iterable[float]) -> float:
    """Plain left-to-right float sum (builtin sum() compensates on 3.12+)."""
    total = 0
    for value in values:
        total += value
    return total
