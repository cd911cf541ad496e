from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal


def round_to(value: float, places: int) -> float:
    """Round half away from zero to `places` decimals (display rounding)."""
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def round2(value: float) -> float:
    return round_to(value, 2)
