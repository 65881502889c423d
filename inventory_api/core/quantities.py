"""Fixed-point helpers.

Quantities and weights are persisted as integers in thousandths so that the
storage-side ``$inc`` stays exact for fractional weight sales.
"""
from decimal import Decimal, ROUND_HALF_EVEN

SCALE = 1000
PRECISION = Decimal("0.001")
# BSON int64 bounds; $inc on anything larger fails in storage
MAX_MILLI = 2**63 - 1


def _check_range(value, scaled: Decimal) -> None:
    if not scaled.is_finite():
        raise ValueError(f"{value} is not a finite number")
    if abs(scaled) > MAX_MILLI:
        raise ValueError(f"{value} is out of range")


def to_milli(value: Decimal) -> int:
    """Convert an exact decimal to thousandths, rejecting extra precision."""
    scaled = Decimal(value) * SCALE
    _check_range(value, scaled)
    if scaled != scaled.to_integral_value():
        raise ValueError(f"{value} has more than 3 decimal places")
    return int(scaled)


def round_to_milli(value: Decimal) -> int:
    """Convert a computed decimal to thousandths, rounding half-even."""
    scaled = Decimal(value) * SCALE
    _check_range(value, scaled)
    return int(scaled.to_integral_value(rounding=ROUND_HALF_EVEN))


def from_milli(value: int) -> Decimal:
    return (Decimal(value) / SCALE).quantize(PRECISION)
