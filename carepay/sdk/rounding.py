"""Cent rounding shared by every money calculation.

Amounts are carried as floats but rounded through Decimal, half away from
zero. Products (hours x rate, wages x tax rate) must go through
round_cents_product: multiplying the floats first can land just under a
half cent (1007.50 x 0.062 = 62.464999...) and round the wrong way.
"""

from decimal import ROUND_HALF_UP, Decimal

CENT = Decimal("0.01")


def _decimal(value: float) -> Decimal:
    return Decimal(str(float(value)))


def round_cents(amount: float) -> float:
    """Round to 2 decimal places, half up.

    Example: 29.605 -> 29.61, 254.20000000000002 -> 254.2
    """
    return float(_decimal(amount).quantize(CENT, rounding=ROUND_HALF_UP))


def round_cents_product(amount: float, rate: float) -> float:
    """Multiply exactly in Decimal, then round to cents half up.

    Example: 1007.50 x 0.062 -> 62.47, 21.25 x 0.044 -> 0.94
    """
    return float((_decimal(amount) * _decimal(rate)).quantize(CENT, rounding=ROUND_HALF_UP))


def round_rate(rate: float, places: int = 4) -> float:
    """Round a fractional rate (e.g., an effective tax rate) to a fixed number of places."""
    return float(_decimal(rate).quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP))
