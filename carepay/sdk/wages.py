"""Differential wage calculation.

Each category's rate is rounded to cents first, then each subtotal is
rounded. Gross wages are the rounded sum of the rounded subtotals, so every
paystub line reconciles with the total even if that differs by a few cents
from rounding the exact product sum.
"""

from .rounding import round_cents_product
from .schemas import HoursByType, WageLineItem, WagesByType

OVERTIME_MULTIPLIER = 1.5


def _line(hours: float, rate: float) -> WageLineItem:
    return WageLineItem(hours=hours, rate=rate, subtotal=round_cents_product(hours, rate))


def compute_wages(
    hours: HoursByType,
    base_rate: float,
    holiday_multiplier: float,
    weekend_multiplier: float,
) -> WagesByType:
    """Convert classified hours into earnings lines.

    Overtime is always paid at 1.5x the base rate, independent of the
    weekend and holiday multipliers.

    Args:
        hours: Classified hours
        base_rate: Regular hourly rate (used unrounded)
        holiday_multiplier: Holiday rate multiplier (e.g., 2.0)
        weekend_multiplier: Weekend rate multiplier (e.g., 1.5)

    Returns:
        WagesByType; use .gross_wages for the total
    """
    return WagesByType(
        regular=_line(hours.regular, base_rate),
        weekend=_line(hours.weekend, round_cents_product(base_rate, weekend_multiplier)),
        holiday=_line(hours.holiday, round_cents_product(base_rate, holiday_multiplier)),
        overtime=_line(hours.overtime, round_cents_product(base_rate, OVERTIME_MULTIPLIER)),
    )
