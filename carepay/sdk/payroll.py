"""Payroll orchestration for one caregiver and one pay period.

Composes the hours classifier, the wage calculator and the statutory tax
calculator into a PayrollResult. Federal withholding is never computed here:
callers pass an amount (e.g., from taxes.withholding.calculate_withholding)
in PayrollInput.federal_withholding_amount.
"""

import logging
import math
import os
from typing import Iterable, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from .calendar import DayTypeLookup
from .hours import classify_hours
from .rounding import round_cents, round_cents_product
from .schemas import (
    HoursByType,
    InvalidInputError,
    PayrollInput,
    PayrollResult,
    SimplePayrollResult,
    parse_input,
)
from .taxes.schemas import TaxRates
from .taxes.statutory import calculate_taxes
from .wages import compute_wages

# Configure logging based on LOG_LEVEL environment variable
_log_level = os.environ.get("LOG_LEVEL", "INFO").upper()
logging.basicConfig(
    level=getattr(logging, _log_level, logging.INFO),
    format="%(asctime)s.%(msecs)03d %(levelname)s: %(message)s",
    datefmt="%H:%M:%S"
)
logger = logging.getLogger(__name__)

# Colorado minimum wage, 2024
DEFAULT_MINIMUM_WAGE = 14.42
DEFAULT_CALCULATION_VERSION = "v2.0-compliance"
SIMPLE_CALCULATION_VERSION = "v1.0"

MINIMUM_WAGE_BASES = ("exclude_overtime", "include_overtime")


class PayrollPolicy(BaseModel):
    """Household payroll policy that is not a tax rate."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    minimum_wage: float = Field(default=DEFAULT_MINIMUM_WAGE, ge=0, allow_inf_nan=False)
    minimum_wage_basis: Literal["exclude_overtime", "include_overtime"] = Field(
        default="exclude_overtime",
        description="Hours the effective rate is divided by for the compliance check",
    )
    calculation_version: str = DEFAULT_CALCULATION_VERSION


def compliance_hours(hours: HoursByType, basis: str = "exclude_overtime") -> float:
    """Hours used as the divisor of the minimum-wage effective rate.

    'exclude_overtime' matches PayrollResult.total_hours, so overtime pay
    raises the effective rate without adding hours. 'include_overtime'
    divides by every hour worked.
    """
    if basis == "include_overtime":
        return hours.total
    return hours.regular + hours.weekend + hours.holiday


def is_minimum_wage_compliant(
    gross_wages: float,
    hours: float,
    base_hourly_rate: float,
    minimum_wage: float,
) -> bool:
    """True if the effective hourly rate meets the minimum wage.

    With no hours, the base rate is checked instead.
    """
    effective_rate = gross_wages / hours if hours > 0 else base_hourly_rate
    return effective_rate >= minimum_wage


def _net_pay(gross_wages: float, employee_withholdings: float, federal_withholding: float) -> float:
    return round_cents(gross_wages - employee_withholdings - federal_withholding)


def calculate_payroll(
    payroll_input: Union[PayrollInput, dict],
    rates: TaxRates,
    *,
    policy: Optional[PayrollPolicy] = None,
    day_type_lookup: Optional[DayTypeLookup] = None,
) -> PayrollResult:
    """Run payroll for one caregiver and one pay period.

    Args:
        payroll_input: PayrollInput or dict of its fields
        rates: Statutory tax rates for the year (and employer)
        policy: Minimum wage and calculation version (default: PayrollPolicy())
        day_type_lookup: Calendar for entries without a day_type_override

    Returns:
        PayrollResult

    Raises:
        InvalidInputError: If the input is malformed (negative hours or rates, bad dates)
    """
    payroll_input = parse_input(PayrollInput, payroll_input)
    rates = parse_input(TaxRates, rates)
    policy = policy or PayrollPolicy()

    hours = classify_hours(
        payroll_input.time_entries,
        disable_overtime=payroll_input.disable_overtime,
        day_type_lookup=day_type_lookup,
    )
    wages = compute_wages(
        hours,
        payroll_input.base_hourly_rate,
        payroll_input.holiday_multiplier,
        payroll_input.weekend_multiplier,
    )
    gross_wages = wages.gross_wages
    total_hours = hours.regular + hours.weekend + hours.holiday

    compliant = is_minimum_wage_compliant(
        gross_wages,
        compliance_hours(hours, policy.minimum_wage_basis),
        payroll_input.base_hourly_rate,
        policy.minimum_wage,
    )
    if not compliant:
        logger.warning(
            f"Caregiver {payroll_input.caregiver_id}: effective rate below "
            f"minimum wage {policy.minimum_wage:.2f}"
        )

    taxes = calculate_taxes(gross_wages, payroll_input.ytd_wages_before or 0, rates)
    federal_withholding = payroll_input.federal_withholding_amount or 0
    net_pay = _net_pay(gross_wages, taxes.total_employee_withholdings, federal_withholding)

    logger.debug(
        f"Caregiver {payroll_input.caregiver_id}: {total_hours}h "
        f"(+{hours.overtime}h OT), gross {gross_wages:.2f}, net {net_pay:.2f}"
    )

    return PayrollResult(
        caregiver_id=payroll_input.caregiver_id,
        total_hours=total_hours,
        hours_by_type=hours,
        wages_by_type=wages,
        gross_wages=gross_wages,
        taxes=taxes,
        federal_withholding=federal_withholding,
        net_pay=net_pay,
        is_minimum_wage_compliant=compliant,
        calculation_version=policy.calculation_version,
        tax_version=rates.version,
    )


def calculate_multi_caregiver_payroll(
    inputs: Iterable[Union[PayrollInput, dict]],
    rates: TaxRates,
    *,
    policy: Optional[PayrollPolicy] = None,
    day_type_lookup: Optional[DayTypeLookup] = None,
) -> List[PayrollResult]:
    """Run payroll for several caregivers; results are in input order.

    Each caregiver is computed independently. The first invalid input raises
    and no results are returned.
    """
    return [
        calculate_payroll(item, rates, policy=policy, day_type_lookup=day_type_lookup)
        for item in inputs
    ]


def calculate_simple_payroll(
    caregiver_id: Union[int, str],
    hours_worked: float,
    hourly_rate: float,
    rates: TaxRates,
    federal_withholding_amount: Optional[float] = None,
    ytd_wages_before: float = 0,
) -> SimplePayrollResult:
    """Flat-rate payroll for a manually entered hours total (no differentials, no overtime)."""
    for name, value in (
        ("hours_worked", hours_worked),
        ("hourly_rate", hourly_rate),
        ("federal_withholding_amount", federal_withholding_amount or 0),
        ("ytd_wages_before", ytd_wages_before),
    ):
        if not math.isfinite(value) or value < 0:
            raise InvalidInputError(f"{name} must be a non-negative finite number, got: {value}")

    rates = parse_input(TaxRates, rates)
    gross_wages = round_cents_product(hours_worked, hourly_rate)
    taxes = calculate_taxes(gross_wages, ytd_wages_before, rates)
    federal_withholding = federal_withholding_amount or 0

    return SimplePayrollResult(
        caregiver_id=caregiver_id,
        hours_worked=hours_worked,
        gross_wages=gross_wages,
        taxes=taxes,
        federal_withholding=federal_withholding,
        net_pay=_net_pay(gross_wages, taxes.total_employee_withholdings, federal_withholding),
        calculation_version=SIMPLE_CALCULATION_VERSION,
        tax_version=rates.version,
    )
