"""Federal income tax withholding calculations.

Implements the IRS Pub 15-T percentage method for computing FIT withholding
from Form W-4 (2020 or later) elections, plus per-paycheck FICA. Independent
of the statutory employer tax calculator; a caller can feed the result into
PayrollInput.federal_withholding_amount.

The percentage method used here:
1. Annualize the wages
2. Add Step 4(a) other income, subtract Step 4(b) deductions
3. Subtract the standard deduction and Step 3 dependents amount
4. Apply the marginal brackets for the filing status
5. Divide back to a per-paycheck amount and add Step 4(c) extra withholding
"""

import logging
import math
from typing import Callable, Dict, Union

from ..rounding import round_cents, round_rate
from ..schemas import (
    AnnualTaxEstimate,
    InvalidInputError,
    W4Information,
    WithholdingBreakdown,
    WithholdingResult,
    parse_input,
)
from .schemas import TaxBracket, TaxRules
from .statutory import calculate_capped_tax, calculate_flat_tax

logger = logging.getLogger(__name__)


# Pay periods by frequency
PAY_PERIODS = {
    "weekly": 52,
    "biweekly": 26,
    "semimonthly": 24,
    "monthly": 12,
}


# =============================================================================
# Multiple jobs (W-4 Step 2(c)) policies
# =============================================================================
#
# A policy maps W-4 elections to the filing status whose bracket schedule is
# used. The standard deduction always follows the declared filing status.

MultipleJobsPolicy = Callable[[W4Information], str]


def ignore_multiple_jobs(w4: W4Information) -> str:
    """Withhold on the declared filing status' schedule regardless of Step 2(c)."""
    return w4.filing_status


def single_schedule_for_multiple_jobs(w4: W4Information) -> str:
    """Withhold on the single-filer schedule when Step 2(c) is checked."""
    if w4.multiple_jobs:
        return "single"
    return w4.filing_status


MULTIPLE_JOBS_POLICIES: Dict[str, MultipleJobsPolicy] = {
    "none": ignore_multiple_jobs,
    "single_schedule": single_schedule_for_multiple_jobs,
}

DEFAULT_MULTIPLE_JOBS_POLICY = "single_schedule"

# estimate_annual_tax uses the filing status schedule unless given a policy
ESTIMATE_MULTIPLE_JOBS_POLICY = "none"


def get_multiple_jobs_policy(policy: Union[str, MultipleJobsPolicy]) -> MultipleJobsPolicy:
    """Resolve a policy by name, or pass a callable through."""
    if callable(policy):
        return policy
    if policy not in MULTIPLE_JOBS_POLICIES:
        raise InvalidInputError(
            f"Invalid multiple_jobs_policy: {policy}. Must be one of {tuple(MULTIPLE_JOBS_POLICIES)}"
        )
    return MULTIPLE_JOBS_POLICIES[policy]


# =============================================================================
# Helpers
# =============================================================================


def get_pay_periods(frequency: str) -> int:
    """Get number of pay periods for a frequency.

    Raises:
        InvalidInputError: If frequency is not weekly/biweekly/semimonthly/monthly
    """
    if frequency not in PAY_PERIODS:
        raise InvalidInputError(
            f"Invalid pay_frequency: {frequency}. Must be one of {tuple(PAY_PERIODS)}"
        )
    return PAY_PERIODS[frequency]


def _require_amount(name: str, value: float) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidInputError(f"{name} must be a number, got: {value!r}")
    if not math.isfinite(value) or value < 0:
        raise InvalidInputError(f"{name} must be a non-negative finite number, got: {value}")
    return float(value)


def calculate_tax_from_brackets(taxable_income: float, brackets: list[TaxBracket]) -> float:
    """Calculate annual tax using progressive marginal brackets (unrounded)."""
    tax = 0.0
    previous_limit = 0.0

    for bracket in brackets:
        if bracket.up_to is not None:
            if taxable_income > previous_limit:
                income_in_bracket = min(taxable_income, bracket.up_to) - previous_limit
                tax += income_in_bracket * bracket.rate
            previous_limit = bracket.up_to
        else:
            lower = bracket.over if bracket.over is not None else previous_limit
            if taxable_income > lower:
                tax += (taxable_income - lower) * bracket.rate

    return tax


def _annual_income_tax(
    adjusted_annual_wages: float,
    w4: W4Information,
    rules: TaxRules,
    policy: MultipleJobsPolicy,
) -> tuple:
    """Standard deduction, taxable income and annual tax for adjusted annual wages."""
    standard_deduction = rules.federal.standard_deductions[w4.filing_status]
    taxable_income = max(0, adjusted_annual_wages - standard_deduction - w4.dependents_amount)
    schedule = policy(w4)
    annual_tax = calculate_tax_from_brackets(taxable_income, rules.federal.brackets[schedule])
    return standard_deduction, taxable_income, annual_tax


# =============================================================================
# Public API
# =============================================================================


def calculate_withholding(
    gross_pay: float,
    pay_frequency: str,
    w4: Union[W4Information, dict],
    ytd_wages_before: float = 0,
    *,
    rules: TaxRules,
    multiple_jobs_policy: Union[str, MultipleJobsPolicy] = DEFAULT_MULTIPLE_JOBS_POLICY,
) -> WithholdingResult:
    """Calculate federal withholding and FICA for a single paycheck.

    Args:
        gross_pay: Gross wages for this pay period
        pay_frequency: 'weekly', 'biweekly', 'semimonthly' or 'monthly'
        w4: W-4 elections (W4Information or dict of its fields)
        ytd_wages_before: Year-to-date wages before this paycheck (SS wage base)
        rules: Tax rules for the year (standard deductions, brackets, FICA rates)
        multiple_jobs_policy: Name in MULTIPLE_JOBS_POLICIES or a callable

    Returns:
        WithholdingResult with the percentage-method breakdown

    Raises:
        InvalidInputError: For negative/non-finite amounts, an unknown pay
            frequency, or invalid W-4 fields
    """
    gross_pay = _require_amount("gross_pay", gross_pay)
    ytd_wages_before = _require_amount("ytd_wages_before", ytd_wages_before)
    periods = get_pay_periods(pay_frequency)
    w4 = parse_input(W4Information, w4)
    policy = get_multiple_jobs_policy(multiple_jobs_policy)

    # Step 1: Annualize wages
    annualized_wages = gross_pay * periods

    # Step 2: Adjust for Step 4(a) and 4(b)
    adjusted_annual_wages = annualized_wages + w4.other_income - w4.deductions

    # Steps 3-4: Standard deduction, Step 3 dependents, brackets
    standard_deduction, taxable_income, annual_tax = _annual_income_tax(
        adjusted_annual_wages, w4, rules, policy
    )

    # Step 5: Per paycheck, plus Step 4(c) extra withholding
    per_paycheck_tax = round_cents(annual_tax / periods)
    federal_withholding = max(0.0, round_cents(per_paycheck_tax + w4.extra_withholding))

    # FICA
    statutory = rules.statutory
    social_security = calculate_capped_tax(
        gross_pay, ytd_wages_before, statutory.ss_wage_base, statutory.ss_rate_employee
    )
    medicare = calculate_flat_tax(gross_pay, statutory.medicare_rate_employee)
    total_fica = round_cents(social_security + medicare)

    total_deductions = round_cents(federal_withholding + total_fica)
    net_pay = round_cents(gross_pay - total_deductions)

    logger.debug(
        f"withholding {pay_frequency} {gross_pay:.2f} ({w4.filing_status}): "
        f"taxable {taxable_income:.2f}, annual tax {annual_tax:.2f}, fit {federal_withholding:.2f}"
    )

    return WithholdingResult(
        gross_pay=gross_pay,
        federal_withholding=federal_withholding,
        social_security_withholding=social_security,
        medicare_withholding=medicare,
        total_fica=total_fica,
        total_deductions=total_deductions,
        net_pay=net_pay,
        breakdown=WithholdingBreakdown(
            annualized_wages=round_cents(annualized_wages),
            adjusted_annual_wages=round_cents(adjusted_annual_wages),
            standard_deduction=standard_deduction,
            taxable_income=round_cents(taxable_income),
            annual_tax=round_cents(annual_tax),
            per_paycheck_tax=per_paycheck_tax,
        ),
    )


def estimate_annual_tax(
    gross_annual_wages: float,
    w4: Union[W4Information, dict],
    *,
    rules: TaxRules,
    multiple_jobs_policy: Union[str, MultipleJobsPolicy] = ESTIMATE_MULTIPLE_JOBS_POLICY,
) -> AnnualTaxEstimate:
    """Estimate a full year's federal income tax and FICA (no pay-period conversion).

    Args:
        gross_annual_wages: Expected annual gross wages
        w4: W-4 elections
        rules: Tax rules for the year
        multiple_jobs_policy: Name in MULTIPLE_JOBS_POLICIES or a callable
            (default: the filing status schedule, ignoring Step 2(c))

    Returns:
        AnnualTaxEstimate
    """
    gross_annual_wages = _require_amount("gross_annual_wages", gross_annual_wages)
    w4 = parse_input(W4Information, w4)
    policy = get_multiple_jobs_policy(multiple_jobs_policy)

    adjusted = gross_annual_wages + w4.other_income - w4.deductions
    standard_deduction, taxable_income, federal_income_tax = _annual_income_tax(
        adjusted, w4, rules, policy
    )

    statutory = rules.statutory
    social_security_tax = min(gross_annual_wages, statutory.ss_wage_base) * statutory.ss_rate_employee
    medicare_tax = gross_annual_wages * statutory.medicare_rate_employee

    total_tax = federal_income_tax + social_security_tax + medicare_tax
    effective_rate = total_tax / gross_annual_wages if gross_annual_wages > 0 else 0

    return AnnualTaxEstimate(
        gross_wages=gross_annual_wages,
        standard_deduction=standard_deduction,
        taxable_income=round_cents(taxable_income),
        federal_income_tax=round_cents(federal_income_tax),
        social_security_tax=round_cents(social_security_tax),
        medicare_tax=round_cents(medicare_tax),
        total_tax=round_cents(total_tax),
        effective_tax_rate=round_rate(effective_rate),
    )
