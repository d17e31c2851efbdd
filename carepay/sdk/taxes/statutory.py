"""Statutory payroll taxes for household employers.

Covers:
- FICA: Social Security (employee + employer, capped at the SS wage base)
- FICA: Medicare (employee + employer, uncapped)
- FUTA: federal unemployment (employer only, capped)
- SUTA: state unemployment (employer only, capped at the state wage base)
- FAMLI: state paid leave premium (employee + employer, uncapped)
- Flat state income tax (employee)

Capped taxes apply only to the part of this period's wages that still fits
under the wage base after ytd_wages_before. Every component is rounded to
cents on its own before the totals are summed.
"""

import logging

from ..rounding import round_cents, round_cents_product
from ..schemas import TaxCalculation
from .schemas import TaxRates

logger = logging.getLogger(__name__)


def capped_taxable_wages(gross_wages: float, ytd_wages_before: float, wage_base: float) -> float:
    """Portion of this period's wages still under the wage base."""
    remaining_cap = max(0, round_cents(wage_base - ytd_wages_before))
    return min(gross_wages, remaining_cap)


def calculate_capped_tax(gross_wages: float, ytd_wages_before: float, wage_base: float, rate: float) -> float:
    """Tax with a wage base limit (e.g., SS, FUTA, SUTA)."""
    return round_cents_product(capped_taxable_wages(gross_wages, ytd_wages_before, wage_base), rate)


def calculate_flat_tax(gross_wages: float, rate: float) -> float:
    """Flat-rate tax on all wages (e.g., Medicare, FAMLI)."""
    return round_cents_product(gross_wages, rate)


def calculate_social_security_employee(gross_wages: float, ytd_wages_before: float, rates: TaxRates) -> float:
    return calculate_capped_tax(gross_wages, ytd_wages_before, rates.ss_wage_base, rates.ss_rate_employee)


def calculate_social_security_employer(gross_wages: float, ytd_wages_before: float, rates: TaxRates) -> float:
    return calculate_capped_tax(gross_wages, ytd_wages_before, rates.ss_wage_base, rates.ss_rate_employer)


def calculate_medicare_employee(gross_wages: float, rates: TaxRates) -> float:
    return calculate_flat_tax(gross_wages, rates.medicare_rate_employee)


def calculate_medicare_employer(gross_wages: float, rates: TaxRates) -> float:
    return calculate_flat_tax(gross_wages, rates.medicare_rate_employer)


def calculate_futa(gross_wages: float, ytd_wages_before: float, rates: TaxRates) -> float:
    return calculate_capped_tax(gross_wages, ytd_wages_before, rates.futa_wage_base, rates.futa_rate)


def calculate_suta(gross_wages: float, ytd_wages_before: float, rates: TaxRates) -> float:
    return calculate_capped_tax(gross_wages, ytd_wages_before, rates.suta_wage_base, rates.suta_rate)


def calculate_famli_employee(gross_wages: float, rates: TaxRates) -> float:
    return calculate_flat_tax(gross_wages, rates.famli_rate_employee)


def calculate_famli_employer(gross_wages: float, rates: TaxRates) -> float:
    return calculate_flat_tax(gross_wages, rates.famli_rate_employer)


def calculate_state_income_tax(gross_wages: float, rates: TaxRates) -> float:
    return calculate_flat_tax(gross_wages, rates.state_income_tax_rate)


def calculate_taxes(gross_wages: float, ytd_wages_before: float, rates: TaxRates) -> TaxCalculation:
    """Calculate every statutory tax for one pay period.

    Negative inputs are a caller contract violation. They are clamped to zero
    (with a warning) rather than raising, so a bad YTD figure from storage
    never blocks a payroll run.

    Args:
        gross_wages: Gross wages for this pay period
        ytd_wages_before: Year-to-date wages paid before this period
        rates: Tax rates for the jurisdiction/year

    Returns:
        TaxCalculation with each component and the employee/employer totals

    Example:
        # SS wage base 176,100 with 172,000 already paid: only 4,100 is taxable
        calculate_taxes(5000, 172000, rates).social_security_employee  # 254.2
    """
    if gross_wages < 0:
        logger.warning(f"Negative gross wages {gross_wages} clamped to 0")
        gross_wages = 0
    if ytd_wages_before < 0:
        logger.warning(f"Negative YTD wages {ytd_wages_before} clamped to 0")
        ytd_wages_before = 0

    ss_employee = calculate_social_security_employee(gross_wages, ytd_wages_before, rates)
    medicare_employee = calculate_medicare_employee(gross_wages, rates)
    ss_employer = calculate_social_security_employer(gross_wages, ytd_wages_before, rates)
    medicare_employer = calculate_medicare_employer(gross_wages, rates)
    futa = calculate_futa(gross_wages, ytd_wages_before, rates)
    suta = calculate_suta(gross_wages, ytd_wages_before, rates)
    famli_employee = calculate_famli_employee(gross_wages, rates)
    famli_employer = calculate_famli_employer(gross_wages, rates)
    state_income_tax = calculate_state_income_tax(gross_wages, rates)

    logger.debug(
        f"taxes on {gross_wages:.2f} (ytd {ytd_wages_before:.2f}, rates {rates.version}): "
        f"ss={ss_employee:.2f} medicare={medicare_employee:.2f} futa={futa:.2f} suta={suta:.2f}"
    )

    return TaxCalculation(
        social_security_employee=ss_employee,
        medicare_employee=medicare_employee,
        social_security_employer=ss_employer,
        medicare_employer=medicare_employer,
        futa=futa,
        suta=suta,
        famli_employee=famli_employee,
        famli_employer=famli_employer,
        state_income_tax=state_income_tax,
        total_employee_withholdings=round_cents(
            ss_employee + medicare_employee + famli_employee + state_income_tax
        ),
        total_employer_taxes=round_cents(
            ss_employer + medicare_employer + futa + suta + famli_employer
        ),
    )
