"""taxes - Statutory payroll taxes and federal withholding.

Scope:
- Statutory taxes per pay period with YTD wage-base caps (statutory.py)
- Federal income tax withholding, IRS Pub 15-T percentage method (withholding.py)
- Year-specific rates, deductions and brackets (rules.py, tax_rules/{year}.yaml)

Constraints:
- Pure calculation - no caregiver config (that's in employee/)
- Rates and brackets are passed in, never hardcoded per year

Usage:
    from carepay.sdk.taxes import calculate_taxes, calculate_withholding, load_tax_rules

    rules = load_tax_rules(2025)
    taxes = calculate_taxes(gross_wages=1200, ytd_wages_before=0, rates=rules.statutory)
    fit = calculate_withholding(1200, "biweekly", {"filing_status": "single"}, rules=rules)
"""

# Tax rules schemas and loading
from .schemas import TaxRates, TaxBracket, FederalWithholdingRules, TaxRules
from .rules import TaxRulesNotFoundError, load_tax_rules, get_available_years, get_tax_rates

# Statutory taxes
from .statutory import (
    calculate_taxes,
    calculate_capped_tax,
    calculate_flat_tax,
    calculate_social_security_employee,
    calculate_social_security_employer,
    calculate_medicare_employee,
    calculate_medicare_employer,
    calculate_futa,
    calculate_suta,
    calculate_famli_employee,
    calculate_famli_employer,
    calculate_state_income_tax,
)

# Federal withholding
from .withholding import (
    PAY_PERIODS,
    MULTIPLE_JOBS_POLICIES,
    DEFAULT_MULTIPLE_JOBS_POLICY,
    ESTIMATE_MULTIPLE_JOBS_POLICY,
    get_pay_periods,
    calculate_tax_from_brackets,
    calculate_withholding,
    estimate_annual_tax,
)

__all__ = [
    # Rules
    "TaxRates",
    "TaxBracket",
    "FederalWithholdingRules",
    "TaxRules",
    "TaxRulesNotFoundError",
    "load_tax_rules",
    "get_available_years",
    "get_tax_rates",
    # Statutory
    "calculate_taxes",
    "calculate_capped_tax",
    "calculate_flat_tax",
    "calculate_social_security_employee",
    "calculate_social_security_employer",
    "calculate_medicare_employee",
    "calculate_medicare_employer",
    "calculate_futa",
    "calculate_suta",
    "calculate_famli_employee",
    "calculate_famli_employer",
    "calculate_state_income_tax",
    # Withholding
    "PAY_PERIODS",
    "MULTIPLE_JOBS_POLICIES",
    "DEFAULT_MULTIPLE_JOBS_POLICY",
    "ESTIMATE_MULTIPLE_JOBS_POLICY",
    "get_pay_periods",
    "calculate_tax_from_brackets",
    "calculate_withholding",
    "estimate_annual_tax",
]
