"""Care Pay SDK - Core functionality for caregiver payroll and taxes."""

from .config import (
    get_config_dir,
    get_settings_path,
    load_settings,
    save_settings,
    get_setting,
    set_setting,
    coerce_setting,
    get_profile_path,
    load_profile,
    save_profile,
    ProfileNotFoundError,
    # Calculation inputs from config
    get_default_year,
    resolve_tax_rates,
    resolve_payroll_policy,
    resolve_calendar,
)

from .schemas import (
    InvalidInputError,
    TimeEntry,
    HoursByType,
    WageLineItem,
    WagesByType,
    TaxCalculation,
    W4Information,
    WithholdingResult,
    AnnualTaxEstimate,
    PayrollInput,
    PayrollResult,
    SimplePayrollResult,
)

from .rounding import round_cents, round_cents_product
from .calendar import HolidayCalendar, federal_holidays, get_day_type
from .hours import classify_hours, apply_daily_overtime, apply_weekly_overtime
from .wages import compute_wages

from .taxes import (
    TaxRates,
    TaxRules,
    TaxRulesNotFoundError,
    load_tax_rules,
    get_available_years,
    get_tax_rates,
    calculate_taxes,
    calculate_withholding,
    estimate_annual_tax,
)

from .payroll import (
    PayrollPolicy,
    calculate_payroll,
    calculate_multi_caregiver_payroll,
    calculate_simple_payroll,
)

from .employee import (
    CaregiverNotFoundError,
    get_caregiver,
    resolve_w4,
)

__all__ = [
    # Config
    "get_config_dir",
    "get_settings_path",
    "load_settings",
    "save_settings",
    "get_setting",
    "set_setting",
    "coerce_setting",
    "get_profile_path",
    "load_profile",
    "save_profile",
    "ProfileNotFoundError",
    "get_default_year",
    "resolve_tax_rates",
    "resolve_payroll_policy",
    "resolve_calendar",
    # Schemas
    "InvalidInputError",
    "TimeEntry",
    "HoursByType",
    "WageLineItem",
    "WagesByType",
    "TaxCalculation",
    "W4Information",
    "WithholdingResult",
    "AnnualTaxEstimate",
    "PayrollInput",
    "PayrollResult",
    "SimplePayrollResult",
    # Calculation
    "round_cents",
    "round_cents_product",
    "HolidayCalendar",
    "federal_holidays",
    "get_day_type",
    "classify_hours",
    "apply_daily_overtime",
    "apply_weekly_overtime",
    "compute_wages",
    # Taxes
    "TaxRates",
    "TaxRules",
    "TaxRulesNotFoundError",
    "load_tax_rules",
    "get_available_years",
    "get_tax_rates",
    "calculate_taxes",
    "calculate_withholding",
    "estimate_annual_tax",
    # Payroll
    "PayrollPolicy",
    "calculate_payroll",
    "calculate_multi_caregiver_payroll",
    "calculate_simple_payroll",
    # Employee
    "CaregiverNotFoundError",
    "get_caregiver",
    "resolve_w4",
]
