"""Pydantic schemas for payroll inputs and results.

All schemas use extra='forbid' to reject unknown fields, ensuring
typos in entry files cause clear errors rather than silent ignoring.
They are also frozen: a calculation never mutates its inputs or results.
"""

import datetime
from typing import Any, List, Literal, Optional, Type, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .rounding import round_cents


DayType = Literal["regular", "weekend", "holiday"]
FilingStatus = Literal["single", "married", "head_of_household"]
PayFrequency = Literal["weekly", "biweekly", "semimonthly", "monthly"]

DAY_TYPES = ("regular", "weekend", "holiday")
FILING_STATUSES = ("single", "married", "head_of_household")

ModelT = TypeVar("ModelT", bound=BaseModel)


class InvalidInputError(ValueError):
    """Raised when calculation input violates its contract.

    Raised before any calculation proceeds, so a caller never receives a
    numeric result computed from malformed input.
    """
    pass


def parse_input(model: Type[ModelT], data: Union[ModelT, dict, Any]) -> ModelT:
    """Validate raw input into a schema instance.

    Args:
        model: Schema class to validate against
        data: Existing instance (returned as-is) or a dict of fields

    Returns:
        Validated schema instance

    Raises:
        InvalidInputError: If validation fails (field errors joined into the message)
    """
    if isinstance(data, model):
        return data
    try:
        return model.model_validate(data)
    except ValidationError as e:
        problems = []
        for err in e.errors():
            loc = ".".join(str(part) for part in err["loc"]) or model.__name__
            problems.append(f"{loc}: {err['msg']}")
        raise InvalidInputError(f"Invalid {model.__name__}: " + "; ".join(problems)) from e


class _Frozen(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)


# =============================================================================
# Hours and wages
# =============================================================================


class TimeEntry(_Frozen):
    """Hours worked on one calendar date."""

    date: datetime.date
    hours: float = Field(..., ge=0, allow_inf_nan=False, description="Hours worked")
    day_type_override: Optional[DayType] = Field(
        default=None,
        description="Forces the day type instead of consulting the holiday calendar",
    )


class HoursByType(_Frozen):
    """Hours per pay category. Every entry hour is counted exactly once."""

    regular: float = Field(default=0, ge=0)
    weekend: float = Field(default=0, ge=0)
    holiday: float = Field(default=0, ge=0)
    overtime: float = Field(default=0, ge=0)

    @property
    def total(self) -> float:
        """All hours including overtime."""
        return self.regular + self.weekend + self.holiday + self.overtime


class WageLineItem(_Frozen):
    """One paystub earnings line."""

    hours: float = Field(..., ge=0)
    rate: float = Field(..., ge=0)
    subtotal: float = Field(..., ge=0, description="round_cents(hours * rate)")


class WagesByType(_Frozen):
    """Earnings lines per pay category."""

    regular: WageLineItem
    weekend: WageLineItem
    holiday: WageLineItem
    overtime: WageLineItem

    @property
    def gross_wages(self) -> float:
        """Sum of the individually rounded subtotals."""
        return round_cents(
            self.regular.subtotal
            + self.weekend.subtotal
            + self.holiday.subtotal
            + self.overtime.subtotal
        )


# =============================================================================
# Statutory taxes
# =============================================================================


class TaxCalculation(_Frozen):
    """Employee withholdings and employer taxes for one pay period."""

    social_security_employee: float
    medicare_employee: float
    social_security_employer: float
    medicare_employer: float
    futa: float
    suta: float
    famli_employee: float
    famli_employer: float
    state_income_tax: float
    total_employee_withholdings: float
    total_employer_taxes: float


# =============================================================================
# Federal withholding
# =============================================================================


class W4Information(_Frozen):
    """Form W-4 (2020 or later) elections.

    Dollar amounts are annual except extra_withholding, which is per paycheck.
    """

    filing_status: FilingStatus = "single"
    multiple_jobs: bool = Field(default=False, description="Step 2(c) checkbox")
    dependents_amount: float = Field(default=0, ge=0, allow_inf_nan=False, description="Step 3")
    other_income: float = Field(default=0, ge=0, allow_inf_nan=False, description="Step 4(a)")
    deductions: float = Field(default=0, ge=0, allow_inf_nan=False, description="Step 4(b)")
    extra_withholding: float = Field(default=0, ge=0, allow_inf_nan=False, description="Step 4(c)")

    @classmethod
    def default(cls) -> "W4Information":
        """W-4 for a caregiver who has not submitted one (single, no adjustments)."""
        return cls()


class WithholdingBreakdown(_Frozen):
    """Intermediate figures of the percentage method, for paystub transparency."""

    annualized_wages: float
    adjusted_annual_wages: float
    standard_deduction: float
    taxable_income: float
    annual_tax: float
    per_paycheck_tax: float


class WithholdingResult(_Frozen):
    """Federal withholding and FICA for one paycheck."""

    gross_pay: float
    federal_withholding: float
    social_security_withholding: float
    medicare_withholding: float
    total_fica: float
    total_deductions: float
    net_pay: float
    breakdown: WithholdingBreakdown


class AnnualTaxEstimate(_Frozen):
    """Year-end projection of a caregiver's federal tax burden."""

    gross_wages: float
    standard_deduction: float
    taxable_income: float
    federal_income_tax: float
    social_security_tax: float
    medicare_tax: float
    total_tax: float
    effective_tax_rate: float = Field(..., description="Fraction, rounded to 4 places")


# =============================================================================
# Payroll orchestration
# =============================================================================


class PayrollInput(_Frozen):
    """Everything needed to run payroll for one caregiver and one pay period."""

    caregiver_id: Union[int, str]
    time_entries: List[TimeEntry] = Field(default_factory=list)
    base_hourly_rate: float = Field(..., ge=0, allow_inf_nan=False)
    holiday_multiplier: float = Field(default=1.0, ge=0, allow_inf_nan=False)
    weekend_multiplier: float = Field(default=1.0, ge=0, allow_inf_nan=False)
    federal_withholding_amount: Optional[float] = Field(default=None, ge=0, allow_inf_nan=False)
    ytd_wages_before: Optional[float] = Field(default=None, ge=0, allow_inf_nan=False)
    disable_overtime: bool = False


class PayrollResult(_Frozen):
    """Payroll for one caregiver and one pay period.

    calculation_version and tax_version are opaque audit tags.
    """

    caregiver_id: Union[int, str]
    total_hours: float = Field(..., description="Regular + weekend + holiday; overtime excluded")
    hours_by_type: HoursByType
    wages_by_type: WagesByType
    gross_wages: float
    taxes: TaxCalculation
    federal_withholding: float
    net_pay: float
    is_minimum_wage_compliant: bool
    calculation_version: str
    tax_version: str


class SimplePayrollResult(_Frozen):
    """Flat-rate payroll for a manually entered hours total."""

    caregiver_id: Union[int, str]
    hours_worked: float
    gross_wages: float
    taxes: TaxCalculation
    federal_withholding: float
    net_pay: float
    calculation_version: str
    tax_version: str
