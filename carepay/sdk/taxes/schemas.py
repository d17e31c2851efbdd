"""Pydantic schemas for tax rules validation.

These schemas validate the tax_rules/*.yaml files and provide typed access
to tax parameters like the SS wage base, SUTA rate and withholding brackets.
"""

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ..schemas import FILING_STATUSES


class TaxRates(BaseModel):
    """Statutory payroll tax rates and wage bases for one jurisdiction/year."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    version: str = Field(default="v1.0", description="Audit tag for the rate set")

    ss_rate_employee: float = Field(..., ge=0, le=1)
    ss_rate_employer: float = Field(..., ge=0, le=1)
    ss_wage_base: float = Field(..., gt=0, description="SS wage base (max taxable)")

    medicare_rate_employee: float = Field(..., ge=0, le=1)
    medicare_rate_employer: float = Field(..., ge=0, le=1)

    futa_rate: float = Field(..., ge=0, le=1, description="FUTA rate after state credit")
    futa_wage_base: float = Field(..., gt=0)

    suta_rate: float = Field(default=0, ge=0, le=1, description="Employer-specific SUTA rate")
    suta_wage_base: float = Field(..., gt=0)

    famli_rate_employee: float = Field(default=0, ge=0, le=1)
    famli_rate_employer: float = Field(default=0, ge=0, le=1)

    state_income_tax_rate: float = Field(default=0, ge=0, le=1, description="Flat state income tax")


class TaxBracket(BaseModel):
    """Single tax bracket entry."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    up_to: Optional[float] = Field(default=None, description="Upper bound (None if 'over' bracket)")
    over: Optional[float] = Field(default=None, description="Lower bound for top bracket")
    rate: float = Field(..., ge=0, le=1, description="Tax rate as decimal")


class FederalWithholdingRules(BaseModel):
    """Standard deductions and marginal brackets per W-4 filing status."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    standard_deductions: Dict[str, float]
    brackets: Dict[str, List[TaxBracket]]

    @model_validator(mode="after")
    def check_tables(self) -> "FederalWithholdingRules":
        """Every filing status needs a deduction and an ascending, open-ended schedule."""
        errors = []
        for status in FILING_STATUSES:
            if status not in self.standard_deductions:
                errors.append(f"standard_deductions missing '{status}'")
            if status not in self.brackets:
                errors.append(f"brackets missing '{status}'")
                continue

            schedule = self.brackets[status]
            bounds = [b.up_to for b in schedule[:-1]]
            if any(b is None for b in bounds):
                errors.append(f"brackets.{status}: only the last bracket may omit up_to")
            elif bounds != sorted(bounds):
                errors.append(f"brackets.{status}: up_to bounds must ascend")
            if not schedule or schedule[-1].up_to is not None:
                errors.append(f"brackets.{status}: last bracket must be open-ended ('over')")

        if errors:
            raise ValueError("; ".join(errors))
        return self


class TaxRules(BaseModel):
    """Complete tax rules for a year."""
    model_config = ConfigDict(extra="ignore", frozen=True)  # Allow unknown fields for forward compat

    year: int
    version: str
    statutory: TaxRates
    federal: FederalWithholdingRules
    minimum_wage: float = Field(..., gt=0, description="State hourly minimum wage")
