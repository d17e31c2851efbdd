"""Tests for federal withholding (IRS Pub 15-T percentage method).

Uses a fixed rules fixture (standard deductions 15,000 / 30,000 / 22,500 and
2024 brackets) so expected values don't move when tax_rules/*.yaml is
updated for a new year.
"""

import pytest

from carepay.sdk.schemas import InvalidInputError, W4Information
from carepay.sdk.taxes.schemas import FederalWithholdingRules, TaxRates, TaxRules
from carepay.sdk.taxes.withholding import (
    PAY_PERIODS,
    calculate_tax_from_brackets,
    calculate_withholding,
    estimate_annual_tax,
    get_pay_periods,
)


def brackets(*bounds: float) -> list:
    rates = [0.10, 0.12, 0.22, 0.24, 0.32, 0.35]
    schedule = [{"up_to": bound, "rate": rate} for bound, rate in zip(bounds, rates)]
    schedule.append({"over": bounds[-1], "rate": 0.37})
    return schedule


@pytest.fixture
def rules():
    """Tax rules for withholding tests."""
    return TaxRules(
        year=2025,
        version="test",
        minimum_wage=14.42,
        statutory=TaxRates(
            ss_rate_employee=0.062,
            ss_rate_employer=0.062,
            ss_wage_base=176100,
            medicare_rate_employee=0.0145,
            medicare_rate_employer=0.0145,
            futa_rate=0.006,
            futa_wage_base=7000,
            suta_wage_base=16000,
        ),
        federal=FederalWithholdingRules(
            standard_deductions={"single": 15000, "married": 30000, "head_of_household": 22500},
            brackets={
                "single": brackets(11600, 47150, 100525, 191950, 243725, 609350),
                "married": brackets(23200, 94300, 201050, 383900, 487450, 731200),
                "head_of_household": brackets(16550, 63100, 100500, 191950, 243700, 609350),
            },
        ),
    )


class TestPayPeriods:

    @pytest.mark.parametrize("frequency,periods", [
        ("weekly", 52), ("biweekly", 26), ("semimonthly", 24), ("monthly", 12),
    ])
    def test_known(self, frequency, periods):
        assert get_pay_periods(frequency) == periods

    def test_unknown(self):
        with pytest.raises(InvalidInputError, match="pay_frequency"):
            get_pay_periods("daily")

    def test_table_complete(self):
        assert set(PAY_PERIODS) == {"weekly", "biweekly", "semimonthly", "monthly"}


class TestBrackets:

    def test_first_bracket(self, rules):
        assert calculate_tax_from_brackets(10000, rules.federal.brackets["single"]) == pytest.approx(1000)

    def test_spans_brackets(self, rules):
        # 11,600 at 10% + 10,400 at 12%
        assert calculate_tax_from_brackets(22000, rules.federal.brackets["single"]) == pytest.approx(2408)

    def test_top_bracket(self, rules):
        schedule = rules.federal.brackets["single"]
        base = calculate_tax_from_brackets(609350, schedule)

        assert calculate_tax_from_brackets(709350, schedule) == pytest.approx(base + 37000)

    def test_zero(self, rules):
        assert calculate_tax_from_brackets(0, rules.federal.brackets["married"]) == 0


class TestCalculateWithholding:

    def test_single_biweekly(self, rules):
        result = calculate_withholding(949.90, "biweekly", W4Information(), rules=rules)

        assert result.federal_withholding == 37.30
        assert result.social_security_withholding == 58.89
        assert result.medicare_withholding == 13.77
        assert result.total_fica == 72.66
        assert result.total_deductions == 109.96
        assert result.net_pay == 839.94

    def test_breakdown(self, rules):
        breakdown = calculate_withholding(949.90, "biweekly", W4Information(), rules=rules).breakdown

        assert breakdown.annualized_wages == 24697.40
        assert breakdown.standard_deduction == 15000
        assert breakdown.taxable_income == 9697.40
        assert breakdown.annual_tax == 969.74
        assert breakdown.per_paycheck_tax == 37.30

    def test_married_under_standard_deduction(self, rules):
        result = calculate_withholding(949.90, "biweekly", {"filing_status": "married"}, rules=rules)

        assert result.federal_withholding == 0
        assert result.breakdown.taxable_income == 0

    def test_extra_withholding(self, rules):
        result = calculate_withholding(949.90, "biweekly", {"extra_withholding": 25}, rules=rules)

        assert result.federal_withholding == 62.30

    def test_extra_withholding_applies_with_no_tax(self, rules):
        w4 = {"filing_status": "married", "extra_withholding": 25}

        assert calculate_withholding(949.90, "biweekly", w4, rules=rules).federal_withholding == 25.00

    def test_dependents(self, rules):
        result = calculate_withholding(949.90, "biweekly", {"dependents_amount": 2000}, rules=rules)

        assert result.federal_withholding == 29.61

    def test_other_income_and_deductions(self, rules):
        # Other income and deductions cancel out
        w4 = {"other_income": 5000, "deductions": 5000}

        assert calculate_withholding(949.90, "biweekly", w4, rules=rules).federal_withholding == 37.30

    def test_ss_near_wage_base(self, rules):
        result = calculate_withholding(949.90, "biweekly", W4Information(), 176000, rules=rules)

        assert result.social_security_withholding == 6.20
        assert result.medicare_withholding == 13.77

    def test_zero_gross(self, rules):
        result = calculate_withholding(0, "weekly", W4Information(), rules=rules)

        assert result.federal_withholding == 0
        assert result.net_pay == 0

    def test_negative_gross_rejected(self, rules):
        with pytest.raises(InvalidInputError, match="gross_pay"):
            calculate_withholding(-1, "biweekly", W4Information(), rules=rules)

    def test_unknown_filing_status_rejected(self, rules):
        with pytest.raises(InvalidInputError, match="filing_status"):
            calculate_withholding(1000, "biweekly", {"filing_status": "widowed"}, rules=rules)

    def test_unknown_frequency_rejected(self, rules):
        with pytest.raises(InvalidInputError):
            calculate_withholding(1000, "hourly", W4Information(), rules=rules)


class TestMultipleJobs:
    """Step 2(c) selects the single bracket schedule by default."""

    def test_single_schedule_policy(self, rules):
        w4 = {"filing_status": "married", "multiple_jobs": True}

        result = calculate_withholding(2000, "biweekly", w4, rules=rules)

        # Married deduction (30,000), single brackets: 2,408 / 26
        assert result.federal_withholding == 92.62

    def test_unchecked_box_uses_filing_status_schedule(self, rules):
        result = calculate_withholding(2000, "biweekly", {"filing_status": "married"}, rules=rules)

        # 22,000 at 10% / 26
        assert result.federal_withholding == 84.62

    def test_none_policy_ignores_box(self, rules):
        w4 = {"filing_status": "married", "multiple_jobs": True}

        result = calculate_withholding(2000, "biweekly", w4, rules=rules, multiple_jobs_policy="none")

        assert result.federal_withholding == 84.62

    def test_custom_policy(self, rules):
        result = calculate_withholding(
            2000, "biweekly", {"filing_status": "married"}, rules=rules,
            multiple_jobs_policy=lambda w4: "single",
        )

        assert result.federal_withholding == 92.62

    def test_unknown_policy_rejected(self, rules):
        with pytest.raises(InvalidInputError, match="multiple_jobs_policy"):
            calculate_withholding(2000, "biweekly", W4Information(), rules=rules, multiple_jobs_policy="double")


class TestEstimateAnnualTax:

    def test_single(self, rules):
        estimate = estimate_annual_tax(25000, W4Information.default(), rules=rules)

        assert estimate.taxable_income == 10000
        assert estimate.federal_income_tax == 1000.00
        assert estimate.social_security_tax == 1550.00
        assert estimate.medicare_tax == 362.50
        assert estimate.total_tax == 2912.50
        assert estimate.effective_tax_rate == 0.1165

    def test_social_security_capped(self, rules):
        estimate = estimate_annual_tax(200000, W4Information(), rules=rules)

        assert estimate.social_security_tax == 10918.20
        assert estimate.medicare_tax == 2900.00

    def test_zero_wages(self, rules):
        estimate = estimate_annual_tax(0, W4Information(), rules=rules)

        assert estimate.total_tax == 0
        assert estimate.effective_tax_rate == 0

    def test_matches_withholding_annual_tax(self, rules):
        w4 = W4Information(filing_status="head_of_household", dependents_amount=500)
        paycheck = calculate_withholding(2500, "semimonthly", w4, rules=rules)
        estimate = estimate_annual_tax(2500 * 24, w4, rules=rules)

        assert estimate.federal_income_tax == paycheck.breakdown.annual_tax

    def test_ignores_multiple_jobs_by_default(self, rules):
        w4 = {"filing_status": "married", "multiple_jobs": True}

        # (50,000 - 30,000) at 10% on the married schedule
        assert estimate_annual_tax(50000, w4, rules=rules).federal_income_tax == 2000.00

    def test_multiple_jobs_policy_opt_in(self, rules):
        w4 = {"filing_status": "married", "multiple_jobs": True}

        estimate = estimate_annual_tax(50000, w4, rules=rules, multiple_jobs_policy="single_schedule")

        # 11,600 at 10% + 8,400 at 12%
        assert estimate.federal_income_tax == 2168.00
