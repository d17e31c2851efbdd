"""Tests for statutory payroll taxes with YTD wage-base caps."""

import logging

import pytest

from carepay.sdk.rounding import round_cents
from carepay.sdk.taxes.schemas import TaxRates
from carepay.sdk.taxes.statutory import (
    calculate_famli_employee,
    calculate_famli_employer,
    calculate_futa,
    calculate_medicare_employee,
    calculate_medicare_employer,
    calculate_social_security_employee,
    calculate_social_security_employer,
    calculate_state_income_tax,
    calculate_suta,
    calculate_taxes,
)


@pytest.fixture
def rates():
    """2025 federal rates with a 16,000 SUTA wage base."""
    return TaxRates(
        version="v1.0-test",
        ss_rate_employee=0.062,
        ss_rate_employer=0.062,
        ss_wage_base=176100,
        medicare_rate_employee=0.0145,
        medicare_rate_employer=0.0145,
        futa_rate=0.006,
        futa_wage_base=7000,
        suta_rate=0.017,
        suta_wage_base=16000,
        famli_rate_employee=0.0045,
        famli_rate_employer=0.0045,
        state_income_tax_rate=0.044,
    )


class TestSocialSecurity:

    def test_under_cap(self, rates):
        assert calculate_social_security_employee(5000, 0, rates) == 310.00
        assert calculate_social_security_employer(5000, 0, rates) == 310.00

    def test_crossing_cap(self, rates):
        # Only 176,100 - 172,000 = 4,100 is taxable
        assert calculate_social_security_employee(10000, 172000, rates) == 254.20

    def test_over_cap(self, rates):
        assert calculate_social_security_employee(5000, 180000, rates) == 0

    def test_exactly_at_cap(self, rates):
        assert calculate_social_security_employee(5000, 176100, rates) == 0

    def test_monotonic_in_ytd(self, rates):
        taxes = [calculate_social_security_employee(5000, ytd, rates) for ytd in range(160000, 185000, 1000)]

        assert taxes == sorted(taxes, reverse=True)
        assert taxes[0] == 310.00
        assert taxes[-1] == 0


class TestMedicare:

    def test_flat(self, rates):
        assert calculate_medicare_employee(5000, rates) == 72.50
        assert calculate_medicare_employer(5000, rates) == 72.50

    def test_no_cap(self, rates):
        assert calculate_medicare_employee(250000, rates) == 3625.00


class TestUnemployment:

    def test_futa_under_cap(self, rates):
        assert calculate_futa(3000, 0, rates) == 18.00

    def test_futa_crossing_cap(self, rates):
        assert calculate_futa(2000, 6000, rates) == 6.00

    def test_futa_over_cap(self, rates):
        assert calculate_futa(2000, 8000, rates) == 0

    def test_suta_under_cap(self, rates):
        assert calculate_suta(5000, 0, rates) == 85.00

    def test_suta_crossing_cap(self, rates):
        assert calculate_suta(3000, 14000, rates) == 34.00

    def test_suta_over_cap(self, rates):
        assert calculate_suta(3000, 17000, rates) == 0


class TestStateTaxes:

    def test_famli(self, rates):
        assert calculate_famli_employee(5000, rates) == 22.50
        assert calculate_famli_employer(100000, rates) == 450.00

    def test_state_income_tax(self, rates):
        assert calculate_state_income_tax(5000, rates) == 220.00


class TestCalculateTaxes:

    def test_all_components(self, rates):
        taxes = calculate_taxes(5000, 0, rates)

        assert taxes.social_security_employee == 310.00
        assert taxes.medicare_employee == 72.50
        assert taxes.famli_employee == 22.50
        assert taxes.state_income_tax == 220.00
        assert taxes.futa == 30.00
        assert taxes.suta == 85.00
        # 310 + 72.50 + 22.50 + 220
        assert taxes.total_employee_withholdings == 625.00
        # 310 + 72.50 + 30 + 85 + 22.50
        assert taxes.total_employer_taxes == 520.00

    def test_ss_near_cap(self, rates):
        taxes = calculate_taxes(5000, 172000, rates)

        assert taxes.social_security_employee == 254.20
        assert taxes.futa == 0
        assert taxes.suta == 0
        assert taxes.medicare_employee == 72.50

    def test_zero_gross(self, rates):
        taxes = calculate_taxes(0, 0, rates)

        assert all(value == 0 for value in taxes.model_dump().values())

    def test_one_cent_gross_rounds_every_component(self, rates):
        taxes = calculate_taxes(0.01, 0, rates)

        for value in taxes.model_dump().values():
            assert value == round_cents(value)
            assert value >= 0

    def test_negative_inputs_clamped_with_warning(self, rates, caplog):
        with caplog.at_level(logging.WARNING, logger="carepay.sdk.taxes.statutory"):
            taxes = calculate_taxes(-100, -5, rates)

        assert all(value == 0 for value in taxes.model_dump().values())
        assert "Negative gross wages" in caplog.text
        assert "Negative YTD wages" in caplog.text

    def test_totals_are_rounded_sums(self, rates):
        taxes = calculate_taxes(1234.57, 3000, rates)

        assert taxes.total_employee_withholdings == round_cents(
            taxes.social_security_employee + taxes.medicare_employee
            + taxes.famli_employee + taxes.state_income_tax
        )
        assert taxes.total_employer_taxes == round_cents(
            taxes.social_security_employer + taxes.medicare_employer
            + taxes.futa + taxes.suta + taxes.famli_employer
        )

    def test_half_cent_amounts_round_up(self, rates):
        # 1007.50 x 6.2% = 62.465; 1016.25 x 4.4% = 44.715
        assert calculate_taxes(1007.50, 0, rates).social_security_employee == 62.47
        assert calculate_taxes(1007.50, 0, rates).social_security_employer == 62.47
        assert calculate_taxes(1016.25, 0, rates).state_income_tax == 44.72

    def test_cap_remainder_in_cents(self, rates):
        # 176,100 - 175,999.99 leaves 100.01 under the wage base
        assert calculate_social_security_employee(500, 175999.99, rates) == 6.20
