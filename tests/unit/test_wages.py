"""Tests for differential wage calculation and cent rounding."""

import pytest

from carepay.sdk.rounding import round_cents, round_cents_product, round_rate
from carepay.sdk.schemas import HoursByType
from carepay.sdk.wages import compute_wages


class TestComputeWages:

    def test_regular_hours(self):
        wages = compute_wages(HoursByType(regular=24), 20.0, 2.0, 1.5)

        assert wages.regular.subtotal == 480.00
        assert wages.gross_wages == 480.00

    def test_weekend_hours_at_multiplier(self):
        wages = compute_wages(HoursByType(weekend=16), 20.0, 2.0, 1.5)

        assert wages.weekend.rate == 30.00
        assert wages.weekend.subtotal == 480.00

    def test_holiday_hours_at_multiplier(self):
        wages = compute_wages(HoursByType(holiday=8), 20.0, 2.0, 1.5)

        assert wages.holiday.rate == 40.00
        assert wages.gross_wages == 320.00

    def test_overtime_is_always_time_and_a_half(self):
        wages = compute_wages(HoursByType(overtime=5), 20.0, 3.0, 2.5)

        assert wages.overtime.rate == 30.00
        assert wages.overtime.subtotal == 150.00

    def test_rates_rounded_to_cents(self):
        wages = compute_wages(HoursByType(weekend=3), 15.333, 1.0, 1.5)

        assert wages.weekend.rate == 23.00
        assert wages.weekend.subtotal == 69.00

    def test_regular_rate_is_not_rounded(self):
        wages = compute_wages(HoursByType(regular=10), 15.333, 1.0, 1.0)

        assert wages.regular.rate == 15.333
        assert wages.regular.subtotal == 153.33

    def test_gross_is_sum_of_rounded_subtotals(self):
        wages = compute_wages(HoursByType(regular=7.3, weekend=2.2, holiday=1.1, overtime=0.7), 17.77, 1.9, 1.3)

        subtotals = [wages.regular.subtotal, wages.weekend.subtotal, wages.holiday.subtotal, wages.overtime.subtotal]
        assert wages.gross_wages == round_cents(sum(subtotals))
        for line in (wages.regular, wages.weekend, wages.holiday, wages.overtime):
            assert line.subtotal == round_cents_product(line.hours, line.rate)

    def test_no_hours(self):
        assert compute_wages(HoursByType(), 25.0, 2.0, 1.5).gross_wages == 0


class TestRounding:

    @pytest.mark.parametrize("amount,expected", [
        (2.675, 2.68),
        (0.005, 0.01),
        (29.605, 29.61),
        (254.20000000000002, 254.2),
        (1.004, 1.0),
        (0, 0.0),
    ])
    def test_round_cents(self, amount, expected):
        assert round_cents(amount) == expected

    @pytest.mark.parametrize("amount", [0.01, 13.77355, 949.9, 1234.5678, 0.00062])
    def test_round_cents_is_idempotent(self, amount):
        once = round_cents(amount)
        assert round_cents(once) == once

    def test_round_rate(self):
        assert round_rate(0.116349) == 0.1163
        assert round_rate(0.11635) == 0.1164

    @pytest.mark.parametrize("amount,rate,expected", [
        (1007.50, 0.062, 62.47),
        (1022.50, 0.062, 63.40),
        (1016.25, 0.044, 44.72),
        (21.25, 0.044, 0.94),
        (1.5, 20.15, 30.23),
        (4100, 0.062, 254.20),
    ])
    def test_round_cents_product_half_cent(self, amount, rate, expected):
        assert round_cents_product(amount, rate) == expected

    def test_half_cent_subtotal_rounds_up(self):
        # 1.5 x 20.15 = 30.225 exactly
        wages = compute_wages(HoursByType(regular=1.5), 20.15, 1.0, 1.0)

        assert wages.regular.subtotal == 30.23
