"""Tests for hours classification (daily and weekly overtime passes).

Dates are chosen to avoid federal holidays unless the test is about them:
- 2024-01-02..04: Tue-Thu
- 2024-01-06/07: Sat/Sun
- 2024-01-08..12: Mon-Fri (MLK Day is 2024-01-15)
"""

from datetime import date

import pytest

from carepay.sdk.hours import (
    apply_daily_overtime,
    apply_weekly_overtime,
    classify_hours,
)
from carepay.sdk.schemas import HoursByType, InvalidInputError, TimeEntry


def entry(day: str, hours: float, override: str = None) -> dict:
    data = {"date": day, "hours": hours}
    if override:
        data["day_type_override"] = override
    return data


WORKWEEK = ["2024-01-08", "2024-01-09", "2024-01-10", "2024-01-11", "2024-01-12"]


class TestDayTypes:
    """Hours land in the bucket for their day type."""

    def test_weekday_hours_are_regular(self):
        hours = classify_hours([entry("2024-01-02", 8), entry("2024-01-03", 8), entry("2024-01-04", 8)])

        assert hours == HoursByType(regular=24)

    def test_weekend_hours(self):
        hours = classify_hours([entry("2024-01-06", 8), entry("2024-01-07", 8)])

        assert hours.weekend == 16
        assert hours.regular == 0

    def test_federal_holiday_from_calendar(self):
        hours = classify_hours([entry("2024-07-04", 10)])

        assert hours.holiday == 10

    def test_override_beats_calendar(self):
        hours = classify_hours([
            entry("2024-01-02", 8, "holiday"),
            entry("2024-01-06", 5, "regular"),
        ])

        assert hours.holiday == 8
        assert hours.regular == 5
        assert hours.weekend == 0

    def test_custom_day_type_lookup(self):
        hours = classify_hours([entry("2024-01-02", 6)], day_type_lookup=lambda d: "weekend")

        assert hours.weekend == 6

    def test_unknown_day_type_from_lookup_raises(self):
        with pytest.raises(InvalidInputError, match="unknown day type"):
            classify_hours([entry("2024-01-02", 6)], day_type_lookup=lambda d: "vacation")


class TestDailyOvertime:
    """Hours beyond 12 on one entry are overtime."""

    def test_thirteen_hour_day(self):
        hours = classify_hours([entry("2024-01-02", 13)])

        assert hours.regular == 12
        assert hours.overtime == 1

    def test_exactly_twelve_hours_is_not_overtime(self):
        hours = classify_hours([entry("2024-01-02", 12)])

        assert hours == HoursByType(regular=12)

    def test_weekend_day_over_twelve(self):
        hours = classify_hours([entry("2024-01-06", 14)])

        assert hours.weekend == 12
        assert hours.overtime == 2

    def test_disabled(self):
        hours = classify_hours([entry("2024-01-02", 13)], disable_overtime=True)

        assert hours == HoursByType(regular=13)


class TestWeeklyOvertime:
    """Regular hours beyond 40 in the week are overtime."""

    def test_five_nine_hour_days(self):
        hours = classify_hours([entry(d, 9) for d in WORKWEEK])

        assert hours.regular == 40
        assert hours.overtime == 5

    def test_exactly_forty_regular_hours(self):
        hours = classify_hours([entry(d, 8) for d in WORKWEEK])

        assert hours == HoursByType(regular=40)

    def test_weekend_hours_do_not_count_toward_forty(self):
        entries = [entry(d, 8) for d in WORKWEEK] + [entry("2024-01-13", 12), entry("2024-01-14", 12)]

        hours = classify_hours(entries)

        assert hours.regular == 40
        assert hours.weekend == 24
        assert hours.overtime == 0

    def test_daily_and_weekly_are_additive(self):
        # 4 x 14h: daily gives 48 regular + 8 OT, weekly moves 8 more
        hours = classify_hours([entry(d, 14) for d in WORKWEEK[:4]])

        assert hours.regular == 40
        assert hours.overtime == 16

    def test_disabled(self):
        hours = classify_hours([entry(d, 9) for d in WORKWEEK], disable_overtime=True)

        assert hours == HoursByType(regular=45)


class TestPasses:
    """The two passes are usable on their own."""

    def test_daily_pass_leaves_weekly_excess(self):
        entries = [TimeEntry(date=date(2024, 1, 8 + i), hours=9) for i in range(5)]

        daily = apply_daily_overtime(entries)

        assert daily == HoursByType(regular=45)

    def test_weekly_pass(self):
        weekly = apply_weekly_overtime(HoursByType(regular=45, weekend=4, overtime=1))

        assert weekly == HoursByType(regular=40, weekend=4, overtime=6)

    def test_weekly_pass_disabled(self):
        hours = HoursByType(regular=45)

        assert apply_weekly_overtime(hours, disable_overtime=True) is hours


class TestEdgeCases:

    def test_no_entries(self):
        assert classify_hours([]) == HoursByType()

    def test_zero_hour_entry(self):
        assert classify_hours([entry("2024-01-02", 0)]) == HoursByType()

    def test_negative_hours_rejected(self):
        with pytest.raises(InvalidInputError, match="hours"):
            classify_hours([entry("2024-01-02", -1)])

    def test_bad_date_rejected(self):
        with pytest.raises(InvalidInputError, match="date"):
            classify_hours([entry("not-a-date", 8)])

    def test_nan_hours_rejected(self):
        with pytest.raises(InvalidInputError):
            classify_hours([entry("2024-01-02", float("nan"))])

    @pytest.mark.parametrize("entries", [
        [entry("2024-01-02", 13.5), entry("2024-01-06", 7.25), entry("2024-07-04", 15)],
        [entry(d, 11.75) for d in WORKWEEK],
        [entry(d, 16) for d in WORKWEEK] + [entry("2024-01-13", 3)],
    ])
    def test_hours_are_conserved(self, entries):
        for disable in (False, True):
            hours = classify_hours(entries, disable_overtime=disable)
            assert hours.total == pytest.approx(sum(e["hours"] for e in entries))
