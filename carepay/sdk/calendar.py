"""Day-type calendar for differential pay.

Classifies a calendar date as 'regular', 'weekend' or 'holiday'. Holidays
are the US federal holidays on their actual dates (no observed-day shifting,
since a caregiver who works on Saturday, July 4th is working the holiday),
plus any extra household holidays from profile.yaml.

Usage:
    from carepay.sdk.calendar import HolidayCalendar, get_day_type

    get_day_type(date(2024, 7, 4))                     # 'holiday'
    lookup = HolidayCalendar(["2024-12-24"])
    lookup(date(2024, 12, 24))                         # 'holiday'
"""

from datetime import date, datetime, timedelta
from functools import lru_cache
from typing import Callable, Dict, Iterable, Union

from .schemas import DayType, InvalidInputError

DayTypeLookup = Callable[[date], DayType]

SATURDAY = 5
MONDAY = 0
THURSDAY = 3


def _nth_weekday(year: int, month: int, weekday: int, n: int) -> date:
    """Date of the nth given weekday in a month (n=1 is the first)."""
    first = date(year, month, 1)
    offset = (weekday - first.weekday()) % 7
    return first + timedelta(days=offset + 7 * (n - 1))


def _last_weekday(year: int, month: int, weekday: int) -> date:
    """Date of the last given weekday in a month."""
    if month == 12:
        last = date(year, 12, 31)
    else:
        last = date(year, month + 1, 1) - timedelta(days=1)
    return last - timedelta(days=(last.weekday() - weekday) % 7)


@lru_cache(maxsize=32)
def federal_holidays(year: int) -> Dict[date, str]:
    """The ten paid federal holidays for a year.

    Juneteenth is not included; households that pay it add "YYYY-06-19"
    to the profile's holidays list.

    Args:
        year: Calendar year

    Returns:
        Dict mapping holiday date to holiday name
    """
    return {
        date(year, 1, 1): "New Year's Day",
        _nth_weekday(year, 1, MONDAY, 3): "Martin Luther King Jr. Day",
        _nth_weekday(year, 2, MONDAY, 3): "Presidents' Day",
        _last_weekday(year, 5, MONDAY): "Memorial Day",
        date(year, 7, 4): "Independence Day",
        _nth_weekday(year, 9, MONDAY, 1): "Labor Day",
        _nth_weekday(year, 10, MONDAY, 2): "Columbus Day",
        date(year, 11, 11): "Veterans Day",
        _nth_weekday(year, 11, THURSDAY, 4): "Thanksgiving Day",
        date(year, 12, 25): "Christmas Day",
    }


def parse_date(value: Union[str, date]) -> date:
    """Parse a date string in YYYY-MM-DD format."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except (TypeError, ValueError) as e:
        raise InvalidInputError(f"Invalid date '{value}'. Expected YYYY-MM-DD.") from e


def get_day_type(day: date, extra_holidays: Iterable[date] = ()) -> DayType:
    """Classify a date. Holiday wins over weekend, weekend over regular."""
    if day in federal_holidays(day.year) or day in extra_holidays:
        return "holiday"
    if day.weekday() >= SATURDAY:
        return "weekend"
    return "regular"


class HolidayCalendar:
    """Day-type lookup with household-specific extra holidays.

    Instances are callables matching DayTypeLookup and can be passed to
    classify_hours() or calculate_payroll().
    """

    def __init__(self, extra_holidays: Iterable[Union[str, date]] = ()):
        self.extra_holidays = frozenset(parse_date(d) for d in extra_holidays)

    def __call__(self, day: date) -> DayType:
        return get_day_type(day, self.extra_holidays)

    def holidays(self, year: int) -> Dict[date, str]:
        """Federal plus household holidays falling in a year, sorted by date."""
        result = dict(federal_holidays(year))
        for extra in self.extra_holidays:
            if extra.year == year:
                result.setdefault(extra, "Household holiday")
        return dict(sorted(result.items()))
