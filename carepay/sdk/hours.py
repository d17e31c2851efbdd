"""Hours classification with Colorado-style overtime.

Overtime is computed in two sequential passes over the hour buckets:

1. Daily: hours beyond 12 on any single entry are overtime.
2. Weekly: regular hours beyond 40 in the workweek are overtime.

The two triggers are additive, not "whichever yields more". Only hours
classified as regular count toward the weekly 40; weekend and holiday hours
never convert to overtime in the weekly pass. The caller is responsible for
passing one workweek's entries when weekly semantics matter.
"""

import logging
from typing import Iterable, Optional, Union

from .calendar import DayTypeLookup, get_day_type
from .schemas import DAY_TYPES, HoursByType, InvalidInputError, TimeEntry, parse_input

logger = logging.getLogger(__name__)

DAILY_OVERTIME_THRESHOLD = 12
WEEKLY_OVERTIME_THRESHOLD = 40


def _day_type_for(entry: TimeEntry, day_type_lookup: DayTypeLookup) -> str:
    if entry.day_type_override:
        return entry.day_type_override
    day_type = day_type_lookup(entry.date)
    if day_type not in DAY_TYPES:
        raise InvalidInputError(
            f"Calendar returned unknown day type '{day_type}' for {entry.date}. "
            f"Must be one of {DAY_TYPES}"
        )
    return day_type


def apply_daily_overtime(
    entries: Iterable[TimeEntry],
    disable_overtime: bool = False,
    day_type_lookup: Optional[DayTypeLookup] = None,
) -> HoursByType:
    """First pass: bucket each entry by day type, splitting off daily overtime.

    Args:
        entries: Validated time entries
        disable_overtime: If True, every hour stays in its day-type bucket
        day_type_lookup: Calendar used when an entry has no override

    Returns:
        HoursByType with daily overtime only
    """
    lookup = day_type_lookup or get_day_type
    buckets = {"regular": 0.0, "weekend": 0.0, "holiday": 0.0, "overtime": 0.0}

    for entry in entries:
        day_type = _day_type_for(entry, lookup)
        hours = entry.hours

        if not disable_overtime and hours > DAILY_OVERTIME_THRESHOLD:
            buckets["overtime"] += hours - DAILY_OVERTIME_THRESHOLD
            hours = DAILY_OVERTIME_THRESHOLD

        buckets[day_type] += hours
        logger.debug(f"{entry.date} {day_type}: {entry.hours}h -> {hours}h {day_type}")

    return HoursByType(**buckets)


def apply_weekly_overtime(hours: HoursByType, disable_overtime: bool = False) -> HoursByType:
    """Second pass: move regular hours beyond the weekly threshold into overtime."""
    if disable_overtime or hours.regular <= WEEKLY_OVERTIME_THRESHOLD:
        return hours

    excess = hours.regular - WEEKLY_OVERTIME_THRESHOLD
    logger.debug(f"weekly overtime: {hours.regular}h regular, moving {excess}h to overtime")
    return hours.model_copy(update={
        "regular": float(WEEKLY_OVERTIME_THRESHOLD),
        "overtime": hours.overtime + excess,
    })


def classify_hours(
    entries: Iterable[Union[TimeEntry, dict]],
    disable_overtime: bool = False,
    day_type_lookup: Optional[DayTypeLookup] = None,
) -> HoursByType:
    """Classify a workweek of time entries into regular/weekend/holiday/overtime.

    Args:
        entries: TimeEntry objects or dicts with date, hours, day_type_override
        disable_overtime: Skip both overtime passes
        day_type_lookup: Calendar for entries without day_type_override
            (default: federal holidays + weekends)

    Returns:
        HoursByType whose four buckets sum to the total entry hours

    Raises:
        InvalidInputError: If an entry is malformed (e.g. negative hours)
    """
    validated = [parse_input(TimeEntry, entry) for entry in entries]
    daily = apply_daily_overtime(validated, disable_overtime, day_type_lookup)
    return apply_weekly_overtime(daily, disable_overtime)
