"""
Recurrence expansion for lesson agreements.

Answers "on which calendar dates does a lesson anchored on weekday X with
frequency F take place?". Weekdays follow the database convention
(0=Sunday ... 6=Saturday), not Python's date.weekday().
"""

from datetime import date as date_type, timedelta
from typing import List, Optional, Union

from lessons import ExistingAgreementForSlot, LessonFrequency

DateLike = Union[str, date_type]

DAY_NAMES = ("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday")


def as_date(value: DateLike) -> date_type:
    """Accept a date or an ISO 'YYYY-MM-DD' string."""
    if isinstance(value, date_type):
        return value
    return date_type.fromisoformat(value)


def day_of_week_for(day: date_type) -> int:
    """Database weekday (0=Sunday) of a calendar date."""
    return (day.weekday() + 1) % 7


def day_name(day_of_week: int) -> str:
    if 0 <= day_of_week < len(DAY_NAMES):
        return DAY_NAMES[day_of_week]
    return "Unknown"


def db_day_to_display_day(db_index: int) -> int:
    """Database weekday (0=Sunday) to Monday-first display index."""
    return 6 if db_index == 0 else db_index - 1


def occurs_on(
    day: date_type,
    day_of_week: int,
    frequency: LessonFrequency,
    anchor: date_type,
    until: Optional[date_type] = None
) -> bool:
    """
    Whether a recurrence anchored at `anchor` has an occurrence on `day`.

    - daily / weekly: every matching weekday from the anchor on.
    - biweekly: matching weekdays in even weeks counted from the anchor.
    - monthly: matching weekdays whose day-of-month equals the anchor's.
      An anchor on the 31st simply yields nothing in shorter months.
    """
    if day < anchor:
        return False
    if until is not None and day > until:
        return False
    if day_of_week_for(day) != day_of_week:
        return False

    frequency = LessonFrequency(frequency)
    if frequency in (LessonFrequency.DAILY, LessonFrequency.WEEKLY):
        return True
    if frequency == LessonFrequency.BIWEEKLY:
        weeks_since_anchor = (day - anchor).days // 7
        return weeks_since_anchor % 2 == 0
    return day.day == anchor.day


def occurrence_dates_in_range(
    day_of_week: int,
    period_start: DateLike,
    period_end: DateLike,
    frequency: LessonFrequency,
    anchor: Optional[DateLike] = None,
    until: Optional[DateLike] = None
) -> List[date_type]:
    """
    Concrete dates within [period_start, period_end] (inclusive) on which the
    recurrence falls. Without an explicit anchor the period start is used,
    which is how a not-yet-booked lesson is evaluated.
    """
    period_start = as_date(period_start)
    period_end = as_date(period_end)
    anchor = as_date(anchor) if anchor is not None else period_start
    until = as_date(until) if until is not None else None

    # Jump straight to the first matching weekday, then walk week by week
    offset = (day_of_week - day_of_week_for(period_start)) % 7
    current = period_start + timedelta(days=offset)

    dates = []
    while current <= period_end:
        if occurs_on(current, day_of_week, frequency, anchor, until):
            dates.append(current)
        current += timedelta(days=7)
    return dates


def agreement_occurs_on(agreement: ExistingAgreementForSlot, day: DateLike) -> bool:
    """Whether the agreement has a lesson on `day`, using its own start date as anchor."""
    return occurs_on(
        as_date(day),
        agreement.day_of_week,
        agreement.frequency,
        anchor=agreement.start_date,
        until=agreement.end_date,
    )


def agreement_occurrences(agreement: ExistingAgreementForSlot,
                          period_start: DateLike, period_end: DateLike) -> List[date_type]:
    """All lesson dates of an agreement inside a period."""
    return occurrence_dates_in_range(
        agreement.day_of_week,
        period_start,
        period_end,
        agreement.frequency,
        anchor=agreement.start_date,
        until=agreement.end_date,
    )
