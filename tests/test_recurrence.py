from datetime import date

from lessons import LessonFrequency
from occupancy.recurrence import (
    agreement_occurrences,
    agreement_occurs_on,
    day_name,
    day_of_week_for,
    db_day_to_display_day,
    occurrence_dates_in_range,
)

from conftest import FIRST_MONDAY, FOURTH_MONDAY, MONDAY, make_agreement


def test_day_of_week_uses_sunday_zero():
    assert day_of_week_for(date(2025, 3, 2)) == 0  # Sunday
    assert day_of_week_for(FIRST_MONDAY) == MONDAY
    assert day_of_week_for(date(2025, 3, 8)) == 6  # Saturday
    assert day_name(MONDAY) == "Monday"
    assert day_name(9) == "Unknown"


def test_display_day_puts_sunday_last():
    assert db_day_to_display_day(MONDAY) == 0
    assert db_day_to_display_day(0) == 6
    assert sorted(range(7), key=db_day_to_display_day) == [1, 2, 3, 4, 5, 6, 0]


def test_weekly_expansion_includes_boundaries():
    dates = occurrence_dates_in_range(MONDAY, FIRST_MONDAY, FOURTH_MONDAY, LessonFrequency.WEEKLY)
    assert dates == [date(2025, 3, 3), date(2025, 3, 10), date(2025, 3, 17), date(2025, 3, 24)]


def test_weekly_expansion_from_mid_week():
    dates = occurrence_dates_in_range(MONDAY, "2025-03-05", "2025-03-31", "weekly")
    assert dates == [date(2025, 3, 10), date(2025, 3, 17), date(2025, 3, 24), date(2025, 3, 31)]


def test_daily_behaves_like_weekly_on_a_single_weekday():
    weekly = occurrence_dates_in_range(MONDAY, FIRST_MONDAY, FOURTH_MONDAY, LessonFrequency.WEEKLY)
    daily = occurrence_dates_in_range(MONDAY, FIRST_MONDAY, FOURTH_MONDAY, LessonFrequency.DAILY)
    assert daily == weekly


def test_biweekly_skips_every_other_week():
    dates = occurrence_dates_in_range(MONDAY, FIRST_MONDAY, FOURTH_MONDAY, LessonFrequency.BIWEEKLY)
    assert dates == [date(2025, 3, 3), date(2025, 3, 17)]


def test_biweekly_counts_weeks_from_anchor_not_on_weekday():
    # Anchor on a Wednesday: the Monday five days later is week 0
    dates = occurrence_dates_in_range(
        MONDAY, FIRST_MONDAY, "2025-03-31", LessonFrequency.BIWEEKLY, anchor=date(2025, 3, 5)
    )
    assert dates == [date(2025, 3, 10), date(2025, 3, 24)]


def test_monthly_matches_day_of_month_of_anchor():
    dates = occurrence_dates_in_range(MONDAY, FIRST_MONDAY, "2025-06-30", LessonFrequency.MONTHLY)
    assert dates == [FIRST_MONDAY]


def test_empty_period_gives_no_dates():
    assert occurrence_dates_in_range(MONDAY, "2025-03-04", "2025-03-09", LessonFrequency.WEEKLY) == []


def test_agreement_respects_start_and_end_date():
    agreement = make_agreement(start_date=date(2025, 3, 10), end_date=date(2025, 3, 17))
    assert not agreement_occurs_on(agreement, FIRST_MONDAY)
    assert agreement_occurs_on(agreement, "2025-03-10")
    assert agreement_occurs_on(agreement, "2025-03-17")
    assert not agreement_occurs_on(agreement, FOURTH_MONDAY)


def test_agreement_only_on_its_weekday():
    agreement = make_agreement(frequency=LessonFrequency.DAILY)
    assert not agreement_occurs_on(agreement, "2025-03-04")


def test_monthly_agreement_on_the_31st_skips_short_months():
    agreement = make_agreement(frequency=LessonFrequency.MONTHLY, start_date=date(2025, 3, 31))
    assert agreement_occurrences(agreement, "2025-03-01", "2025-05-31") == [date(2025, 3, 31)]
    assert agreement_occurrences(agreement, "2026-02-01", "2026-02-28") == []
