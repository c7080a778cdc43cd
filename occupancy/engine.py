"""
The Slot-Status Engine.

This module implements the occupancy computation behind the booking wizard.
For a candidate lesson (duration + frequency) and a concrete period it:
1. Slices every availability window into whole-duration sub-slots.
2. Expands the candidate's own lesson dates for each sub-slot.
3. Checks every date against all existing agreements and classifies the
   sub-slot as free, partial or occupied.

The engine is pure: no I/O, no shared state. Callers must pass ALL of a
teacher's agreements, across every lesson type, or a teacher busy with drums
would show up as free for guitar.
"""

import logging
from typing import Iterable, List

from lessons import (
    AvailabilitySlot,
    ExistingAgreementForSlot,
    LessonFrequency,
    SlotStatus,
    SlotWithStatus,
)
from .recurrence import DateLike, agreement_occurs_on, as_date, occurrence_dates_in_range
from .time_range import split_time_range_into_slots, time_ranges_overlap, time_to_minutes

logger = logging.getLogger(__name__)


def classify_slot(occupied_occurrences: int, total_occurrences: int) -> SlotStatus:
    """free if nothing clashes, occupied if everything clashes, partial otherwise."""
    if occupied_occurrences == 0:
        return SlotStatus.FREE
    if occupied_occurrences == total_occurrences:
        return SlotStatus.OCCUPIED
    return SlotStatus.PARTIAL


def _is_occupied(day, start_min: int, end_min: int,
                 agreements: List[ExistingAgreementForSlot]) -> bool:
    """First agreement with a lesson that day and an overlapping interval wins."""
    for agreement in agreements:
        if not agreement_occurs_on(agreement, day):
            continue
        agree_start = time_to_minutes(agreement.start_time)
        agree_end = agree_start + agreement.duration_minutes
        if time_ranges_overlap(start_min, end_min, agree_start, agree_end):
            return True
    return False


def compute_slot_statuses(
    period_start: DateLike,
    period_end: DateLike,
    availability_slots: Iterable[AvailabilitySlot],
    existing_agreements: Iterable[ExistingAgreementForSlot],
    duration_minutes: int,
    frequency: LessonFrequency
) -> List[SlotWithStatus]:
    """
    Status of every bookable sub-slot of the teacher's availability in the period.

    Sub-slots without a single candidate date in the period are left out.
    Output keeps availability order, then sub-slot order; sorting for display
    is up to the caller.
    """
    period_start = as_date(period_start)
    period_end = as_date(period_end)
    agreements = list(existing_agreements)
    result: List[SlotWithStatus] = []

    for avail in availability_slots:
        # Candidate dates depend only on the weekday, not on the sub-slot
        occurrence_dates = occurrence_dates_in_range(
            avail.day_of_week, period_start, period_end, frequency, anchor=period_start
        )
        total = len(occurrence_dates)
        if total == 0:
            continue

        for sub in split_time_range_into_slots(avail.start_time, avail.end_time, duration_minutes):
            start_min = time_to_minutes(sub.start_time)
            end_min = start_min + duration_minutes

            occupied = sum(
                1 for day in occurrence_dates
                if _is_occupied(day, start_min, end_min, agreements)
            )

            result.append(SlotWithStatus(
                day_of_week=avail.day_of_week,
                start_time=sub.start_time,
                end_time=sub.end_time,
                status=classify_slot(occupied, total),
                total_occurrences=total,
                occupied_occurrences=occupied,
            ))

    logger.debug(
        "Computed %d slot statuses for %s..%s (%d agreements, %d min, %s)",
        len(result), period_start, period_end, len(agreements), duration_minutes,
        LessonFrequency(frequency).value,
    )
    return result
