"""
Presentation helpers for the slot grid.

The engine returns slots in availability order; the booking grid shows them
Monday first, grouped per weekday and sorted by start time.
"""

from typing import Dict, Iterable, List, Optional

from lessons import SlotStatus, SlotWithStatus
from .recurrence import db_day_to_display_day
from .time_range import format_time_string

STATUS_LABELS = {
    SlotStatus.FREE: "Free",
    SlotStatus.PARTIAL: "Partially occupied",
    SlotStatus.OCCUPIED: "Occupied",
}


def sort_slots_by_day_then_time(slots: Iterable[SlotWithStatus]) -> List[SlotWithStatus]:
    return sorted(
        slots,
        key=lambda s: (db_day_to_display_day(s.day_of_week), format_time_string(s.start_time)),
    )


def group_slots_by_day(slots: Iterable[SlotWithStatus]) -> Dict[int, List[SlotWithStatus]]:
    """Weekday -> slots of that day by start time, weekdays in Monday-first order."""
    grouped: Dict[int, List[SlotWithStatus]] = {}
    for slot in sort_slots_by_day_then_time(slots):
        grouped.setdefault(slot.day_of_week, []).append(slot)
    return grouped


def slot_label(slot: SlotWithStatus) -> str:
    if slot.status == SlotStatus.PARTIAL:
        return (f"{STATUS_LABELS[slot.status]} "
                f"({slot.occupied_occurrences}/{slot.total_occurrences} occurrences)")
    return STATUS_LABELS[slot.status]


def find_slot(slots: Iterable[SlotWithStatus], day_of_week: int, start_time: str) -> Optional[SlotWithStatus]:
    """The slot an existing agreement sits in, for pre-selection when editing."""
    wanted = format_time_string(start_time)
    for slot in slots:
        if slot.day_of_week == day_of_week and format_time_string(slot.start_time) == wanted:
            return slot
    return None
