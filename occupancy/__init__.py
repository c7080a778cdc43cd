"""
Occupancy package: time helpers, recurrence expansion, the slot-status
engine and the repository-backed slot finder.
"""

from .time_range import (
    SubSlot,
    time_to_minutes,
    minutes_to_time,
    time_ranges_overlap,
    split_time_range_into_slots,
    format_time_string
)

from .recurrence import (
    DAY_NAMES,
    day_name,
    day_of_week_for,
    occurs_on,
    occurrence_dates_in_range,
    agreement_occurs_on,
    agreement_occurrences
)

from .engine import (
    classify_slot,
    compute_slot_statuses
)

from .repository import (
    LessonRepository,
    InMemoryRepository,
    LessonTypeNotFound,
    SlotFinder
)

__all__ = [
    # --- Time & Interval Utilities ---
    "SubSlot",
    "time_to_minutes",
    "minutes_to_time",
    "time_ranges_overlap",
    "split_time_range_into_slots",
    "format_time_string",

    # --- Recurrence Expander ---
    "DAY_NAMES",
    "day_name",
    "day_of_week_for",
    "occurs_on",
    "occurrence_dates_in_range",
    "agreement_occurs_on",
    "agreement_occurrences",

    # --- Slot-Status Engine ---
    "classify_slot",
    "compute_slot_statuses",

    # --- Persistence seam ---
    "LessonRepository",
    "InMemoryRepository",
    "LessonTypeNotFound",
    "SlotFinder",
]
