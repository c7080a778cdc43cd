"""
Data models package for the lesson slot planner.

This package exports the three core pillars of the data architecture:
1. Supply (AvailabilitySlot, TeacherAvailability)
2. Demand (LessonType, LessonAgreement, ExistingAgreementForSlot)
3. Output (SlotWithStatus, SlotStatus)
"""

from .availability import (
    AvailabilitySlot,
    TeacherAvailability,
    TIME_PATTERN
)

from .agreement import (
    LessonFrequency,
    LessonType,
    LessonAgreement,
    ExistingAgreementForSlot
)

from .slot import (
    SlotWithStatus,
    SlotStatus
)

__all__ = [
    # --- Supply Models ---
    "AvailabilitySlot",
    "TeacherAvailability",
    "TIME_PATTERN",

    # --- Demand Models ---
    "LessonFrequency",
    "LessonType",
    "LessonAgreement",
    "ExistingAgreementForSlot",

    # --- Output Models ---
    "SlotWithStatus",
    "SlotStatus",
]
