"""
Lesson type and lesson agreement data models for the lesson slot planner.

This module defines the 'Demand' side of the booking wizard:
1. LessonType (what is booked: duration and cadence)
2. LessonAgreement (a persisted recurring booking of a student with a teacher)
3. ExistingAgreementForSlot (the minimal projection the occupancy engine reads)
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field, model_validator, ConfigDict
from datetime import date

from .availability import TIME_PATTERN


class LessonFrequency(str, Enum):
    """Recurrence pattern of a lesson type."""
    DAILY = "daily"
    WEEKLY = "weekly"
    BIWEEKLY = "biweekly"
    MONTHLY = "monthly"


class LessonType(BaseModel):
    """A kind of lesson a teacher can give (e.g. 'Guitar 30 min')."""
    id: str = Field(description="Unique identifier")
    name: str = Field(min_length=1, description="Human-readable name")
    duration_minutes: int = Field(gt=0, description="Length of a single lesson")
    frequency: LessonFrequency = Field(
        default=LessonFrequency.WEEKLY,
        description="How often a lesson of this type recurs"
    )

    model_config = ConfigDict(json_schema_extra={
        "example": {
            "id": "lt_guitar_30",
            "name": "Guitar",
            "duration_minutes": 30,
            "frequency": "weekly"
        }
    })


class ExistingAgreementForSlot(BaseModel):
    """
    Occupancy-relevant projection of a lesson agreement.
    An agreement occupies exactly one weekday; its concrete occurrences are derived.
    """
    day_of_week: int = Field(ge=0, le=6, description="0=Sunday, 6=Saturday")
    start_time: str = Field(pattern=TIME_PATTERN, description="Lesson start (HH:MM[:SS])")
    duration_minutes: int = Field(gt=0, description="Lesson length")
    start_date: date = Field(description="First day the agreement is in force")
    end_date: Optional[date] = Field(default=None, description="Last day in force; None means open-ended")
    frequency: LessonFrequency = Field(default=LessonFrequency.WEEKLY)

    model_config = ConfigDict(frozen=True)


class LessonAgreement(BaseModel):
    """
    A recurring lesson booked between a student and a teacher.
    Duration and cadence come from the referenced lesson type.
    """

    # --- Core Identity ---
    id: str = Field(description="Unique identifier")
    teacher_id: str = Field(description="Teacher giving the lesson")
    student_id: str = Field(description="Student taking the lesson")
    lesson_type_id: str = Field(description="ID of the booked lesson type")

    # --- Timing ---
    day_of_week: int = Field(ge=0, le=6, description="0=Sunday, 6=Saturday")
    start_time: str = Field(pattern=TIME_PATTERN, description="Lesson start (HH:MM[:SS])")
    start_date: date = Field(description="First day the agreement is in force")
    end_date: Optional[date] = Field(default=None, description="Last day in force; None means open-ended")

    # --- Metadata ---
    is_active: bool = Field(default=True)
    notes: str = Field(default="", description="Free-form remarks")

    @model_validator(mode='after')
    def validate_dates(self):
        if self.end_date and self.end_date < self.start_date:
            raise ValueError("Agreement End Date cannot be before Start Date")
        return self

    def overlaps_period(self, period_start: date, period_end: date) -> bool:
        """True if the agreement is in force on at least one day of the period."""
        if self.start_date > period_end:
            return False
        return self.end_date is None or self.end_date >= period_start

    def to_slot_agreement(self, lesson_type: Optional[LessonType] = None,
                          default_duration: int = 30,
                          default_frequency: LessonFrequency = LessonFrequency.WEEKLY) -> ExistingAgreementForSlot:
        """Project onto the shape the occupancy engine needs."""
        return ExistingAgreementForSlot(
            day_of_week=self.day_of_week,
            start_time=self.start_time,
            duration_minutes=lesson_type.duration_minutes if lesson_type else default_duration,
            start_date=self.start_date,
            end_date=self.end_date,
            frequency=lesson_type.frequency if lesson_type else default_frequency,
        )

    model_config = ConfigDict(json_schema_extra={
        "example": {
            "id": "agr_001",
            "teacher_id": "t_anna",
            "student_id": "s_bram",
            "lesson_type_id": "lt_guitar_30",
            "day_of_week": 1,
            "start_time": "16:00",
            "start_date": "2025-09-01",
            "end_date": "2026-06-30",
            "is_active": True
        }
    })
