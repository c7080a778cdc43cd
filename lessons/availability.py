"""
Availability data models for the lesson slot planner.

This module defines the 'Supply' side of the booking wizard:
the standing weekly windows in which a teacher is willing to give lessons.
"""

from typing import List, Tuple
from pydantic import BaseModel, Field, model_validator, ConfigDict

# HH:MM or HH:MM:SS, the shape of a PostgreSQL TIME column
TIME_PATTERN = r"^\d{1,2}:\d{2}(:\d{2})?$"


def clock_key(value: str) -> Tuple[int, int]:
    """(hours, minutes) of a time-of-day string, seconds ignored."""
    hours, minutes = value.split(":")[:2]
    return int(hours), int(minutes)


class AvailabilitySlot(BaseModel):
    """A recurring weekly window when a teacher is available."""
    day_of_week: int = Field(ge=0, le=6, description="0=Sunday, 6=Saturday")
    start_time: str = Field(pattern=TIME_PATTERN, description="Window start (HH:MM[:SS])")
    end_time: str = Field(pattern=TIME_PATTERN, description="Window end (HH:MM[:SS])")

    @model_validator(mode='after')
    def validate_times(self):
        if clock_key(self.start_time) >= clock_key(self.end_time):
            raise ValueError("End time must be strictly after start time")
        return self

    model_config = ConfigDict(frozen=True, json_schema_extra={
        "example": {
            "day_of_week": 1,
            "start_time": "09:00",
            "end_time": "12:00"
        }
    })


class TeacherAvailability(BaseModel):
    """All availability windows of one teacher."""
    teacher_id: str = Field(description="Teacher the windows belong to")
    slots: List[AvailabilitySlot] = Field(
        default_factory=list,
        description="Standard weekly teaching hours"
    )
