"""
Slot data models for the lesson slot planner.

This module defines the 'Output' of the occupancy engine:
one entry per bookable sub-slot, with how many of its occurrences in the
evaluated period are already taken.
"""

from enum import Enum
from pydantic import BaseModel, Field, ConfigDict, model_validator


class SlotStatus(str, Enum):
    """Occupancy of a sub-slot over a period."""
    FREE = "free"
    PARTIAL = "partial"
    OCCUPIED = "occupied"


class SlotWithStatus(BaseModel):
    """
    A candidate lesson slot in the teacher's grid.
    Serialised with camelCase occurrence counters for the booking UI.
    """

    # --- Identity within the weekly grid ---
    day_of_week: int = Field(ge=0, le=6, description="0=Sunday, 6=Saturday")
    start_time: str = Field(description="Sub-slot start (HH:MM)")
    end_time: str = Field(description="Sub-slot end (HH:MM)")

    # --- Occupancy ---
    status: SlotStatus
    total_occurrences: int = Field(
        gt=0,
        alias="totalOccurrences",
        description="Dates the candidate lesson would take place in the period"
    )
    occupied_occurrences: int = Field(
        ge=0,
        alias="occupiedOccurrences",
        description="Dates that clash with at least one existing agreement"
    )

    @model_validator(mode='after')
    def validate_counts(self):
        if self.occupied_occurrences > self.total_occurrences:
            raise ValueError("occupied_occurrences cannot exceed total_occurrences")
        if self.occupied_occurrences == 0:
            expected = SlotStatus.FREE
        elif self.occupied_occurrences == self.total_occurrences:
            expected = SlotStatus.OCCUPIED
        else:
            expected = SlotStatus.PARTIAL
        if self.status != expected:
            raise ValueError(f"Status {self.status.value} does not match counts "
                             f"{self.occupied_occurrences}/{self.total_occurrences}")
        return self

    @property
    def is_selectable(self) -> bool:
        """Partial slots stay selectable; the teacher resolves the clashes."""
        return self.status != SlotStatus.OCCUPIED

    model_config = ConfigDict(frozen=True, populate_by_name=True, json_schema_extra={
        "example": {
            "day_of_week": 1,
            "start_time": "09:00",
            "end_time": "10:00",
            "status": "partial",
            "totalOccurrences": 4,
            "occupiedOccurrences": 2
        }
    })
