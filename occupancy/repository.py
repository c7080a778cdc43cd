"""
Persistence seam and slot finder.

The occupancy engine never talks to storage. `LessonRepository` is the
interface a backend (database, API, JSON file) implements; `SlotFinder`
performs the booking-wizard workflow on top of it: fetch, filter, project,
compute.
"""

import json
import logging
from abc import ABC, abstractmethod
from collections import defaultdict
from datetime import date as date_type
from typing import Dict, Iterable, List, Optional

from lessons import (
    AvailabilitySlot,
    ExistingAgreementForSlot,
    LessonAgreement,
    LessonType,
    SlotWithStatus,
    TeacherAvailability,
)
from .constants import DEFAULT_DURATION_MINUTES, DEFAULT_FREQUENCY
from .engine import compute_slot_statuses
from .recurrence import DateLike, as_date

logger = logging.getLogger(__name__)


class LessonTypeNotFound(LookupError):
    """Raised when the lesson type being booked does not exist."""


class LessonRepository(ABC):
    """Read access to the records the slot finder needs."""

    @abstractmethod
    def get_availability(self, teacher_id: str) -> List[AvailabilitySlot]:
        """All weekly availability windows of a teacher."""

    @abstractmethod
    def get_agreements(self, teacher_id: str) -> List[LessonAgreement]:
        """All agreements of a teacher, across every lesson type."""

    @abstractmethod
    def get_lesson_type(self, lesson_type_id: str) -> Optional[LessonType]:
        """A lesson type by id, or None."""


class InMemoryRepository(LessonRepository):
    """Dict-backed repository; also reads and writes the JSON data file."""

    def __init__(
        self,
        availability: Iterable[TeacherAvailability] = (),
        lesson_types: Iterable[LessonType] = (),
        agreements: Iterable[LessonAgreement] = ()
    ):
        # Index records for O(1) lookup
        self.availability: Dict[str, List[AvailabilitySlot]] = defaultdict(list)
        for entry in availability:
            self.availability[entry.teacher_id].extend(entry.slots)
        self.lesson_types: Dict[str, LessonType] = {lt.id: lt for lt in lesson_types}
        self.agreements: Dict[str, List[LessonAgreement]] = defaultdict(list)
        for agreement in agreements:
            self.agreements[agreement.teacher_id].append(agreement)

    def get_availability(self, teacher_id: str) -> List[AvailabilitySlot]:
        return list(self.availability.get(teacher_id, []))

    def get_agreements(self, teacher_id: str) -> List[LessonAgreement]:
        return list(self.agreements.get(teacher_id, []))

    def get_lesson_type(self, lesson_type_id: str) -> Optional[LessonType]:
        return self.lesson_types.get(lesson_type_id)

    def teacher_ids(self) -> List[str]:
        return sorted(set(self.availability) | set(self.agreements))

    # --- JSON persistence ---

    @classmethod
    def from_dict(cls, data: dict) -> "InMemoryRepository":
        """Re-hydrate pydantic models from plain JSON dicts."""
        return cls(
            availability=[TeacherAvailability(**item) for item in data.get("availability", [])],
            lesson_types=[LessonType(**item) for item in data.get("lesson_types", [])],
            agreements=[LessonAgreement(**item) for item in data.get("agreements", [])],
        )

    @classmethod
    def from_json(cls, filename: str) -> "InMemoryRepository":
        with open(filename, "r") as f:
            data = json.load(f)
        repo = cls.from_dict(data)
        logger.info(
            "Loaded %d teachers, %d lesson types, %d agreements from %s",
            len(repo.availability), len(repo.lesson_types),
            sum(len(v) for v in repo.agreements.values()), filename,
        )
        return repo

    def to_dict(self) -> dict:
        return {
            "availability": [
                TeacherAvailability(teacher_id=tid, slots=slots).model_dump(mode="json")
                for tid, slots in self.availability.items()
            ],
            "lesson_types": [lt.model_dump(mode="json") for lt in self.lesson_types.values()],
            "agreements": [
                a.model_dump(mode="json") for items in self.agreements.values() for a in items
            ],
        }

    def to_json(self, filename: str) -> None:
        with open(filename, "w") as f:
            json.dump(self.to_dict(), f, indent=2)
        logger.info("Saved lesson data to %s", filename)


class SlotFinder:
    """
    Computes the slot grid for booking a lesson type with a teacher.
    """

    def __init__(self, repository: LessonRepository):
        self.repository = repository

    def relevant_agreements(
        self,
        teacher_id: str,
        period_start: date_type,
        period_end: date_type,
        exclude_agreement_id: Optional[str] = None
    ) -> List[ExistingAgreementForSlot]:
        """
        Active agreements of the teacher in force during the period, projected
        onto their own lesson type's duration and frequency. The agreement
        being edited is left out so it does not block its own slot.
        """
        projected = []
        for agreement in self.repository.get_agreements(teacher_id):
            if not agreement.is_active:
                continue
            if exclude_agreement_id and agreement.id == exclude_agreement_id:
                continue
            if not agreement.overlaps_period(period_start, period_end):
                continue

            lesson_type = self.repository.get_lesson_type(agreement.lesson_type_id)
            if lesson_type is None:
                logger.warning(
                    "Lesson type %s of agreement %s not found, assuming %d min %s",
                    agreement.lesson_type_id, agreement.id,
                    DEFAULT_DURATION_MINUTES, DEFAULT_FREQUENCY.value,
                )
            projected.append(agreement.to_slot_agreement(
                lesson_type,
                default_duration=DEFAULT_DURATION_MINUTES,
                default_frequency=DEFAULT_FREQUENCY,
            ))
        return projected

    def find_slots(
        self,
        teacher_id: str,
        lesson_type_id: str,
        period_start: DateLike,
        period_end: DateLike,
        exclude_agreement_id: Optional[str] = None
    ) -> List[SlotWithStatus]:
        period_start = as_date(period_start)
        period_end = as_date(period_end)
        if period_end < period_start:
            raise ValueError("Period end cannot be before period start")

        lesson_type = self.repository.get_lesson_type(lesson_type_id)
        if lesson_type is None:
            raise LessonTypeNotFound(f"Lesson type {lesson_type_id} not found")

        availability = self.repository.get_availability(teacher_id)
        agreements = self.relevant_agreements(teacher_id, period_start, period_end, exclude_agreement_id)

        logger.info(
            "Finding %s slots for teacher %s (%s..%s): %d windows, %d agreements",
            lesson_type.name, teacher_id, period_start, period_end,
            len(availability), len(agreements),
        )
        return compute_slot_statuses(
            period_start,
            period_end,
            availability,
            agreements,
            lesson_type.duration_minutes,
            lesson_type.frequency,
        )
