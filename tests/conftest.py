from datetime import date

import pytest

from lessons import (
    AvailabilitySlot,
    ExistingAgreementForSlot,
    LessonAgreement,
    LessonFrequency,
    LessonType,
    TeacherAvailability,
)
from occupancy import InMemoryRepository

MONDAY = 1
TUESDAY = 2

# Mondays in March 2025: 3, 10, 17, 24, 31
FIRST_MONDAY = date(2025, 3, 3)
FOURTH_MONDAY = date(2025, 3, 24)


@pytest.fixture
def monday_morning():
    return AvailabilitySlot(day_of_week=MONDAY, start_time="09:00", end_time="11:00")


def make_agreement(**overrides) -> ExistingAgreementForSlot:
    fields = {
        "day_of_week": MONDAY,
        "start_time": "09:00",
        "duration_minutes": 60,
        "start_date": date(2025, 1, 6),
        "end_date": None,
        "frequency": LessonFrequency.WEEKLY,
    }
    fields.update(overrides)
    return ExistingAgreementForSlot(**fields)


@pytest.fixture
def lesson_types():
    return [
        LessonType(id="guitar", name="Guitar", duration_minutes=30),
        LessonType(id="drums", name="Drums", duration_minutes=60),
        LessonType(id="theory", name="Theory", duration_minutes=60, frequency=LessonFrequency.BIWEEKLY),
    ]


@pytest.fixture
def repository(lesson_types):
    availability = TeacherAvailability(teacher_id="t_anna", slots=[
        AvailabilitySlot(day_of_week=MONDAY, start_time="09:00", end_time="11:00"),
        AvailabilitySlot(day_of_week=TUESDAY, start_time="14:00:00", end_time="15:00:00"),
    ])
    agreements = [
        # Drums lesson every Monday 09:00-10:00
        LessonAgreement(id="a_drums", teacher_id="t_anna", student_id="s1", lesson_type_id="drums",
                        day_of_week=MONDAY, start_time="09:00:00", start_date=date(2025, 1, 6)),
        # Ended before the period
        LessonAgreement(id="a_old", teacher_id="t_anna", student_id="s2", lesson_type_id="guitar",
                        day_of_week=MONDAY, start_time="10:00", start_date=date(2024, 9, 2),
                        end_date=date(2025, 2, 24)),
        # Inactive
        LessonAgreement(id="a_paused", teacher_id="t_anna", student_id="s3", lesson_type_id="guitar",
                        day_of_week=TUESDAY, start_time="14:00", start_date=date(2025, 1, 7),
                        is_active=False),
        # Another teacher's lesson at the same time
        LessonAgreement(id="a_other", teacher_id="t_bob", student_id="s4", lesson_type_id="guitar",
                        day_of_week=MONDAY, start_time="10:00", start_date=date(2025, 1, 6)),
    ]
    return InMemoryRepository(
        availability=[availability],
        lesson_types=lesson_types,
        agreements=agreements,
    )
