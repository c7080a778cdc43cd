"""
Time-of-day and minute-interval helpers.

All intervals are half-open [start, end) in minutes since midnight.
Inputs are assumed well-formed; malformed strings fail with the ValueError
raised by int().
"""

import re
from dataclasses import dataclass
from datetime import time as time_type
from typing import List, Union

TimeLike = Union[str, time_type]

_TIME_STRING = re.compile(r"^\d{1,2}:\d{2}(:\d{2})?$")


@dataclass(frozen=True)
class SubSlot:
    """A whole-duration piece of an availability window."""
    start_time: str
    end_time: str


def time_to_minutes(value: TimeLike) -> int:
    """'HH:MM' or 'HH:MM:SS' (seconds ignored) to minutes since midnight."""
    if isinstance(value, time_type):
        return value.hour * 60 + value.minute
    hours, minutes = value.split(":")[:2]
    return int(hours) * 60 + int(minutes)


def minutes_to_time(minutes: int) -> str:
    """Minutes since midnight to 'HH:MM'."""
    hours, mins = divmod(minutes, 60)
    return f"{hours:02d}:{mins:02d}"


def time_ranges_overlap(a_start: int, a_end: int, b_start: int, b_end: int) -> bool:
    """
    Standard overlap logic: StartA < EndB and StartB < EndA.
    Touching intervals do not overlap, and neither does an empty one.
    """
    if a_start >= a_end or b_start >= b_end:
        return False
    return a_start < b_end and b_start < a_end


def split_time_range_into_slots(start: TimeLike, end: TimeLike, duration_minutes: int) -> List[SubSlot]:
    """
    Cut [start, end) into consecutive sub-slots of exactly `duration_minutes`.
    A trailing remainder shorter than the duration is dropped.
    """
    if duration_minutes <= 0:
        raise ValueError("duration_minutes must be positive")

    start_min = time_to_minutes(start)
    end_min = time_to_minutes(end)

    slots = []
    cursor = start_min
    while cursor + duration_minutes <= end_min:
        slots.append(SubSlot(minutes_to_time(cursor), minutes_to_time(cursor + duration_minutes)))
        cursor += duration_minutes
    return slots


def format_time_string(value: str) -> str:
    """Display form 'HH:MM' of a stored time; empty string if it is not a time."""
    if not value or not isinstance(value, str):
        return ""
    trimmed = value.strip()
    if not _TIME_STRING.match(trimmed):
        return ""
    hours, minutes = trimmed.split(":")[:2]
    return f"{int(hours):02d}:{minutes}"
