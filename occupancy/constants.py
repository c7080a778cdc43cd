"""Defaults shared by the slot finder, the report and the demo-data generator."""

from lessons import LessonFrequency

# Fallbacks when an agreement's lesson type cannot be resolved
DEFAULT_DURATION_MINUTES = 30
DEFAULT_FREQUENCY = LessonFrequency.WEEKLY

# Teacher availability grid
AVAILABILITY_START_HOUR = 9
AVAILABILITY_END_HOUR = 21
AVAILABILITY_STEP_MINUTES = 30


def availability_grid_times():
    """'HH:MM' rows of the availability grid, both ends included."""
    total = (AVAILABILITY_END_HOUR - AVAILABILITY_START_HOUR) * 60
    times = []
    for offset in range(0, total + 1, AVAILABILITY_STEP_MINUTES):
        hour = AVAILABILITY_START_HOUR + offset // 60
        times.append(f"{hour:02d}:{offset % 60:02d}")
    return times
