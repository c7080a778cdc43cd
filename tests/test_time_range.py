from datetime import time

import pytest

from occupancy.time_range import (
    SubSlot,
    format_time_string,
    minutes_to_time,
    split_time_range_into_slots,
    time_ranges_overlap,
    time_to_minutes,
)


def test_time_to_minutes_parses_hours_and_minutes():
    assert time_to_minutes("00:00") == 0
    assert time_to_minutes("09:30") == 570
    assert time_to_minutes("23:59") == 1439


def test_time_to_minutes_ignores_seconds():
    assert time_to_minutes("14:15:59") == 855


def test_time_to_minutes_accepts_time_objects():
    assert time_to_minutes(time(8, 45)) == 525


def test_time_to_minutes_rejects_garbage():
    with pytest.raises(ValueError):
        time_to_minutes("ab:cd")


def test_minutes_to_time_pads():
    assert minutes_to_time(65) == "01:05"
    assert minutes_to_time(time_to_minutes("17:30")) == "17:30"


@pytest.mark.parametrize("a, b, expected", [
    ((540, 600), (600, 660), False),  # touching, before
    ((600, 660), (540, 600), False),  # touching, after
    ((540, 600), (700, 760), False),  # disjoint
    ((540, 720), (600, 660), True),   # contained
    ((540, 600), (570, 630), True),   # partial overlap
    ((540, 600), (540, 600), True),   # identical
])
def test_time_ranges_overlap_cases(a, b, expected):
    assert time_ranges_overlap(*a, *b) is expected
    assert time_ranges_overlap(*b, *a) is expected


def test_zero_length_interval_never_overlaps():
    assert not time_ranges_overlap(600, 600, 540, 720)
    assert not time_ranges_overlap(540, 720, 600, 600)


def test_split_time_range_into_whole_slots():
    assert split_time_range_into_slots("09:00", "11:00", 60) == [
        SubSlot("09:00", "10:00"),
        SubSlot("10:00", "11:00"),
    ]


@pytest.mark.parametrize("start, end, duration, count", [
    ("09:00", "12:00", 45, 4),
    ("09:00", "12:00", 30, 6),
    ("09:00", "09:30", 60, 0),
    ("16:15", "17:00", 20, 2),
])
def test_split_drops_remainder(start, end, duration, count):
    slots = split_time_range_into_slots(start, end, duration)
    assert len(slots) == count
    for prev, nxt in zip(slots, slots[1:]):
        assert prev.end_time == nxt.start_time
    for slot in slots:
        assert time_to_minutes(slot.end_time) - time_to_minutes(slot.start_time) == duration


def test_split_rejects_non_positive_duration():
    with pytest.raises(ValueError):
        split_time_range_into_slots("09:00", "10:00", 0)


def test_format_time_string():
    assert format_time_string("09:00:00") == "09:00"
    assert format_time_string(" 9:30 ") == "09:30"
    assert format_time_string("noon") == ""
    assert format_time_string("") == ""
