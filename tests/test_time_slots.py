"""
Tests for the HH:MM helpers and the overlap rule
"""
import pytest

from unisport.exceptions import InvalidRequestError
from unisport.utils.time_slots import (
    duration_hours,
    normalize_time,
    parse_hour,
    parse_selected_times,
    slots_overlap,
)


def test_parse_hour_truncates_minutes():
    assert parse_hour("09:00") == 9
    assert parse_hour("09:59") == 9
    assert parse_hour("14") == 14


@pytest.mark.parametrize("value", ["", "ab:00", "25:00", "10:75", "1:2:3"])
def test_parse_hour_rejects_garbage(value):
    with pytest.raises(InvalidRequestError):
        parse_hour(value)


def test_normalize_time_pads_hours():
    assert normalize_time("9") == "09:00"
    assert normalize_time("09") == "09:00"
    assert normalize_time("7:30") == "07:30"


def test_parse_selected_times_splits_pairs():
    assert parse_selected_times("09-10,10-11") == [
        ("09:00", "10:00"),
        ("10:00", "11:00"),
    ]


def test_parse_selected_times_ignores_blank_entries():
    assert parse_selected_times(" 14-16 , ") == [("14:00", "16:00")]


@pytest.mark.parametrize("value", ["", "09", "09-", "09-10-11", ","])
def test_parse_selected_times_rejects_malformed(value):
    with pytest.raises(InvalidRequestError):
        parse_selected_times(value)


def test_duration_is_counted_in_whole_hours():
    assert duration_hours("09:00", "11:00") == 2
    assert duration_hours("09:30", "10:15") == 1


def test_slots_overlap_rules():
    # existing 9-10
    assert slots_overlap(9, 10, 9, 10)
    # new start inside existing
    assert slots_overlap(9, 11, 10, 12)
    # new end inside existing
    assert slots_overlap(9, 11, 8, 10)
    # new contains existing
    assert slots_overlap(9, 11, 8, 12)
    # adjacent ranges do not clash
    assert not slots_overlap(9, 10, 10, 11)
    assert not slots_overlap(10, 11, 9, 10)
