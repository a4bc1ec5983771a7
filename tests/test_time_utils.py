from datetime import date

import pytest

from attendai.exceptions import ValidationError
from attendai.utils.time_utils import (
    compare_times,
    default_end_time,
    normalize_day,
    parse_time,
    to_12h,
    to_24h,
    validate_time,
    weekday_name,
)


@pytest.mark.parametrize(
    "text, minutes",
    [
        ("9:00", 540),
        ("09:00", 540),
        ("9:00am", 540),
        ("9:00 PM", 1260),
        ("9 pm", 1260),
        ("12:00 AM", 0),
        ("12:30 PM", 750),
        ("13:45", 825),
        ("", 0),
        ("noon", 0),
    ],
)
def test_parse_time(text, minutes):
    assert parse_time(text) == minutes


def test_compare_times_orders_twelve_hour_strings():
    assert compare_times("9:00 AM", "10:00 AM") < 0
    assert compare_times("9:00 PM", "10:00 AM") > 0
    assert compare_times("1:00 PM", "13:00") == 0


@pytest.mark.parametrize(
    "text, expected",
    [("9:00 AM", "09:00"), ("12:15 AM", "00:15"), ("4:05 PM", "16:05"), ("7:30", "07:30")],
)
def test_to_24h(text, expected):
    assert to_24h(text) == expected


@pytest.mark.parametrize(
    "text, expected",
    [("09:00", "9:00 AM"), ("00:15", "12:15 AM"), ("12:00", "12:00 PM"), ("16:05", "4:05 PM")],
)
def test_to_12h(text, expected):
    assert to_12h(text) == expected


def test_default_end_time():
    assert default_end_time("09:00") == "10:00"
    assert default_end_time("9:30 PM") == "22:30"
    assert default_end_time("23:15") == "00:15"


def test_weekday_name():
    assert weekday_name(date(2024, 1, 1)) == "Monday"
    assert weekday_name(date(2024, 1, 7)) == "Sunday"


def test_normalize_day():
    assert normalize_day(" wednesday ") == "Wednesday"
    assert normalize_day("Mon") == "Monday"
    assert normalize_day("TUES.") == "Tuesday"
    assert normalize_day("thurs") == "Thursday"
    with pytest.raises(ValidationError):
        normalize_day("Funday")


@pytest.mark.parametrize("text", ["9:00", " 9:00 am ", "12:00 AM", "00:15", "23:59", "9 pm"])
def test_validate_time_accepts_real_times(text):
    assert validate_time(text) == text.strip()


@pytest.mark.parametrize("text", ["abc", "25:00", "9:75", "13:00 PM", "0:30 am", "9:00 xyz", ""])
def test_validate_time_rejects_invalid_times(text):
    with pytest.raises(ValidationError):
        validate_time(text)
