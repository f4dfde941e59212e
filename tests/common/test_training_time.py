from datetime import datetime

import pytest

from src.student_attendance.student_attendance.common.datetime_utils import FixedClock
from src.student_attendance.student_attendance.common.training_time import (
    TrainingTime,
    format_optional,
    hour_of,
    minute_of,
)
from src.student_attendance.student_attendance.core.exceptions import ParseError


@pytest.mark.parametrize("text", ["9:5", "09:05", "0:0", "23:59", "18:00"])
def test_parse_format_parse_keeps_hour_and_minute(text):
    parsed = TrainingTime.parse(text)

    assert TrainingTime.parse(str(parsed)) == parsed
    assert TrainingTime.parse(parsed.formatted()) == parsed


def test_formatted_is_zero_padded_and_str_is_not():
    t = TrainingTime.parse("9:5")

    assert t.formatted() == "09:05"
    assert str(t) == "9:5"


@pytest.mark.parametrize("text", ["", "9", "9:5:0", "ab:cd", "25:00", "10:60"])
def test_parse_rejects_malformed_text(text):
    with pytest.raises(ParseError):
        TrainingTime.parse(text)


def test_compare_to_is_minute_difference():
    assert TrainingTime(9, 30).compare_to(TrainingTime(9, 0)) == 30
    assert TrainingTime(8, 0).compare_to(TrainingTime(9, 0)) == -60
    assert TrainingTime(9, 0).compare_to(TrainingTime(9, 0)) == 0
    assert TrainingTime(9, 1) > TrainingTime(9, 0)
    assert TrainingTime(17, 59) < TrainingTime(18, 0)


def test_empty_string_is_not_a_time():
    assert TrainingTime.parse_optional("") is None
    assert TrainingTime.parse_optional("  ") is None
    assert format_optional(None) == ""
    assert hour_of("") is None
    assert minute_of("") is None
    assert hour_of("09:45") == 9
    assert minute_of("09:45") == 45


def test_from_parts_treats_half_pair_as_empty():
    assert TrainingTime.from_parts(9, None) is None
    assert TrainingTime.from_parts(None, 30) is None
    assert TrainingTime.from_parts(9, 30) == TrainingTime(9, 30)


def test_now_reads_the_clock():
    clock = FixedClock(datetime(2024, 4, 1, 8, 59, 42))

    assert TrainingTime.now(clock) == TrainingTime(8, 59)
