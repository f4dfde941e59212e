from src.student_attendance.student_attendance.attendance.blank_time import blank_time_options, calc_blank_time


def test_calc_blank_time_display():
    assert calc_blank_time(90) == "1h 30m"
    assert calc_blank_time(60) == "1h"
    assert calc_blank_time(45) == "45m"


def test_calc_blank_time_none_is_absent_not_zero():
    assert calc_blank_time(None) is None
    assert calc_blank_time(0) == "0m"


def test_blank_time_options_are_quarter_hours_up_to_eight_hours():
    options = blank_time_options()

    assert list(options)[0] == 15
    assert list(options)[-1] == 480
    assert len(options) == 32
    assert options[75] == "1h 15m"
