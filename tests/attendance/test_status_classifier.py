import pytest

from src.student_attendance.student_attendance.attendance.factory import AttendanceStrategyFactory, classify_status
from src.student_attendance.student_attendance.attendance.strategies.absent_strategy import AbsentStrategy
from src.student_attendance.student_attendance.attendance.strategies.late_strategy import LateStrategy
from src.student_attendance.student_attendance.attendance.strategies.normal_strategy import NormalStrategy
from src.student_attendance.student_attendance.common.training_time import TrainingTime
from src.student_attendance.student_attendance.core.enums import AttendanceStatus
from src.student_attendance.student_attendance.core.exceptions import StateConflictError


def t(text):
    return TrainingTime.parse(text)


def test_no_times_is_absent(hours):
    assert classify_status(None, None, hours) == AttendanceStatus.ABSENT


@pytest.mark.parametrize("start,end", [("09:01", "18:00"), ("10:00", "19:30"), ("09:30", None)])
def test_late_start_with_full_day_is_late_only(hours, start, end):
    assert classify_status(t(start), t(end) if end else None, hours) == AttendanceStatus.LATE


@pytest.mark.parametrize("start,end", [("09:00", "17:59"), ("08:30", "12:00")])
def test_on_time_start_with_early_end_is_early_leave(hours, start, end):
    assert classify_status(t(start), t(end), hours) == AttendanceStatus.EARLY_LEAVE


def test_late_and_early_leave(hours):
    assert classify_status(t("09:15"), t("17:00"), hours) == AttendanceStatus.LATE_AND_EARLY_LEAVE


@pytest.mark.parametrize("start,end", [("09:00", "18:00"), ("08:45", None), ("08:00", "20:00")])
def test_on_time(hours, start, end):
    assert classify_status(t(start), t(end) if end else None, hours) == AttendanceStatus.ON_TIME


def test_end_without_start_is_rejected(hours):
    with pytest.raises(StateConflictError):
        classify_status(None, t("18:00"), hours)


def test_factory_picks_strategy_per_flags(hours):
    factory = AttendanceStrategyFactory()

    assert isinstance(factory.for_times(start=None, end=None, hours=hours), AbsentStrategy)
    assert isinstance(factory.for_times(start=t("09:00"), end=t("18:00"), hours=hours), NormalStrategy)
    assert isinstance(factory.for_times(start=t("09:06"), end=None, hours=hours), LateStrategy)
