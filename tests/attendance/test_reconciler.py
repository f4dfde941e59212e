from datetime import date, datetime

from src.student_attendance.student_attendance.attendance.forms import DailyAttendanceEdit
from src.student_attendance.student_attendance.attendance.model import (
    AttendanceRecord,
    NewAttendance,
    StoredAttendance,
)
from src.student_attendance.student_attendance.attendance.reconciler import reconcile_daily_edits
from src.student_attendance.student_attendance.core.enums import AttendanceStatus

NOW = datetime(2024, 4, 5, 19, 0)
CREATED = datetime(2024, 4, 1, 9, 2)


def stored(attendance_id: int, day: date, **kwargs) -> StoredAttendance:
    record = AttendanceRecord(
        lms_user_id=7,
        training_date=day,
        training_start_time=kwargs.pop("start", "09:02"),
        training_end_time=kwargs.pop("end", ""),
        status=kwargs.pop("status", AttendanceStatus.LATE),
        first_create_user=7,
        first_create_date=CREATED,
        **kwargs,
    )
    return StoredAttendance(attendance_id=attendance_id, record=record)


def reconcile(edits, existing, hours):
    return reconcile_daily_edits(
        lms_user_id=7,
        edits=edits,
        existing=existing,
        hours=hours,
        actor_id=7,
        account_id=1,
        now=NOW,
    )


def test_late_day_scenario(hours):
    e = DailyAttendanceEdit(
        training_date=date(2024, 4, 1),
        training_start_hour=9,
        training_start_minute=30,
        training_end_hour=18,
        training_end_minute=0,
        blank_time=60,
        note="",
    )

    result = reconcile([e], [], hours)

    (row,) = result.rows
    assert isinstance(row, NewAttendance)
    assert row.record.training_start_time == "09:30"
    assert row.record.training_end_time == "18:00"
    assert row.record.status == AttendanceStatus.LATE
    assert row.record.blank_time == 60


def test_matching_date_keeps_id_and_creation_audit(hours):
    existing = [stored(41, date(2024, 4, 1))]
    e = DailyAttendanceEdit(
        training_date=date(2024, 4, 1),
        training_start_hour=8,
        training_start_minute=55,
        training_end_hour=18,
        training_end_minute=5,
        note="fixed",
    )

    result = reconcile([e], existing, hours)

    assert result.inserts == []
    (row,) = result.updates
    assert row.attendance_id == 41
    assert row.record.first_create_date == CREATED
    assert row.record.status == AttendanceStatus.ON_TIME
    assert row.record.note == "fixed"
    assert row.record.last_modified_date == NOW


def test_unmatched_date_becomes_new_row(hours):
    existing = [stored(41, date(2024, 4, 1))]
    e = DailyAttendanceEdit(training_date=date(2024, 4, 2), training_start_hour=9, training_start_minute=0)

    result = reconcile([e], existing, hours)

    assert [r.training_date for r in result.rows] == [date(2024, 4, 1), date(2024, 4, 2)]
    (new_row,) = result.inserts
    assert new_row.record.first_create_user == 7
    assert new_row.record.training_end_time == ""
    assert result.updates == []


def test_absent_label_without_times_stays_absent(hours):
    existing = [stored(41, date(2024, 4, 1), status=AttendanceStatus.ABSENT, start="", end="")]
    e = DailyAttendanceEdit(training_date=date(2024, 4, 1), status_disp_name=AttendanceStatus.ABSENT.label)

    result = reconcile([e], existing, hours)

    (row,) = result.updates
    assert row.record.training_start_time == ""
    assert row.record.training_end_time == ""
    assert row.record.status == AttendanceStatus.ABSENT


def test_clearing_times_reclassifies_as_absent(hours):
    existing = [stored(41, date(2024, 4, 1), end="18:00")]
    e = DailyAttendanceEdit(training_date=date(2024, 4, 1), status_disp_name=AttendanceStatus.LATE.label)

    result = reconcile([e], existing, hours)

    assert result.updates[0].record.status == AttendanceStatus.ABSENT


def test_untouched_existing_rows_are_kept_but_not_updated(hours):
    existing = [stored(41, date(2024, 4, 1)), stored(42, date(2024, 4, 2))]
    e = DailyAttendanceEdit(training_date=date(2024, 4, 2), training_start_hour=9, training_start_minute=0)

    result = reconcile([e], existing, hours)

    assert [r.attendance_id for r in result.rows] == [41, 42]
    assert [r.attendance_id for r in result.updates] == [42]
    assert result.rows[0] is existing[0]
