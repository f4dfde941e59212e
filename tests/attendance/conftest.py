from __future__ import annotations

from datetime import date, datetime
from typing import Optional

import pytest

from src.student_attendance.student_attendance.attendance.model import (
    AttendanceManagementRow,
    AttendanceRecord,
    StoredAttendance,
)
from src.student_attendance.student_attendance.attendance.service import StudentAttendanceService
from src.student_attendance.student_attendance.common.datetime_utils import FixedClock
from src.student_attendance.student_attendance.common.training_time import TrainingTime
from src.student_attendance.student_attendance.core.enums import Role
from src.student_attendance.student_attendance.core.exceptions import DuplicateAttendanceError
from src.student_attendance.student_attendance.courses.model import CourseHours
from src.student_attendance.student_attendance.users.model import LoginUser

COURSE_ID = 3
TODAY = date(2024, 4, 1)


class InMemoryAttendance:
    def __init__(self):
        self._rows: dict[int, StoredAttendance] = {}
        self._id = 0
        self.inserted: list[AttendanceRecord] = []
        self.updated: list[StoredAttendance] = []
        self.batches = 0
        self.unfilled = 0
        self.conflict_on_insert = False

    def add(self, record: AttendanceRecord) -> StoredAttendance:
        self._id += 1
        row = StoredAttendance(attendance_id=self._id, record=record)
        self._rows[self._id] = row
        return row

    def find_by_user_and_date(self, lms_user_id: int, training_date: date) -> Optional[StoredAttendance]:
        for row in self._rows.values():
            if row.record.lms_user_id == lms_user_id and row.training_date == training_date and not row.record.delete_flg:
                return row
        return None

    def find_all_by_user(self, lms_user_id: int):
        rows = [r for r in self._rows.values() if r.record.lms_user_id == lms_user_id and not r.record.delete_flg]
        return sorted(rows, key=lambda r: r.training_date)

    def insert(self, record: AttendanceRecord) -> int:
        if self.conflict_on_insert or self.find_by_user_and_date(record.lms_user_id, record.training_date):
            raise DuplicateAttendanceError("duplicate")
        self.inserted.append(record)
        return self.add(record).attendance_id

    def update(self, row: StoredAttendance) -> bool:
        self.updated.append(row)
        self._rows[row.attendance_id] = row
        return True

    def save_all(self, *, inserts, updates) -> None:
        self.batches += 1
        for record in inserts:
            self.insert(record)
        for row in updates:
            self.update(row)

    def count_unfilled(self, lms_user_id: int, before_date: date) -> int:
        return self.unfilled

    def get_attendance_management(self, *, course_id, lms_user_id, today):
        return [
            AttendanceManagementRow(
                attendance_id=r.attendance_id,
                training_date=r.training_date,
                training_start_time=r.record.training_start_time,
                training_end_time=r.record.training_end_time,
                status=r.record.status,
                note=r.record.note,
                blank_time=r.record.blank_time,
                is_today=r.training_date == today,
            )
            for r in self.find_all_by_user(lms_user_id)
        ]


class FakeCalendar:
    def __init__(self, *, work_days: set[date], start: str = "09:00", end: str = "18:00"):
        self.work_days = work_days
        self.hours = CourseHours(
            course_id=COURSE_ID,
            training_start=TrainingTime.parse(start),
            training_end=TrainingTime.parse(end),
        )
        self.other_courses: dict[int, CourseHours] = {}

    def add_course(self, course_id: int, start: str, end: str) -> None:
        self.other_courses[course_id] = CourseHours(
            course_id=course_id,
            training_start=TrainingTime.parse(start),
            training_end=TrainingTime.parse(end),
        )

    def is_work_day(self, course_id, training_date: date) -> bool:
        return training_date in self.work_days

    def get_course_hours(self, course_id) -> CourseHours:
        return self.other_courses.get(course_id, self.hours)


@pytest.fixture
def hours() -> CourseHours:
    return CourseHours(course_id=COURSE_ID, training_start=TrainingTime(9, 0), training_end=TrainingTime(18, 0))


@pytest.fixture
def student() -> LoginUser:
    return LoginUser(lms_user_id=7, user_name="Student A", account_id=1, role=Role.STUDENT, course_id=COURSE_ID)


@pytest.fixture
def staff() -> LoginUser:
    return LoginUser(lms_user_id=90, user_name="Teacher", account_id=1, role=Role.STAFF, course_id=COURSE_ID)


@pytest.fixture
def attendance_repo() -> InMemoryAttendance:
    return InMemoryAttendance()


@pytest.fixture
def calendar() -> FakeCalendar:
    return FakeCalendar(work_days={TODAY})


@pytest.fixture
def make_service(attendance_repo, calendar):
    def _make(at: datetime) -> StudentAttendanceService:
        return StudentAttendanceService(attendance_repo, calendar, clock=FixedClock(at))

    return _make
