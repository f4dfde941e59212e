from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.factory import AttendanceStrategyFactory
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import StudentAttendanceService
from .common.datetime_utils import Clock, SystemClock
from .common.messages import DictMessageResolver, MessageResolver
from .common.training_time import TrainingTime
from .core.constants import DEFAULT_TRAINING_END, DEFAULT_TRAINING_START
from .courses.model import CourseHours
from .courses.mysql_course_repository import MySQLCourseCalendar
from .courses.repository import CourseCalendar
from .database.connection import DBConfig, DatabaseConnection


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    attendance_repo: AttendanceRepository
    course_calendar: CourseCalendar

    attendance_service: StudentAttendanceService


def build_service(
    attendance_repo: AttendanceRepository,
    course_calendar: CourseCalendar,
    *,
    clock: Optional[Clock] = None,
    resolver: Optional[MessageResolver] = None,
) -> StudentAttendanceService:
    return StudentAttendanceService(
        attendance_repo,
        course_calendar,
        clock=clock or SystemClock(),
        resolver=resolver or DictMessageResolver(),
        strategy_factory=AttendanceStrategyFactory(),
    )


def build_container(
    *,
    db_config: dict,
    training_start: str = DEFAULT_TRAINING_START,
    training_end: str = DEFAULT_TRAINING_END,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    default_hours = CourseHours(
        course_id=None,
        training_start=TrainingTime.parse(training_start),
        training_end=TrainingTime.parse(training_end),
    )
    attendance_repo = MySQLAttendanceRepository(conn)
    course_calendar = MySQLCourseCalendar(conn, default_hours=default_hours)

    return Container(
        conn=conn,
        attendance_repo=attendance_repo,
        course_calendar=course_calendar,
        attendance_service=build_service(attendance_repo, course_calendar),
    )
