from __future__ import annotations

from datetime import date
from typing import Optional

from ..common.training_time import TrainingTime
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone, normalize_mysql_time
from .model import CourseHours
from .repository import CourseCalendar


class MySQLCourseCalendar(CourseCalendar):
    def __init__(self, conn_factory: DatabaseConnection, *, default_hours: CourseHours):
        self._conn_factory = conn_factory
        self._default_hours = default_hours

    def is_work_day(self, course_id: Optional[int], training_date: date) -> bool:
        if course_id is None:
            return False
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT 1 AS found
                FROM course_work_days
                WHERE course_id=%s AND training_date=%s AND delete_flg=0
                """,
                (int(course_id), training_date),
            )
            return fetchone(cur) is not None

    def get_course_hours(self, course_id: Optional[int]) -> CourseHours:
        if course_id is None:
            return self._default_hours
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT course_id, training_start_time, training_end_time
                FROM courses
                WHERE course_id=%s
                """,
                (int(course_id),),
            )
            r = fetchone(cur)
            if not r or r.get("training_start_time") is None or r.get("training_end_time") is None:
                return CourseHours(
                    course_id=course_id,
                    training_start=self._default_hours.training_start,
                    training_end=self._default_hours.training_end,
                )
            start = normalize_mysql_time(r["training_start_time"])
            end = normalize_mysql_time(r["training_end_time"])
            return CourseHours(
                course_id=int(r["course_id"]),
                training_start=TrainingTime(start.hour, start.minute),
                training_end=TrainingTime(end.hour, end.minute),
            )
