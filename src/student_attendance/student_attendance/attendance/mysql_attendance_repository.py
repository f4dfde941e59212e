from __future__ import annotations

from datetime import date
from typing import Any, Dict, Optional, Sequence

from mysql.connector.errors import IntegrityError

from ..core.enums import AttendanceStatus
from ..core.exceptions import DuplicateAttendanceError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import AttendanceManagementRow, AttendanceRecord, StoredAttendance
from .repository import AttendanceRepository

_COLUMNS = """
    student_attendance_id, lms_user_id, account_id, training_date,
    training_start_time, training_end_time, blank_time, status, note, delete_flg,
    first_create_user, first_create_date, last_modified_user, last_modified_date
"""


def _to_stored(r: Dict[str, Any]) -> StoredAttendance:
    return StoredAttendance(
        attendance_id=int(r["student_attendance_id"]),
        record=AttendanceRecord(
            lms_user_id=int(r["lms_user_id"]),
            account_id=r.get("account_id"),
            training_date=r["training_date"],
            training_start_time=r.get("training_start_time") or "",
            training_end_time=r.get("training_end_time") or "",
            blank_time=r.get("blank_time"),
            status=AttendanceStatus(r["status"]),
            note=r.get("note") or "",
            delete_flg=bool(r.get("delete_flg")),
            first_create_user=r.get("first_create_user"),
            first_create_date=r.get("first_create_date"),
            last_modified_user=r.get("last_modified_user"),
            last_modified_date=r.get("last_modified_date"),
        ),
    )


def _insert(cur, record: AttendanceRecord) -> int:
    try:
        cur.execute(
            """
            INSERT INTO t_student_attendance(
                lms_user_id, account_id, training_date, training_start_time, training_end_time,
                blank_time, status, note, delete_flg,
                first_create_user, first_create_date, last_modified_user, last_modified_date
            )
            VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
            """,
            (
                record.lms_user_id,
                record.account_id,
                record.training_date,
                record.training_start_time,
                record.training_end_time,
                record.blank_time,
                record.status.value,
                record.note,
                int(record.delete_flg),
                record.first_create_user,
                record.first_create_date,
                record.last_modified_user,
                record.last_modified_date,
            ),
        )
    except IntegrityError as e:
        # uq_attendance_live: one live row per (user, date)
        raise DuplicateAttendanceError(
            f"Attendance already exists for user {record.lms_user_id} on {record.training_date}"
        ) from e
    return int(cur.lastrowid)


def _update(cur, row: StoredAttendance) -> bool:
    record = row.record
    cur.execute(
        """
        UPDATE t_student_attendance
        SET account_id=%s, training_start_time=%s, training_end_time=%s, blank_time=%s,
            status=%s, note=%s, delete_flg=%s, last_modified_user=%s, last_modified_date=%s
        WHERE student_attendance_id=%s
        """,
        (
            record.account_id,
            record.training_start_time,
            record.training_end_time,
            record.blank_time,
            record.status.value,
            record.note,
            int(record.delete_flg),
            record.last_modified_user,
            record.last_modified_date,
            int(row.attendance_id),
        ),
    )
    return cur.rowcount > 0


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def find_by_user_and_date(self, lms_user_id: int, training_date: date) -> Optional[StoredAttendance]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM t_student_attendance
                WHERE lms_user_id=%s AND training_date=%s AND delete_flg=0
                """,
                (int(lms_user_id), training_date),
            )
            r = fetchone(cur)
            return _to_stored(r) if r else None

    def find_all_by_user(self, lms_user_id: int) -> Sequence[StoredAttendance]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM t_student_attendance
                WHERE lms_user_id=%s AND delete_flg=0
                ORDER BY training_date
                """,
                (int(lms_user_id),),
            )
            return [_to_stored(r) for r in fetchall(cur)]

    def insert(self, record: AttendanceRecord) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            return _insert(cur, record)

    def update(self, row: StoredAttendance) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            return _update(cur, row)

    def save_all(self, *, inserts: Sequence[AttendanceRecord], updates: Sequence[StoredAttendance]) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            for record in inserts:
                _insert(cur, record)
            for row in updates:
                _update(cur, row)

    def count_unfilled(self, lms_user_id: int, before_date: date) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT COUNT(*) AS unfilled
                FROM t_student_attendance
                WHERE lms_user_id=%s AND delete_flg=0 AND training_date < %s
                  AND status <> %s
                  AND (training_start_time = '' OR training_end_time = '')
                """,
                (int(lms_user_id), before_date, AttendanceStatus.ABSENT.value),
            )
            r = fetchone(cur)
            return int(r["unfilled"]) if r else 0

    def get_attendance_management(
        self,
        *,
        course_id: Optional[int],
        lms_user_id: int,
        today: date,
    ) -> Sequence[AttendanceManagementRow]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT
                    wd.training_date, wd.section_name,
                    sa.student_attendance_id, sa.training_start_time, sa.training_end_time,
                    sa.blank_time, sa.status, sa.note
                FROM course_work_days wd
                LEFT JOIN t_student_attendance sa
                    ON sa.training_date = wd.training_date AND sa.lms_user_id = %s AND sa.delete_flg = 0
                WHERE wd.course_id=%s AND wd.delete_flg=0
                ORDER BY wd.training_date
                """,
                (int(lms_user_id), course_id),
            )
            rows = fetchall(cur)
            return [
                AttendanceManagementRow(
                    attendance_id=int(r["student_attendance_id"]) if r.get("student_attendance_id") else None,
                    training_date=r["training_date"],
                    section_name=r.get("section_name"),
                    is_today=r["training_date"] == today,
                    training_start_time=r.get("training_start_time") or "",
                    training_end_time=r.get("training_end_time") or "",
                    blank_time=r.get("blank_time"),
                    status=AttendanceStatus.from_code(r.get("status")),
                    note=r.get("note") or "",
                )
                for r in rows
            ]
