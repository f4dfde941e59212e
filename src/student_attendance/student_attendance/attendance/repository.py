from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import AttendanceManagementRow, AttendanceRecord, StoredAttendance


class AttendanceRepository(Protocol):
    """Persistence contract for student attendance rows.

    Finders only return rows whose soft-delete flag is off.
    """

    def find_by_user_and_date(self, lms_user_id: int, training_date: date) -> Optional[StoredAttendance]:
        raise NotImplementedError

    def find_all_by_user(self, lms_user_id: int) -> Sequence[StoredAttendance]:
        raise NotImplementedError

    def insert(self, record: AttendanceRecord) -> int:
        """Persist a new row and return its id.

        Raises ``DuplicateAttendanceError`` if the user already has a live row
        for that training date.
        """

        raise NotImplementedError

    def update(self, row: StoredAttendance) -> bool:
        raise NotImplementedError

    def save_all(self, *, inserts: Sequence[AttendanceRecord], updates: Sequence[StoredAttendance]) -> None:
        """Write a bulk edit as one unit: either every row is saved or none is."""

        raise NotImplementedError

    def count_unfilled(self, lms_user_id: int, before_date: date) -> int:
        """Days before ``before_date`` whose start or end time is still empty."""

        raise NotImplementedError

    def get_attendance_management(
        self,
        *,
        course_id: Optional[int],
        lms_user_id: int,
        today: date,
    ) -> Sequence[AttendanceManagementRow]:
        """Every training day of the course, joined with the user's rows."""

        raise NotImplementedError
