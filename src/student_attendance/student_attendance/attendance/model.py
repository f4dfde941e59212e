from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date, datetime
from typing import Optional, Union

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one student's attendance for one training date.

    ``training_start_time``/``training_end_time`` hold ``HH:mm`` or "" when
    nothing was entered. ``status`` is derived from the two times.
    """

    lms_user_id: int
    training_date: date
    training_start_time: str
    training_end_time: str
    status: AttendanceStatus
    note: str = ""
    blank_time: Optional[int] = None
    account_id: Optional[int] = None
    delete_flg: bool = False
    first_create_user: Optional[int] = None
    first_create_date: Optional[datetime] = None
    last_modified_user: Optional[int] = None
    last_modified_date: Optional[datetime] = None

    def with_changes(self, **changes) -> "AttendanceRecord":
        return replace(self, **changes)


@dataclass(frozen=True)
class NewAttendance:
    """A row that has never been persisted; goes through ``insert``."""

    record: AttendanceRecord

    @property
    def training_date(self) -> date:
        return self.record.training_date


@dataclass(frozen=True)
class StoredAttendance:
    """A persisted row; goes through ``update`` and keeps its id."""

    attendance_id: int
    record: AttendanceRecord

    @property
    def training_date(self) -> date:
        return self.record.training_date

    def with_record(self, record: AttendanceRecord) -> "StoredAttendance":
        return StoredAttendance(attendance_id=self.attendance_id, record=record)


AttendanceRow = Union[NewAttendance, StoredAttendance]


@dataclass(frozen=True)
class AttendanceManagementRow:
    """Read-model for the attendance list screen (one row per training day)."""

    attendance_id: Optional[int]
    training_date: date
    training_start_time: str
    training_end_time: str
    status: Optional[AttendanceStatus]
    note: str = ""
    blank_time: Optional[int] = None
    section_name: Optional[str] = None
    is_today: bool = False
    blank_time_value: Optional[str] = None
    status_disp_name: Optional[str] = None
