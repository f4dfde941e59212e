from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Role of the logged-in account; only students may punch."""

    STUDENT = "student"
    STAFF = "staff"
    ADMIN = "admin"


class AttendanceStatus(str, Enum):
    """Status code cached on each attendance row."""

    ON_TIME = "ON_TIME"
    LATE = "LATE"
    EARLY_LEAVE = "EARLY_LEAVE"
    LATE_AND_EARLY_LEAVE = "LATE_AND_EARLY_LEAVE"
    ABSENT = "ABSENT"

    @property
    def label(self) -> str:
        return _STATUS_LABELS[self]

    @classmethod
    def from_code(cls, code: str | None) -> "AttendanceStatus" | None:
        if not code:
            return None
        try:
            return cls(code)
        except ValueError:
            return None


_STATUS_LABELS = {
    AttendanceStatus.ON_TIME: "",
    AttendanceStatus.LATE: "Late",
    AttendanceStatus.EARLY_LEAVE: "Early leave",
    AttendanceStatus.LATE_AND_EARLY_LEAVE: "Late / Early leave",
    AttendanceStatus.ABSENT: "Absent",
}


class PunchType(str, Enum):
    AT_WORK = "AT_WORK"
    LEAVING = "LEAVING"
