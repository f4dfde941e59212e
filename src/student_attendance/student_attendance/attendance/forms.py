from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from ..common.training_time import TrainingTime
from ..core.constants import EMPTY_TIME
from ..core.enums import AttendanceStatus


def _compose(hour: Optional[int], minute: Optional[int]) -> str:
    if hour is None and minute is None:
        return EMPTY_TIME
    return f"{'' if hour is None else hour}:{'' if minute is None else minute}"


@dataclass(frozen=True)
class DailyAttendanceEdit:
    """One submitted day of the attendance edit form."""

    training_date: date
    training_start_hour: Optional[int] = None
    training_start_minute: Optional[int] = None
    training_end_hour: Optional[int] = None
    training_end_minute: Optional[int] = None
    blank_time: Optional[int] = None
    note: str = ""
    status_disp_name: str = ""

    # Display-only values carried from the list screen.
    attendance_id: Optional[int] = None
    status: Optional[AttendanceStatus] = None
    section_name: Optional[str] = None
    is_today: bool = False
    disp_training_date: str = ""
    blank_time_value: Optional[str] = None

    @property
    def start_time_text(self) -> str:
        """Start as typed (``H:M``); "" when neither part was entered."""
        return _compose(self.training_start_hour, self.training_start_minute)

    @property
    def end_time_text(self) -> str:
        return _compose(self.training_end_hour, self.training_end_minute)

    @property
    def start(self) -> Optional[TrainingTime]:
        return TrainingTime.from_parts(self.training_start_hour, self.training_start_minute)

    @property
    def end(self) -> Optional[TrainingTime]:
        return TrainingTime.from_parts(self.training_end_hour, self.training_end_minute)


@dataclass(frozen=True)
class AttendanceForm:
    """Attendance edit form for one student over the course's training days."""

    lms_user_id: int
    course_id: Optional[int] = None
    user_name: str = ""
    leave_flg: bool = False
    leave_date: Optional[str] = None
    disp_leave_date: Optional[str] = None
    blank_times: dict[int, str] = field(default_factory=dict)
    training_hours: dict[int, str] = field(default_factory=dict)
    training_minutes: dict[int, str] = field(default_factory=dict)
    attendance_list: tuple[DailyAttendanceEdit, ...] = ()


def hour_options() -> dict[int, str]:
    return {h: str(h) for h in range(24)}


def minute_options() -> dict[int, str]:
    return {m: str(m) for m in range(60)}
