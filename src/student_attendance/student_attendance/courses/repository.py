from __future__ import annotations

from datetime import date
from typing import Optional, Protocol

from .model import CourseHours


class CourseCalendar(Protocol):
    def is_work_day(self, course_id: Optional[int], training_date: date) -> bool:
        raise NotImplementedError

    def get_course_hours(self, course_id: Optional[int]) -> CourseHours:
        """Training start/end boundaries used for late/early-leave decisions."""

        raise NotImplementedError
