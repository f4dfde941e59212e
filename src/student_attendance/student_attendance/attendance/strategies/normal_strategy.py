from __future__ import annotations

from typing import Optional

from ...common.training_time import TrainingTime
from ...core.enums import AttendanceStatus
from ...courses.model import CourseHours
from .base import AttendanceStrategy, StatusDecision


class NormalStrategy(AttendanceStrategy):
    """Arrived on time and (if punched out) stayed until the end."""

    def decide(
        self,
        *,
        start: Optional[TrainingTime],
        end: Optional[TrainingTime],
        hours: CourseHours,
    ) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.ON_TIME)
